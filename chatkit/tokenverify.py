"""Creation and verification of signed user tokens."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass
from datetime import timedelta

import jwt

from chatkit.errors import (
    TokenExpiredError,
    TokenMalformedError,
    TokenNotValidYetError,
    TokenUnknownError,
)

_HMAC_ALGORITHMS = ["HS256", "HS384", "HS512"]


class UserType(enum.IntEnum):
    """Kinds of token holder."""

    NORMAL = 1
    ADMIN = 2


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class Token:
    """Signs and verifies tokens with a shared secret."""

    expires: timedelta
    secret: str

    def _build_claims(self, user_id: str, user_type: int) -> dict:
        now = time.time()
        return {
            "UserID": user_id,
            "UserType": int(user_type),
            "PlatformID": 0,
            "exp": int(now + self.expires.total_seconds()),
            "nbf": int(now - 60),
            "iat": int(now),
        }

    def _parse(self, token: str) -> tuple[str, int]:
        try:
            claims = jwt.decode(token, options={"verify_signature": False})
        except jwt.InvalidTokenError as exc:
            raise TokenMalformedError() from exc

        for key in ("exp", "nbf", "iat"):
            if key in claims and not _is_number(claims[key]):
                raise TokenMalformedError()
        user_id = claims.get("UserID", "")
        user_type = claims.get("UserType", 0)
        platform_id = claims.get("PlatformID", 0)
        if not isinstance(user_id, str) or not _is_int(user_type) or not _is_int(platform_id):
            raise TokenMalformedError()

        now = time.time()
        expired = "exp" in claims and not now < claims["exp"]
        not_yet = "nbf" in claims and now < claims["nbf"]
        issued_later = "iat" in claims and now < claims["iat"]

        try:
            jwt.decode(
                token,
                self.secret,
                algorithms=_HMAC_ALGORITHMS,
                options={
                    "verify_exp": False,
                    "verify_nbf": False,
                    "verify_iat": False,
                    "verify_aud": False,
                    "verify_iss": False,
                },
            )
            signature_ok = True
        except jwt.InvalidTokenError:
            signature_ok = False

        if expired:
            raise TokenExpiredError()
        if not_yet:
            raise TokenNotValidYetError()
        if issued_later or not signature_ok:
            raise TokenUnknownError()
        if platform_id != 0:
            raise TokenExpiredError()
        return user_id, user_type

    def create_token(self, user_id: str, user_type: int) -> str:
        """Return a signed token for the user."""
        if user_type not in (UserType.NORMAL, UserType.ADMIN):
            raise TokenUnknownError("token type unknown")
        return jwt.encode(self._build_claims(user_id, user_type), self.secret, algorithm="HS256")

    def get_token(self, token: str) -> tuple[str, UserType]:
        """Verify the token and return its user ID and user type."""
        user_id, user_type = self._parse(token)
        if user_type not in (UserType.NORMAL, UserType.ADMIN):
            raise TokenUnknownError("token type unknown")
        return user_id, UserType(user_type)