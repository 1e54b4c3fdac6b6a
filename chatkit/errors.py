"""Error types carrying a numeric code, a message and an optional detail."""

from __future__ import annotations

import copy


class CodeError(Exception):
    """An error identified by a numeric code."""

    default_code = 0
    default_message = "CodeError"

    def __init__(self, message: str | None = None, *, code: int | None = None, detail: str = ""):
        self.code = type(self).default_code if code is None else code
        self.message = type(self).default_message if message is None else message
        self.detail = detail
        super().__init__(self.message)

    def with_detail(self, detail: str) -> "CodeError":
        """Return a copy of this error carrying the given detail."""
        other = copy.copy(self)
        other.detail = detail
        return other

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code}, message={self.message!r}, detail={self.detail!r})"


class ArgsError(CodeError, ValueError):
    """A request argument is missing or invalid."""

    default_code = 1001
    default_message = "ArgsError"


class NoPermissionError(CodeError):
    """The caller may not perform the operation."""

    default_code = 1002
    default_message = "NoPermissionError"


class RecordNotFoundError(CodeError):
    """A requested record does not exist."""

    default_code = 1004
    default_message = "RecordNotFoundError"


class TokenError(CodeError):
    """Base class of token verification failures."""


class TokenExpiredError(TokenError):
    """The token has expired."""

    default_code = 1501
    default_message = "TokenExpiredError"


class TokenMalformedError(TokenError):
    """The token cannot be decoded."""

    default_code = 1503
    default_message = "TokenMalformedError"


class TokenNotValidYetError(TokenError):
    """The token is not valid yet."""

    default_code = 1504
    default_message = "TokenNotValidYetError"


class TokenUnknownError(TokenError):
    """The token failed verification for another reason."""

    default_code = 1505
    default_message = "TokenUnknownError"