import time
from datetime import timedelta

import jwt
import pytest

from chatkit.errors import (
    TokenExpiredError,
    TokenMalformedError,
    TokenNotValidYetError,
    TokenUnknownError,
)
from chatkit.tokenverify import Token, UserType


@pytest.fixture
def tokens():
    return Token(expires=timedelta(hours=1), secret="secret")


def _claims(**overrides):
    now = int(time.time())
    claims = {"UserID": "u1", "UserType": 1, "PlatformID": 0, "exp": now + 3600, "nbf": now - 60, "iat": now}
    claims.update(overrides)
    return claims


@pytest.mark.parametrize("user_type", [UserType.NORMAL, UserType.ADMIN])
def test_round_trip(tokens, user_type):
    encoded = tokens.create_token("user-1", user_type)
    assert tokens.get_token(encoded) == ("user-1", user_type)


def test_claims_contents(tokens):
    encoded = tokens.create_token("user-1", UserType.ADMIN)
    claims = jwt.decode(encoded, "secret", algorithms=["HS256"])
    assert claims["UserID"] == "user-1"
    assert claims["UserType"] == UserType.ADMIN
    assert claims["PlatformID"] == 0
    assert claims["exp"] - claims["iat"] == 3600
    assert claims["iat"] - claims["nbf"] == 60


def test_create_rejects_unknown_type(tokens):
    with pytest.raises(TokenUnknownError, match="token type unknown"):
        tokens.create_token("user-1", 5)


def test_expired(tokens):
    expired = Token(expires=timedelta(seconds=-10), secret="secret")
    encoded = expired.create_token("user-1", UserType.NORMAL)
    with pytest.raises(TokenExpiredError):
        tokens.get_token(encoded)


def test_wrong_secret(tokens):
    other = Token(expires=timedelta(hours=1), secret="placeholder")
    encoded = other.create_token("user-1", UserType.NORMAL)
    with pytest.raises(TokenUnknownError):
        tokens.get_token(encoded)


def test_malformed(tokens):
    with pytest.raises(TokenMalformedError):
        tokens.get_token("not-a-token")


def test_not_valid_yet(tokens):
    now = int(time.time())
    encoded = jwt.encode(_claims(nbf=now + 600), "secret", algorithm="HS256")
    with pytest.raises(TokenNotValidYetError):
        tokens.get_token(encoded)


def test_platform_id_set_is_expired(tokens):
    encoded = jwt.encode(_claims(PlatformID=3), "secret", algorithm="HS256")
    with pytest.raises(TokenExpiredError):
        tokens.get_token(encoded)


def test_unknown_user_type_in_token(tokens):
    encoded = jwt.encode(_claims(UserType=9), "secret", algorithm="HS256")
    with pytest.raises(TokenUnknownError, match="token type unknown"):
        tokens.get_token(encoded)


def test_expired_takes_precedence_over_signature(tokens):
    now = int(time.time())
    encoded = jwt.encode(_claims(exp=now - 100), "placeholder", algorithm="HS256")
    with pytest.raises(TokenExpiredError):
        tokens.get_token(encoded)