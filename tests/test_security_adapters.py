"""Tests for password hashing and token signing adapters."""

from datetime import timedelta

import jwt
import pytest

from media_auth.adapters.bcrypt_password_hasher import BcryptPasswordHasher
from media_auth.adapters.jwt_token_issuer import JwtTokenIssuer


def test_bcrypt_hash_and_verify() -> None:
    hasher = BcryptPasswordHasher(rounds=4)

    digest = hasher.hash("secret1")

    assert digest != "secret1"
    assert digest.startswith("$2")
    assert hasher.verify("secret1", digest)
    assert not hasher.verify("secret2", digest)


def test_bcrypt_verify_rejects_malformed_digest() -> None:
    assert not BcryptPasswordHasher(rounds=4).verify("secret1", "not-a-digest")


def test_jwt_round_trip_adds_expiry() -> None:
    issuer = JwtTokenIssuer(secret="s3cret")

    token = issuer.sign({"id": "abc", "email": "a@b.co"}, timedelta(hours=1))
    claims = issuer.verify(token)

    assert claims["id"] == "abc"
    assert claims["exp"] - claims["iat"] == 3600


def test_jwt_rejects_expired_token() -> None:
    issuer = JwtTokenIssuer(secret="s3cret")
    token = issuer.sign({"id": "abc"}, timedelta(seconds=-10))

    with pytest.raises(ValueError, match="expired"):
        issuer.verify(token)


def test_jwt_rejects_foreign_signature() -> None:
    token = jwt.encode({"id": "abc"}, "other-secret", algorithm="HS256")

    with pytest.raises(ValueError, match="Invalid token"):
        JwtTokenIssuer(secret="s3cret").verify(token)
