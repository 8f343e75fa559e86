#!/usr/bin/env python3
"""Unit tests for JWT issue/verify."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import jwt
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "tools"))

from notekeep.auth.tokens import (
    DEFAULT_JWT_SECRET,
    Identity,
    TokenIssuer,
    create_token,
    verify_token,
)
from notekeep.errors import InvalidTokenError

SECRET = "test-secret-0123456789abcdef0123456789"


class TestCreateVerify:
    def test_round_trip(self):
        token = create_token("u-1", "a@x.com", SECRET)
        assert verify_token(token, SECRET) == Identity(user_id="u-1", email="a@x.com")

    def test_expiry_is_24_hours_by_default(self):
        token = create_token("u-1", "a@x.com", SECRET)
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert payload["exp"] - payload["iat"] == 24 * 3600
        assert payload["userId"] == "u-1"
        assert payload["email"] == "a@x.com"

    def test_tokens_are_unique(self):
        assert create_token("u-1", "a@x.com", SECRET) != create_token("u-1", "a@x.com", SECRET)

    def test_wrong_secret(self):
        token = create_token("u-1", "a@x.com", SECRET)
        with pytest.raises(InvalidTokenError):
            verify_token(token, "another-secret-0123456789abcdef01234")

    def test_expired(self):
        token = create_token("u-1", "a@x.com", SECRET, expiry_hours=-1)
        with pytest.raises(InvalidTokenError, match="expired"):
            verify_token(token, SECRET)

    def test_garbage(self):
        with pytest.raises(InvalidTokenError):
            verify_token("not.a.token", SECRET)

    def test_missing_exp(self):
        token = jwt.encode({"userId": "u-1", "email": "a@x.com"}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            verify_token(token, SECRET)

    def test_missing_identity_claims(self):
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"sub": "u-1", "exp": exp}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError, match="userId or email"):
            verify_token(token, SECRET)

    def test_unsigned_token_rejected(self):
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode(
            {"userId": "u-1", "email": "a@x.com", "exp": exp}, None, algorithm="none"
        )
        with pytest.raises(InvalidTokenError):
            verify_token(token, SECRET)


class TestTokenIssuer:
    def test_issue_verify(self):
        issuer = TokenIssuer(SECRET)
        identity = issuer.verify(issuer.issue("u-1", "a@x.com"))
        assert identity.user_id == "u-1"
        assert identity.email == "a@x.com"

    def test_configured_lifetime(self):
        issuer = TokenIssuer(SECRET, expiry_hours=2)
        payload = jwt.decode(issuer.issue("u-1", "a@x.com"), SECRET, algorithms=["HS256"])
        assert payload["exp"] - payload["iat"] == 2 * 3600

    def test_default_secret_warns(self):
        with pytest.warns(UserWarning, match="placeholder"):
            issuer = TokenIssuer()
        token = issuer.issue("u-1", "a@x.com")
        assert verify_token(token, DEFAULT_JWT_SECRET).user_id == "u-1"

    def test_issuers_with_different_secrets_disagree(self):
        token = TokenIssuer(SECRET).issue("u-1", "a@x.com")
        with pytest.raises(InvalidTokenError):
            TokenIssuer("other-secret-0123456789abcdef0123456").verify(token)
