#!/usr/bin/env python3
"""Unit tests for signup/signin."""

import json
import sys
from pathlib import Path

import bcrypt
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "tools"))

from notekeep.auth.passwords import PasswordHasher
from notekeep.auth.service import INVALID_CREDENTIALS, AuthService
from notekeep.auth.store import CredentialStore
from notekeep.auth.tokens import TokenIssuer
from notekeep.errors import AuthenticationError, ConflictError, ValidationError

from fakes import MemoryStorage

SECRET = "test-secret-0123456789abcdef0123456789"


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def issuer():
    return TokenIssuer(SECRET)


@pytest.fixture
def service(storage, issuer):
    return AuthService(CredentialStore(storage), PasswordHasher(rounds=4), issuer)


class TestSignup:
    def test_token_matches_created_user(self, service, issuer):
        user, token = service.signup("a@x.com", "1234", "1234")
        identity = issuer.verify(token)
        assert identity.user_id == user.id
        assert identity.email == user.email == "a@x.com"

    def test_plaintext_never_stored(self, service, storage):
        service.signup("a@x.com", "s3cret-pass", "s3cret-pass")
        dumped = json.dumps(storage.records)
        assert "s3cret-pass" not in dumped
        assert "password" not in storage.records[0]
        assert storage.records[0]["passwordHash"].startswith("$2b$")

    @pytest.mark.parametrize(
        "email,password,confirm",
        [
            ("", "1234", "1234"),
            ("a@x.com", "", "1234"),
            ("a@x.com", "1234", ""),
            (None, "1234", "1234"),
            ("a@x.com", 1234, 1234),
        ],
    )
    def test_missing_fields(self, service, email, password, confirm):
        with pytest.raises(ValidationError, match="required"):
            service.signup(email, password, confirm)

    def test_mismatch(self, service):
        with pytest.raises(ValidationError, match="do not match"):
            service.signup("a@x.com", "1234", "12345")

    def test_too_short(self, service, storage):
        with pytest.raises(ValidationError, match="at least 4"):
            service.signup("a@x.com", "123", "123")
        assert storage.records == []

    @pytest.mark.parametrize("password", ["1234", "different-password"])
    def test_duplicate_email_conflicts_regardless_of_password(self, service, password):
        service.signup("a@x.com", "1234", "1234")
        with pytest.raises(ConflictError):
            service.signup("a@x.com", password, password)


class TestSignin:
    def test_signin_issues_new_token_for_same_identity(self, service, issuer):
        user, t1 = service.signup("a@x.com", "1234", "1234")
        signed_in, t2 = service.signin("a@x.com", "1234")
        assert signed_in.id == user.id
        assert t1 != t2
        assert issuer.verify(t2) == issuer.verify(t1)

    def test_wrong_password_and_unknown_email_look_identical(self, service):
        service.signup("a@x.com", "1234", "1234")

        with pytest.raises(AuthenticationError) as wrong_password:
            service.signin("a@x.com", "4321")
        with pytest.raises(AuthenticationError) as unknown_email:
            service.signin("nobody@x.com", "1234")

        assert wrong_password.value.message == unknown_email.value.message == INVALID_CREDENTIALS
        assert wrong_password.value.status == unknown_email.value.status == 401

    def test_missing_fields(self, service):
        with pytest.raises(ValidationError, match="required"):
            service.signin("a@x.com", "")
        with pytest.raises(ValidationError, match="required"):
            service.signin(None, "1234")


@pytest.mark.parametrize("password", ["4321", "z" * 73])
def test_known_and_unknown_email_do_same_bcrypt_work(service, monkeypatch, password):
    service.signup("a@x.com", "1234", "1234")

    calls = []
    real_checkpw = bcrypt.checkpw

    def counting_checkpw(*args):
        calls.append(args)
        return real_checkpw(*args)

    monkeypatch.setattr(bcrypt, "checkpw", counting_checkpw)

    with pytest.raises(AuthenticationError):
        service.signin("a@x.com", password)
    known = len(calls)

    with pytest.raises(AuthenticationError):
        service.signin("nobody@x.com", password)
    unknown = len(calls) - known

    assert known == unknown == 1
