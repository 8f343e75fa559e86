"""Signup and signin: input checks, hashing and token issuance."""

from __future__ import annotations

import logging
from typing import Any

from ..errors import AuthenticationError, ConflictError, ValidationError
from ..events import log_event
from ..models import User
from .passwords import PasswordHasher
from .store import CredentialStore
from .tokens import TokenIssuer

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 4

INVALID_CREDENTIALS = "Invalid email or password."


def _present(value: Any) -> bool:
    return isinstance(value, str) and value != ""


class AuthService:
    def __init__(
        self,
        credentials: CredentialStore,
        hasher: PasswordHasher,
        issuer: TokenIssuer,
    ) -> None:
        self.credentials = credentials
        self.hasher = hasher
        self.issuer = issuer

    def signup(self, email: Any, password: Any, confirm_password: Any) -> tuple[User, str]:
        """Register a user and return it with a fresh token.

        Raises:
            ValidationError: a field is missing, the passwords differ, or the
                password is shorter than MIN_PASSWORD_LENGTH.
            ConflictError: the email is already registered.
        """
        if not (_present(email) and _present(password) and _present(confirm_password)):
            raise ValidationError("Email, password, and confirmPassword are required.")
        if password != confirm_password:
            raise ValidationError("Passwords do not match.")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
            )

        # checked again inside create()
        if self.credentials.find_by_email(email) is not None:
            raise ConflictError("Email already registered.")

        user = self.credentials.create(email, self.hasher.hash(password))
        token = self.issuer.issue(user.id, user.email)
        logger.info(f"User registered with email {email}")
        log_event("user_signed_up", component="auth", user_id=user.id, email=email)
        return user, token

    def signin(self, email: Any, password: Any) -> tuple[User, str]:
        """Check credentials and return the user with a fresh token.

        Unknown email and wrong password raise the same AuthenticationError.
        """
        if not (_present(email) and _present(password)):
            raise ValidationError("Email and password are required.")

        user = self.credentials.find_by_email(email)
        if user is None:
            self.hasher.verify_dummy(password)
            valid = False
        else:
            valid = self.hasher.verify(password, user.password_hash)

        if not valid:
            log_event("signin_failed", component="auth", email=email)
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = self.issuer.issue(user.id, user.email)
        logger.info(f"User logged in with email {email}")
        log_event("user_signed_in", component="auth", user_id=user.id, email=email)
        return user, token
