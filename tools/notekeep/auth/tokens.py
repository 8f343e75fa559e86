"""JWT token creation and verification helpers.

Uses PyJWT with HS256 algorithm for signing.
Tokens carry userId, email, a random jti and an expiry timestamp. They are
stateless: nothing is stored server side, so a token stays valid until it
expires and "logout" is the client discarding it.
"""

from __future__ import annotations

import uuid
import warnings
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from ..errors import InvalidTokenError

ALGORITHM = "HS256"

DEFAULT_EXPIRY_HOURS = 24

# Used when no secret is configured. Anyone who reads this file can mint tokens.
DEFAULT_JWT_SECRET = "CHANGE-ME-notekeep-insecure-default-secret"


@dataclass(frozen=True)
class Identity:
    """Who a verified token says the caller is."""

    user_id: str
    email: str


def create_token(
    user_id: str,
    email: str,
    secret: str,
    expiry_hours: float = DEFAULT_EXPIRY_HOURS,
) -> str:
    """Create a signed JWT token for a user.

    Args:
        user_id: Unique identifier for the user.
        email: Email the user signed up with.
        secret: Secret key used for HS256 signing.
        expiry_hours: Token validity duration in hours (default 24).

    Returns:
        Encoded JWT string.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "email": email,
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": now + timedelta(hours=expiry_hours),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_token(token: str, secret: str) -> Identity:
    """Verify a JWT token and extract the identity it asserts.

    Raises:
        InvalidTokenError: if the token is expired, malformed, has an invalid
            signature, carries no ``exp`` claim, or lacks ``userId``/``email``.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise InvalidTokenError("Token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError(f"Invalid token: {exc}") from exc

    user_id = payload.get("userId")
    email = payload.get("email")
    if not isinstance(user_id, str) or not isinstance(email, str):
        raise InvalidTokenError("Token payload is missing userId or email.")
    return Identity(user_id=user_id, email=email)


class TokenIssuer:
    """Issues and verifies identity tokens with a fixed secret and lifetime.

    Args:
        secret: HS256 signing key. Falls back to DEFAULT_JWT_SECRET when empty.
        expiry_hours: Token validity duration in hours (default 24).
    """

    def __init__(
        self,
        secret: str = "",
        expiry_hours: float = DEFAULT_EXPIRY_HOURS,
    ) -> None:
        secret = secret or DEFAULT_JWT_SECRET
        if "CHANGE-ME" in secret:
            warnings.warn("jwt_secret contains placeholder value; tokens will be insecure")
        self._secret = secret
        self.expiry_hours = expiry_hours

    def issue(self, user_id: str, email: str) -> str:
        return create_token(user_id, email, self._secret, self.expiry_hours)

    def verify(self, token: str) -> Identity:
        return verify_token(token, self._secret)
