"""Bearer-token guard in front of every note operation."""

from __future__ import annotations

from typing import Optional

from ..errors import Forbidden, InvalidTokenError, Unauthenticated
from .tokens import Identity, TokenIssuer


def bearer_token(header: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not header:
        return None
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


class AuthGate:
    """Resolves a presented token to the caller's identity.

    The identity's ``user_id`` is the owner passed to the note store, so a
    caller can only ever reach their own notes.
    """

    def __init__(self, issuer: TokenIssuer) -> None:
        self.issuer = issuer

    def authorize(self, token: Optional[str]) -> Identity:
        """Return the identity behind ``token``.

        Raises:
            Unauthenticated: no token was presented.
            Forbidden: the token is invalid or expired.
        """
        if not token:
            raise Unauthenticated("Access token required.")
        try:
            return self.issuer.verify(token)
        except InvalidTokenError as exc:
            raise Forbidden("Invalid or expired token.") from exc
