"""bcrypt password hashing.

The salt is embedded in the bcrypt output, so a stored hash is all that is
needed to verify a password later.
"""

from __future__ import annotations

import bcrypt

from ..errors import ValidationError

DEFAULT_ROUNDS = 10

# bcrypt ignores (or, in newer releases, rejects) input past this length
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted bcrypt hash and constant-time verify.

    Args:
        rounds: bcrypt work factor (log2 of the iteration count). Tests use
                the minimum of 4 to stay fast.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self.rounds = rounds
        self._dummy_hash = bcrypt.hashpw(b"dummy", bcrypt.gensalt(rounds=rounds))

    def hash(self, plaintext: str) -> str:
        encoded = plaintext.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes long."
            )
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Check a plaintext password against a stored bcrypt hash."""
        encoded = plaintext.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            self.verify_dummy(plaintext)
            return False
        try:
            return bcrypt.checkpw(encoded, hashed.encode("utf-8"))
        except ValueError:
            # stored value is not a bcrypt hash
            self.verify_dummy(plaintext)
            return False

    def verify_dummy(self, plaintext: str) -> None:
        """Spend one verify's worth of work for a user that does not exist.

        Keeps unknown-email signin as slow as a wrong password so response
        timing does not reveal which emails are registered.
        """
        encoded = plaintext.encode("utf-8")[:MAX_PASSWORD_BYTES]
        bcrypt.checkpw(encoded, self._dummy_hash)
