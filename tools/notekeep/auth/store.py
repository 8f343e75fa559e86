"""JSON-backed credential store: one record per email, bcrypt hash only."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from ..errors import ConflictError
from ..models import User
from ..storage import RecordStorage

logger = logging.getLogger(__name__)


class CredentialStore:
    """Owns the user record collection.

    Every call re-reads the whole collection from storage; ``create`` writes
    the whole collection back.

    Args:
        storage: Where the user records live (a JsonFileStorage in production).
    """

    def __init__(self, storage: RecordStorage) -> None:
        self._storage = storage

    def _next_id(self) -> str:
        return str(uuid.uuid4())

    def _load(self) -> list[User]:
        return [User.from_record(r) for r in self._storage.load_all()]

    def find_by_email(self, email: str) -> Optional[User]:
        """Look up a user by email (exact, case-sensitive match)."""
        for user in self._load():
            if user.email == email:
                return user
        return None

    def find_by_id(self, user_id: str) -> Optional[User]:
        for user in self._load():
            if user.id == user_id:
                return user
        return None

    def list_users(self) -> list[User]:
        """Return all users in the order they signed up."""
        return self._load()

    def create(self, email: str, password_hash: str) -> User:
        """Register a new user.

        Raises:
            ConflictError: if a user with this email already exists.
        """
        users = self._load()
        if any(u.email == email for u in users):
            raise ConflictError("Email already registered.")

        user = User(
            id=self._next_id(),
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc),
        )
        users.append(user)
        self._storage.save_all([u.to_record() for u in users])
        logger.info(f"Registered user {user.id}")
        return user
