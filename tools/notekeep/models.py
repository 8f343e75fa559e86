"""User and Note records and their on-disk (camelCase JSON) shape."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

import jsonschema

from .errors import InternalError

USER_SCHEMA = {
    "type": "object",
    "required": ["id", "email", "passwordHash", "createdAt"],
    "properties": {
        "id": {"type": "string", "minLength": 1},
        "email": {"type": "string", "minLength": 1},
        "passwordHash": {"type": "string", "minLength": 1},
        "createdAt": {"type": "string"},
    },
}

NOTE_SCHEMA = {
    "type": "object",
    "required": ["id", "userId", "title", "content"],
    "properties": {
        "id": {"type": "integer"},
        "userId": {"type": "string", "minLength": 1},
        "title": {"type": "string"},
        "content": {"type": "string"},
    },
}


def _validate(record: Any, schema: dict, kind: str) -> None:
    try:
        jsonschema.validate(record, schema)
    except jsonschema.ValidationError as exc:
        raise InternalError(f"Malformed {kind} record in storage: {exc.message}") from exc


@dataclass
class User:
    """Registered account. Only the bcrypt hash of the password is kept."""

    id: str
    email: str
    password_hash: str
    created_at: datetime

    @classmethod
    def from_record(cls, record: Any) -> User:
        _validate(record, USER_SCHEMA, "user")
        try:
            created_at = datetime.fromisoformat(record["createdAt"])
        except ValueError as exc:
            raise InternalError(
                f"Malformed user record in storage: bad createdAt {record['createdAt']!r}"
            ) from exc
        return cls(
            id=record["id"],
            email=record["email"],
            password_hash=record["passwordHash"],
            created_at=created_at,
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "passwordHash": self.password_hash,
            "createdAt": self.created_at.isoformat(),
        }

    def public(self) -> dict[str, str]:
        """The subset of the record that is safe to return to clients."""
        return {"id": self.id, "email": self.email}


@dataclass
class Note:
    id: int
    owner_id: str
    title: str
    content: str

    @classmethod
    def from_record(cls, record: Any) -> Note:
        _validate(record, NOTE_SCHEMA, "note")
        return cls(
            id=int(record["id"]),
            owner_id=record["userId"],
            title=record["title"],
            content=record["content"],
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.owner_id,
            "title": self.title,
            "content": self.content,
        }
