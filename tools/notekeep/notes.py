"""Owner-scoped note persistence.

Every operation takes the owner id resolved by the auth gate and only ever
sees notes whose ``userId`` matches it. Note ids are allocated from the
maximum id in the whole store, not per owner.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from .errors import NotFoundError, ValidationError
from .events import log_event
from .models import Note
from .storage import RecordStorage

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Title and content are required."


def _check_fields(title: Any, content: Any) -> None:
    if not isinstance(title, str) or not title:
        raise ValidationError(MISSING_FIELDS)
    if not isinstance(content, str) or not content:
        raise ValidationError(MISSING_FIELDS)


class NoteStore:
    """Owns the note record collection.

    Args:
        storage: Where the note records live (a JsonFileStorage in production).
    """

    def __init__(self, storage: RecordStorage) -> None:
        self._storage = storage

    def _load(self) -> list[Note]:
        return [Note.from_record(r) for r in self._storage.load_all()]

    def _save(self, notes: list[Note]) -> None:
        self._storage.save_all([n.to_record() for n in notes])

    def list_by_owner(self, owner_id: str) -> list[Note]:
        """Return the owner's notes in stored order."""
        return [n for n in self._load() if n.owner_id == owner_id]

    def create(self, owner_id: str, items: Iterable[Mapping[str, Any]]) -> list[Note]:
        """Add a batch of ``{title, content}`` items for one owner.

        The whole batch is validated before anything is written; one bad item
        rejects all of them. Ids continue from the current store-wide maximum,
        in submission order.

        Raises:
            ValidationError: the batch is empty, or an item is not an object
                or has an empty/missing title or content.
        """
        items = list(items)
        if not items:
            raise ValidationError("At least one note is required.")
        for item in items:
            if not isinstance(item, Mapping):
                raise ValidationError(MISSING_FIELDS)
            _check_fields(item.get("title"), item.get("content"))

        notes = self._load()
        next_id = max((n.id for n in notes), default=0) + 1

        created = []
        for offset, item in enumerate(items):
            note = Note(
                id=next_id + offset,
                owner_id=owner_id,
                title=item["title"],
                content=item["content"],
            )
            created.append(note)

        self._save(notes + created)
        ids = [n.id for n in created]
        logger.info(f"Added notes {ids} for user {owner_id}")
        log_event("notes_created", component="notes", user_id=owner_id, note_ids=ids)
        return created

    def update(self, owner_id: str, note_id: int, title: Any, content: Any) -> Note:
        """Replace the title and content of one of the owner's notes.

        Raises:
            ValidationError: title or content is empty or missing.
            NotFoundError: no note with this id belongs to the owner.
        """
        _check_fields(title, content)

        notes = self._load()
        for note in notes:
            if note.id == note_id and note.owner_id == owner_id:
                note.title = title
                note.content = content
                break
        else:
            raise NotFoundError("Note not found.")

        self._save(notes)
        logger.info(f"Updated note {note_id}")
        log_event("note_updated", component="notes", user_id=owner_id, note_id=note_id)
        return note

    def delete(self, owner_id: str, note_id: int) -> None:
        """Remove one of the owner's notes.

        Raises:
            NotFoundError: no note with this id belongs to the owner. Storage
                is left untouched.
        """
        notes = self._load()
        remaining = [
            n for n in notes if not (n.id == note_id and n.owner_id == owner_id)
        ]
        if len(remaining) == len(notes):
            raise NotFoundError("Note not found.")

        self._save(remaining)
        logger.info(f"Deleted note {note_id}")
        log_event("note_deleted", component="notes", user_id=owner_id, note_id=note_id)
