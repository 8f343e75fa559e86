"""Whole-collection record storage.

Stores never patch a single record on disk. Every mutation is::

    records = storage.load_all()   # full snapshot
    ...mutate in memory...
    storage.save_all(records)      # full overwrite

Nothing is cached between calls and nothing is locked, so two concurrent
writers to the same file can lose one another's update.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from .errors import InternalError

logger = logging.getLogger(__name__)


class RecordStorage(ABC):
    """Load-all / save-all interface behind the credential and note stores."""

    @abstractmethod
    def load_all(self) -> list[dict[str, Any]]:
        """Return the full record collection (empty list if none stored yet)."""

    @abstractmethod
    def save_all(self, records: list[dict[str, Any]]) -> None:
        """Replace the full record collection."""


class JsonFileStorage(RecordStorage):
    """A JSON array of records in a single file, rewritten on every save.

    Args:
        path: Location of the JSON file. Parent directories are created on
              the first save.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load_all(self) -> list[dict[str, Any]]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise InternalError(f"Failed to read {self.path}: {exc}") from exc

        if not text.strip():
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InternalError(f"Corrupt JSON in {self.path}: {exc}") from exc

        if not isinstance(data, list):
            raise InternalError(f"Expected a JSON array in {self.path}")
        return data

    def save_all(self, records: list[dict[str, Any]]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(records, indent=2), encoding="utf-8")
        except OSError as exc:
            raise InternalError(f"Failed to write {self.path}: {exc}") from exc
        logger.debug(f"Wrote {len(records)} records to {self.path}")
