"""In-memory RecordStorage for testing the stores without touching disk.

MemoryStorage deep-copies on every load and save, so a store that mutates
its snapshot without calling save_all leaves the "persisted" records
untouched, just like a file would.
"""
import copy
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

sys.path.insert(0, str(Path(__file__).parent.parent / "tools"))

from notekeep.storage import RecordStorage


class MemoryStorage(RecordStorage):
    """Record collection held in a list; counts loads and saves."""

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None) -> None:
        self.records: List[Dict[str, Any]] = copy.deepcopy(records or [])
        self.load_count = 0
        self.save_count = 0

    def load_all(self) -> List[Dict[str, Any]]:
        self.load_count += 1
        return copy.deepcopy(self.records)

    def save_all(self, records: List[Dict[str, Any]]) -> None:
        self.save_count += 1
        self.records = copy.deepcopy(records)
