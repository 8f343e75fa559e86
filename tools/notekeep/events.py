from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

_event_log_path: Optional[Path] = None


def configure_event_log(path: str | Path | None) -> None:
    """Point log_event at a JSONL file, or disable it with None."""
    global _event_log_path
    _event_log_path = Path(path) if path else None


def event_log_path() -> Optional[Path]:
    return _event_log_path


def log_event(event_type: str, **details: Any) -> None:
    file_path = _event_log_path
    if file_path is None:
        return
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        event = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event_type": event_type,
            **details,
        }
        with file_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(event, ensure_ascii=True) + "\n")
    except OSError:
        pass
