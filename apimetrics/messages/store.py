"""JSON file persistence for message logs.

The log is a single JSON array of message records, in the same shape the
host editor writes (``ts``, ``type``, ``say``, ``text``).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from apimetrics.messages.models import LogMessage

log = logging.getLogger(__name__)


def load_messages(path: str | Path) -> list[LogMessage]:
    """Load a message log. A missing file is an empty log."""
    path = Path(path).expanduser()
    if not path.exists():
        return []
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Message log must be a JSON array: {path}")
    return [LogMessage.model_validate(item) for item in data]


def save_messages(path: str | Path, messages: list[LogMessage]) -> Path:
    """Write the full log, creating parent directories as needed."""
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    data = [m.model_dump(mode="json", exclude_none=True) for m in messages]
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    log.info("Message log saved: %s (%d messages)", path, len(messages))
    return path


def append_message(path: str | Path, message: LogMessage) -> Path:
    messages = load_messages(path)
    messages.append(message)
    return save_messages(path, messages)
