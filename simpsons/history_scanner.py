"""Reading the prompt history log."""

from __future__ import annotations

import json
import os
from datetime import datetime
from typing import Any, Optional, Union

from simpsons.history import HistoryEntry

# Lines longer than this end the scan, as with a line scanner's default buffer.
_MAX_LINE_BYTES = 64 * 1024


def _field(data: dict, key: str, kind: type, default: Any) -> Optional[Any]:
    value = data.get(key)
    if value is None:
        return default
    if kind is int:
        return value if isinstance(value, int) and not isinstance(value, bool) else None
    return value if isinstance(value, kind) else None


def _parse_line(line: bytes) -> Optional[HistoryEntry]:
    try:
        data = json.loads(line)
    except ValueError:
        return None
    if data is None:
        return None
    if not isinstance(data, dict):
        return None
    timestamp = _field(data, "timestamp", int, 0)
    project = _field(data, "project", str, "")
    session_id = _field(data, "sessionId", str, "")
    display = _field(data, "display", str, "")
    if None in (timestamp, project, session_id, display) or timestamp == 0:
        return None
    seconds, millis = divmod(timestamp, 1000)
    try:
        moment = datetime.fromtimestamp(seconds).replace(microsecond=millis * 1000)
    except (OverflowError, OSError, ValueError):
        return None
    return HistoryEntry(
        timestamp=moment,
        project=project,
        session_id=session_id,
        prompt=display,
    )


def scan_history(path: Union[str, os.PathLike]) -> list[HistoryEntry]:
    """Parse a history log into entries; malformed lines are skipped.

    Raises OSError if the file cannot be opened.
    """
    entries: list[HistoryEntry] = []
    with open(path, "rb") as handle:
        for raw in handle:
            line = raw.rstrip(b"\n")
            if line.endswith(b"\r"):
                line = line[:-1]
            if len(line) > _MAX_LINE_BYTES:
                break
            entry = _parse_line(line)
            if entry is not None:
                entries.append(entry)
    return entries