"""Reading session log files, one JSON message per line."""

from __future__ import annotations

import os
from typing import Union

from simpsons.message import Message, MessageParseError, parse_message

_MAX_LINE_BYTES = 10 * 1024 * 1024


def read_session_file(path: Union[str, os.PathLike]) -> list[Message]:
    """Return every message that parses in a session log; bad lines are skipped.

    Raises OSError if the file cannot be opened, and ValueError if a line
    exceeds the maximum supported length.
    """
    messages: list[Message] = []
    with open(path, "rb") as handle:
        for raw in handle:
            line = raw.rstrip(b"\n")
            if line.endswith(b"\r"):
                line = line[:-1]
            if len(line) > _MAX_LINE_BYTES:
                raise ValueError(f"scan session file {os.fspath(path)}: line too long")
            if not line:
                continue
            try:
                messages.append(parse_message(line))
            except MessageParseError:
                continue
    return messages