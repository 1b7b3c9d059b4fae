"""Discovery and parsing of session log files on disk."""

from __future__ import annotations

import enum
import fnmatch
import os
from dataclasses import dataclass, field
from typing import Iterator, Union

from simpsons.extract import extract_session_meta
from simpsons.jsonl import read_session_file
from simpsons.store import Store

_BATCH_SIZE = 50
_SESSION_PATTERN = "*.jsonl"


class ScanMsgType(enum.Enum):
    """Kind of progress report emitted by a scan."""

    PROJECTS_DISCOVERED = enum.auto()
    SESSIONS_BATCH = enum.auto()
    SCAN_COMPLETE = enum.auto()


@dataclass
class ScanMsg:
    """Progress report emitted by a scan."""

    type: ScanMsgType
    projects: list[str] = field(default_factory=list)
    count: int = 0
    scanned: int = 0
    total: int = 0


def _glob_sorted(directory: str, pattern: str) -> list[str]:
    try:
        names = os.listdir(directory)
    except OSError:
        return []
    return [
        os.path.join(directory, name)
        for name in sorted(names)
        if fnmatch.fnmatchcase(name, pattern)
    ]


class Scanner:
    """Finds project directories and parses their session files into a store."""

    def __init__(self, store: Store, base_dir: Union[str, os.PathLike]) -> None:
        self.store = store
        self.base_dir = os.fspath(base_dir)

    def run(self) -> Iterator[ScanMsg]:
        """Scan the base directory, yielding progress reports as it goes."""
        try:
            with os.scandir(self.base_dir) as entries:
                project_dirs = sorted(
                    entry.name
                    for entry in entries
                    if entry.is_dir() and not entry.name.startswith(".")
                )
        except OSError:
            yield ScanMsg(type=ScanMsgType.SCAN_COMPLETE)
            return

        yield ScanMsg(type=ScanMsgType.PROJECTS_DISCOVERED, projects=list(project_dirs))

        all_files = [
            (project, path)
            for project in project_dirs
            for path in _glob_sorted(os.path.join(self.base_dir, project), _SESSION_PATTERN)
        ]

        total = len(all_files)
        self.store.set_scan_progress(0, total)
        scanned = 0

        for project, path in all_files:
            try:
                messages = read_session_file(path)
            except (OSError, ValueError):
                scanned += 1
                continue

            name = os.path.basename(path)
            meta = extract_session_meta(messages, project, name)

            session_uuid = name.removesuffix(".jsonl")
            subagent_dir = os.path.join(self.base_dir, project, session_uuid, "subagents")
            meta.subagent_count = len(_glob_sorted(subagent_dir, _SESSION_PATTERN))

            self.store.add(meta)
            scanned += 1
            self.store.set_scan_progress(scanned, total)

            if scanned % _BATCH_SIZE == 0 or scanned == total:
                yield ScanMsg(
                    type=ScanMsgType.SESSIONS_BATCH,
                    count=_BATCH_SIZE,
                    scanned=scanned,
                    total=total,
                )

        yield ScanMsg(type=ScanMsgType.SCAN_COMPLETE, scanned=scanned, total=total)