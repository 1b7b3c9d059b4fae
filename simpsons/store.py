"""In-memory, thread-safe store of session metadata."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Optional

from simpsons.analytics import Analytics
from simpsons.history import HistoryStats
from simpsons.models import SessionDetail, SessionMeta

_EXPLORE_TOOLS = frozenset(
    {"Read", "Grep", "Glob", "WebFetch", "WebSearch", "LS", "SemanticSearch"}
)
_BUILD_TOOLS = frozenset({"Write", "Edit", "StrReplace"})
_TEST_TOOLS = frozenset({"Bash", "Agent", "TaskCreate", "TaskUpdate"})

_DATE_FORMAT = "%Y-%m-%d"


class Store:
    """Holds all session metadata with concurrent-safe access."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[str, SessionMeta] = {}
        self._by_project: dict[str, list[str]] = {}
        self._details: dict[str, SessionDetail] = {}

        self._scan_lock = threading.Lock()
        self._scan_scanned = 0
        self._scan_total = 0

        self._history: Optional[HistoryStats] = None
        self._cached_analytics: Optional[Analytics] = None
        self._analytics_dirty = True

    def add(self, meta: SessionMeta) -> None:
        """Insert or replace a session."""
        with self._lock:
            self._sessions[meta.uuid] = meta
            ids = self._by_project.setdefault(meta.project_path, [])
            if meta.uuid not in ids:
                ids.append(meta.uuid)
            self._analytics_dirty = True

    def get(self, uuid: str) -> Optional[SessionMeta]:
        """Return a session by UUID, or None."""
        with self._lock:
            return self._sessions.get(uuid)

    def all_sessions(self) -> list[SessionMeta]:
        """Return every session."""
        with self._lock:
            return list(self._sessions.values())

    def projects(self) -> list[str]:
        """Return the unique project paths."""
        with self._lock:
            return list(self._by_project)

    def sessions_by_project(self, project: str) -> list[SessionMeta]:
        """Return the sessions of one project."""
        with self._lock:
            return [
                self._sessions[uuid]
                for uuid in self._by_project.get(project, ())
                if uuid in self._sessions
            ]

    def analytics(self) -> Analytics:
        """Aggregate analytics over all sessions, cached until the next add."""
        with self._lock:
            if not self._analytics_dirty and self._cached_analytics is not None:
                return self._cached_analytics

            result = Analytics()
            projects: set[str] = set()

            for meta in self._sessions.values():
                result.total_sessions += 1
                result.total_tokens_in += meta.tokens_in
                result.total_tokens_out += meta.tokens_out
                result.total_cache_read += meta.cache_read
                result.total_cache_write += meta.cache_write
                result.total_cost_usd += meta.cost_usd
                projects.add(meta.project_path)

                for model, count in meta.models.items():
                    result.models_used[model] = result.models_used.get(model, 0) + count
                for tool, count in meta.tool_usage.items():
                    result.tools_used[tool] = result.tools_used.get(tool, 0) + count
                    if tool in _EXPLORE_TOOLS:
                        result.work_mode_explore += count
                    elif tool in _BUILD_TOOLS:
                        result.work_mode_build += count
                    elif tool in _TEST_TOOLS:
                        result.work_mode_test += count

                if meta.start_time is not None:
                    day = meta.start_time.strftime(_DATE_FORMAT)
                    result.sessions_by_date[day] = result.sessions_by_date.get(day, 0) + 1
                    result.cost_by_date[day] = result.cost_by_date.get(day, 0.0) + meta.cost_usd

            result.active_projects = len(projects)
            self._cached_analytics = result
            self._analytics_dirty = False
            return result

    def today_spend(self) -> float:
        """Estimated cost of the sessions started today."""
        today = datetime.now().strftime(_DATE_FORMAT)
        return self.analytics().cost_by_date.get(today, 0.0)

    def get_detail(self, uuid: str) -> Optional[SessionDetail]:
        """Return a cached session detail, or None."""
        with self._lock:
            return self._details.get(uuid)

    def set_detail(self, uuid: str, detail: SessionDetail) -> None:
        """Cache a session detail."""
        with self._lock:
            self._details[uuid] = detail

    def set_scan_progress(self, scanned: int, total: int) -> None:
        """Record background scan progress."""
        with self._scan_lock:
            self._scan_scanned = scanned
            self._scan_total = total

    def scan_progress(self) -> tuple[int, int]:
        """Return (scanned, total) of the background scan."""
        with self._scan_lock:
            return self._scan_scanned, self._scan_total

    def set_history_stats(self, stats: Optional[HistoryStats]) -> None:
        """Store the computed history statistics."""
        with self._lock:
            self._history = stats

    def history_stats(self) -> Optional[HistoryStats]:
        """Return the stored history statistics, or None if not loaded."""
        with self._lock:
            return self._history