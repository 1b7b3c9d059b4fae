"""Aggregated analytics across all sessions."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Analytics:
    """Totals and breakdowns computed from every known session."""

    total_sessions: int = 0
    total_tokens_in: int = 0
    total_tokens_out: int = 0
    total_cache_read: int = 0
    total_cache_write: int = 0
    active_projects: int = 0
    models_used: dict[str, int] = field(default_factory=dict)
    tools_used: dict[str, int] = field(default_factory=dict)
    sessions_by_date: dict[str, int] = field(default_factory=dict)
    work_mode_explore: int = 0
    work_mode_build: int = 0
    work_mode_test: int = 0
    total_cost_usd: float = 0.0
    cost_by_date: dict[str, float] = field(default_factory=dict)

    def cache_hit_rate(self) -> float:
        """Fraction of all context tokens that were served from cache (0.0-1.0)."""
        total = self.total_tokens_in + self.total_cache_write + self.total_cache_read
        if total == 0:
            return 0.0
        return self.total_cache_read / total