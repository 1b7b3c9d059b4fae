"""Encouraging usage insights computed from session metadata."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from simpsons.history import HistoryStats, WordCount
from simpsons.models import SessionMeta

_DATE_FORMAT = "%Y-%m-%d"


@dataclass
class Insights:
    """Streaks, personal bests, trends and totals across sessions."""

    # Streaks
    current_streak: int = 0
    longest_streak: int = 0
    active_days: int = 0

    # Personal bests
    longest_session: Optional[SessionMeta] = None
    most_productive_day: str = ""
    most_productive_day_count: int = 0
    busiest_hour: int = 0
    favorite_tool: str = ""
    favorite_tool_count: int = 0

    # Trends
    sessions_this_week: int = 0
    sessions_last_week: int = 0
    avg_duration: timedelta = field(default_factory=timedelta)

    # Totals
    total_questions: int = 0
    total_tool_calls: int = 0
    unique_tools: int = 0
    unique_branches: int = 0
    top_words: list[WordCount] = field(default_factory=list)
    avg_prompt_words: float = 0.0
    p95_prompt_words: int = 0


def _local_naive(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def _parse_day(text: str) -> Optional[date]:
    try:
        return datetime.strptime(text, _DATE_FORMAT).date()
    except ValueError:
        return None


def _longest_run(days: Iterable[date]) -> int:
    longest = run = 0
    previous: Optional[date] = None
    for day in sorted(days):
        if previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day
    return longest


def compute_insights(
    sessions: Optional[Iterable[SessionMeta]],
    history: Optional[HistoryStats] = None,
) -> Insights:
    """Compute insights from sessions, enriched by prompt history when given."""
    insights = Insights()
    sessions = list(sessions or ())
    if not sessions:
        return insights

    date_counts: Counter[str] = Counter()
    tool_counts: Counter[str] = Counter()
    hour_counts: Counter[int] = Counter()
    branches: set[str] = set()

    today = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
    week_start = today - timedelta(days=6)  # rolling 7-day window
    last_week_start = week_start - timedelta(days=7)

    total_duration = timedelta()

    for session in sessions:
        insights.total_questions += session.message_count
        total_duration += session.duration

        if (
            insights.longest_session is None
            or session.duration > insights.longest_session.duration
        ):
            insights.longest_session = session

        if session.start_time is not None:
            start = session.start_time
            date_counts[start.strftime(_DATE_FORMAT)] += 1
            hour_counts[start.hour] += 1

            local_start = _local_naive(start)
            if local_start >= week_start:
                insights.sessions_this_week += 1
            elif local_start >= last_week_start:
                insights.sessions_last_week += 1

        for tool, count in session.tool_usage.items():
            tool_counts[tool] += count
            insights.total_tool_calls += count

        branches.update(session.git_branches)

    if history is not None:
        for day in history.active_days:
            date_counts.setdefault(day, 1)
        for hour, count in history.hour_counts.items():
            hour_counts[hour] += count
        insights.total_questions = history.total_prompts
        insights.top_words = list(history.top_words)
        insights.avg_prompt_words = history.avg_prompt_words
        insights.p95_prompt_words = history.p95_prompt_words

    insights.active_days = len(date_counts)
    insights.unique_tools = len(tool_counts)
    insights.unique_branches = len(branches)
    insights.avg_duration = total_duration / len(sessions)

    for tool, count in tool_counts.items():
        if count > insights.favorite_tool_count:
            insights.favorite_tool = tool
            insights.favorite_tool_count = count

    busy_hours = [(hour, count) for hour, count in hour_counts.items() if count > 0]
    if busy_hours:
        # Ties go to the earlier hour.
        insights.busiest_hour = min(busy_hours, key=lambda item: (-item[1], item[0]))[0]

    for day, count in date_counts.items():
        if count > insights.most_productive_day_count:
            insights.most_productive_day = day
            insights.most_productive_day_count = count

    today_date = today.date()
    streak = 0
    while (today_date - timedelta(days=streak)).strftime(_DATE_FORMAT) in date_counts:
        streak += 1
    insights.current_streak = streak

    parsed_days = (_parse_day(day) for day in date_counts)
    insights.longest_streak = _longest_run(d for d in parsed_days if d is not None)

    return insights