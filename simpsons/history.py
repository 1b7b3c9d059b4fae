"""Statistics over the prompt history log."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class HistoryEntry:
    """A single prompt from the history log."""

    timestamp: datetime
    project: str = ""
    session_id: str = ""
    prompt: str = ""


@dataclass
class WordCount:
    """A word and how often it occurred."""

    word: str
    count: int


def _empty_heatmap() -> list[list[int]]:
    return [[0] * 24 for _ in range(7)]


@dataclass
class HistoryStats:
    """Aggregated statistics over history entries."""

    total_prompts: int = 0
    active_days: set[str] = field(default_factory=set)
    prompts_by_date: dict[str, int] = field(default_factory=dict)
    hour_counts: dict[int, int] = field(default_factory=dict)
    # day of week (Mon=0..Sun=6) x hour
    heatmap: list[list[int]] = field(default_factory=_empty_heatmap)
    top_words: list[WordCount] = field(default_factory=list)
    avg_prompt_words: float = 0.0
    p95_prompt_words: int = 0


STOP_WORDS = frozenset(
    """
    the a an is are was were be been being have has had do does did will would
    could should can may might shall to of in for on with at by from as into
    through about it i me my we our you your this that and or but not no if then
    so up out just also how what when where which who why all each some any let
    please make use add get set new like want need file code using here don there
    """.split()
)

_TOP_WORD_LIMIT = 5


def _strip_non_letters(word: str) -> str:
    start = next((i for i, ch in enumerate(word) if ch.isalpha()), len(word))
    end = next(
        (i + 1 for i in range(len(word) - 1, start - 1, -1) if word[i].isalpha()),
        start,
    )
    return word[start:end]


def _round_one_decimal(value: float) -> float:
    # Half away from zero; value is never negative here.
    return math.floor(value * 10 + 0.5) / 10


def compute_history_stats(entries) -> HistoryStats:
    """Aggregate history entries into statistics."""
    stats = HistoryStats()
    word_freqs: Counter[str] = Counter()
    prompt_lengths: list[int] = []

    for entry in entries or ():
        stats.total_prompts += 1
        ts = entry.timestamp
        date = ts.strftime("%Y-%m-%d")
        stats.active_days.add(date)
        stats.prompts_by_date[date] = stats.prompts_by_date.get(date, 0) + 1
        stats.hour_counts[ts.hour] = stats.hour_counts.get(ts.hour, 0) + 1
        stats.heatmap[ts.weekday()][ts.hour] += 1

        if entry.prompt:
            words = entry.prompt.split()
            prompt_lengths.append(len(words))
            for raw in words:
                word = _strip_non_letters(raw.lower())
                if len(word.encode("utf-8")) >= 3 and word not in STOP_WORDS:
                    word_freqs[word] += 1

    if prompt_lengths:
        stats.avg_prompt_words = _round_one_decimal(
            sum(prompt_lengths) / len(prompt_lengths)
        )
        prompt_lengths.sort()
        idx = math.ceil(0.95 * len(prompt_lengths)) - 1
        idx = min(max(idx, 0), len(prompt_lengths) - 1)
        stats.p95_prompt_words = prompt_lengths[idx]

    ranked = sorted(word_freqs.items(), key=lambda item: (-item[1], item[0]))
    stats.top_words = [WordCount(w, c) for w, c in ranked[:_TOP_WORD_LIMIT]]
    return stats