"""Estimated USD cost of model usage."""

from __future__ import annotations

from typing import NamedTuple


class _Pricing(NamedTuple):
    input_per_m: float
    output_per_m: float
    cache_write_per_m: float
    cache_read_per_m: float


_OPUS = _Pricing(15.00, 75.00, 18.75, 1.50)
_SONNET = _Pricing(3.00, 15.00, 3.75, 0.30)
_HAIKU = _Pricing(0.80, 4.00, 1.00, 0.08)

# Substring of the model name -> pricing, checked in order.
_PRICING_TABLE: tuple[tuple[str, _Pricing], ...] = (
    ("claude-opus-4", _OPUS),
    ("claude-sonnet-4", _SONNET),
    ("claude-haiku-4", _HAIKU),
    ("claude-3-5-sonnet", _SONNET),
    ("claude-3-5-haiku", _HAIKU),
    ("claude-3-opus", _OPUS),
    ("claude-3-sonnet", _SONNET),
    ("claude-3-haiku", _Pricing(0.25, 1.25, 0.31, 0.03)),
)

_PER_MILLION = 1_000_000.0


def _lookup_pricing(model: str) -> _Pricing:
    lower = model.lower()
    return next(
        (pricing for prefix, pricing in _PRICING_TABLE if prefix in lower),
        _SONNET,
    )


def compute_cost(
    model: str,
    input_tokens: int,
    output_tokens: int,
    cache_write: int,
    cache_read: int,
) -> float:
    """Return the estimated USD cost of one assistant message."""
    p = _lookup_pricing(model)
    return (
        input_tokens * p.input_per_m / _PER_MILLION
        + output_tokens * p.output_per_m / _PER_MILLION
        + cache_write * p.cache_write_per_m / _PER_MILLION
        + cache_read * p.cache_read_per_m / _PER_MILLION
    )


def format_cost(usd: float) -> str:
    """Format a USD amount for display."""
    if usd == 0:
        return "-"
    if usd < 0.01:
        return "<$0.01"
    return f"${usd:.2f}"