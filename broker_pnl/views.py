"""Filtering, sorting and totals for the aggregated positions table."""
from __future__ import annotations

from typing import Callable, Dict, List, Sequence

from .models import AggregatedPosition, PositionSummary
from .ratios import percent_of_cost

DEFAULT_BREAK_EVEN_BAND = 100.0

SORT_FIELDS: Dict[str, Callable[[AggregatedPosition], object]] = {
    "symbol": lambda p: p.symbol,
    "total_value": lambda p: p.total_value,
    "total_pnl": lambda p: p.total_pnl,
    "total_pnl_percent": lambda p: p.total_pnl_percent,
    "day_pnl": lambda p: p.day_pnl,
}
FILTER_TYPES = ("all", "profitable", "losing", "break-even")
SORT_DIRECTIONS = ("asc", "desc")


def filter_positions(
    positions: Sequence[AggregatedPosition],
    filter_type: str = "all",
    *,
    break_even_band: float = DEFAULT_BREAK_EVEN_BAND,
) -> List[AggregatedPosition]:
    """Keep positions matching ``filter_type``.

    ``break-even`` keeps positions whose absolute P&L is within
    ``break_even_band`` currency units of zero.
    """

    if filter_type == "all":
        return list(positions)
    if filter_type == "profitable":
        return [p for p in positions if p.total_pnl > 0]
    if filter_type == "losing":
        return [p for p in positions if p.total_pnl < 0]
    if filter_type == "break-even":
        return [p for p in positions if abs(p.total_pnl) < break_even_band]
    raise ValueError(f"Unknown filter type {filter_type!r}; expected one of {', '.join(FILTER_TYPES)}")


def sort_positions(
    positions: Sequence[AggregatedPosition],
    field: str = "total_pnl",
    direction: str = "desc",
) -> List[AggregatedPosition]:
    """Return a new list ordered by ``field``; equal keys keep their input order."""

    selector = SORT_FIELDS.get(field)
    if selector is None:
        raise ValueError(f"Unknown sort field {field!r}; expected one of {', '.join(SORT_FIELDS)}")
    if direction not in SORT_DIRECTIONS:
        raise ValueError(f"Unknown sort direction {direction!r}; expected 'asc' or 'desc'")
    return sorted(positions, key=selector, reverse=direction == "desc")  # type: ignore[arg-type]


def summarize_aggregates(positions: Sequence[AggregatedPosition]) -> PositionSummary:
    total_value = sum((p.total_value for p in positions), 0.0)
    total_pnl = sum((p.total_pnl for p in positions), 0.0)
    total_day_pnl = sum((p.day_pnl for p in positions), 0.0)
    return PositionSummary(
        total_positions=len(positions),
        total_value=total_value,
        total_pnl=total_pnl,
        total_pnl_percent=percent_of_cost(total_pnl, total_value),
        total_day_pnl=total_day_pnl,
        total_day_pnl_percent=percent_of_cost(total_day_pnl, total_value),
        profitable_positions=sum(1 for p in positions if p.total_pnl > 0),
        losing_positions=sum(1 for p in positions if p.total_pnl < 0),
    )


__all__ = [
    "DEFAULT_BREAK_EVEN_BAND",
    "FILTER_TYPES",
    "SORT_FIELDS",
    "filter_positions",
    "sort_positions",
    "summarize_aggregates",
]
