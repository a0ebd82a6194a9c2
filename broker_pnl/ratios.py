"""Zero-guarded ratio helpers shared by every aggregation stage."""

from __future__ import annotations

import math


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator`` or ``0.0`` for a degenerate result."""

    if denominator == 0:
        return 0.0
    result = numerator / denominator
    if not math.isfinite(result):
        return 0.0
    return result


def percent_of_cost(pnl: float, value: float) -> float:
    """P&L as a percentage of the cost basis before P&L (``value - pnl``)."""

    return safe_ratio(pnl, value - pnl) * 100.0


__all__ = ["percent_of_cost", "safe_ratio"]
