"""Portfolio-wide totals across broker summaries."""
from __future__ import annotations

from typing import Sequence

from .models import BrokerPnLSummary, PortfolioMetrics
from .ratios import percent_of_cost


def totalize(summaries: Sequence[BrokerPnLSummary]) -> PortfolioMetrics:
    """Reduce broker summaries into portfolio totals and best/worst brokers.

    ``max``/``min`` return the first extreme element, so tied brokers resolve
    to the one listed first.
    """

    total_value = sum((s.total_value for s in summaries), 0.0)
    total_pnl = sum((s.total_pnl for s in summaries), 0.0)
    total_day_pnl = sum((s.day_pnl for s in summaries), 0.0)
    return PortfolioMetrics(
        total_value=total_value,
        total_pnl=total_pnl,
        total_pnl_percent=percent_of_cost(total_pnl, total_value),
        total_day_pnl=total_day_pnl,
        total_day_pnl_percent=percent_of_cost(total_day_pnl, total_value),
        total_positions=sum(s.position_count for s in summaries),
        best_performing_broker=max(summaries, key=lambda s: s.total_pnl_percent, default=None),
        worst_performing_broker=min(summaries, key=lambda s: s.total_pnl_percent, default=None),
    )


__all__ = ["totalize"]
