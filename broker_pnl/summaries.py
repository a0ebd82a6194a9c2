"""Per-broker P&L summaries and win/loss statistics."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .models import BrokerConnection, BrokerPerformance, BrokerPnLSummary, BrokerPosition
from .ratios import percent_of_cost, safe_ratio

logger = logging.getLogger(__name__)


@dataclass
class _BrokerAccumulator:
    broker: BrokerConnection
    positions: List[BrokerPosition] = field(default_factory=list)
    total_value: float = 0.0
    total_pnl: float = 0.0
    day_pnl: float = 0.0
    profitable: int = 0
    losing: int = 0
    top: Optional[BrokerPosition] = None
    worst: Optional[BrokerPosition] = None

    def add(self, position: BrokerPosition) -> None:
        self.positions.append(position)
        self.total_value += position.quantity * position.current_price
        self.total_pnl += position.pnl
        self.day_pnl += position.day_pnl
        if position.pnl > 0:
            self.profitable += 1
        elif position.pnl < 0:
            self.losing += 1
        # Holders are kept by reference; strict comparison keeps the earlier one on ties.
        if self.top is None or position.pnl_percent > self.top.pnl_percent:
            self.top = position
        if self.worst is None or position.pnl_percent < self.worst.pnl_percent:
            self.worst = position

    def summary(self) -> BrokerPnLSummary:
        count = len(self.positions)
        return BrokerPnLSummary(
            broker_id=self.broker.id,
            broker_name=self.broker.display_name,
            broker_type=self.broker.broker_type,
            total_value=self.total_value,
            total_pnl=self.total_pnl,
            total_pnl_percent=percent_of_cost(self.total_pnl, self.total_value),
            day_pnl=self.day_pnl,
            day_pnl_percent=percent_of_cost(self.day_pnl, self.total_value),
            position_count=count,
            profitable_positions=self.profitable,
            losing_positions=self.losing,
            avg_pnl_per_position=safe_ratio(self.total_pnl, count),
            top_performer=self.top.symbol if self.top else None,
            worst_performer=self.worst.symbol if self.worst else None,
        )


def _accumulate(
    positions: Sequence[BrokerPosition],
    brokers: Sequence[BrokerConnection],
) -> List[_BrokerAccumulator]:
    by_id: Dict[str, _BrokerAccumulator] = {}
    for broker in brokers:
        by_id.setdefault(broker.id, _BrokerAccumulator(broker=broker))
    skipped = 0
    for position in positions:
        accumulator = by_id.get(position.broker_id)
        if accumulator is None:
            skipped += 1
            continue
        accumulator.add(position)
    if skipped:
        logger.debug("Ignored %d positions held at unregistered brokers", skipped)
    return [acc for acc in by_id.values() if acc.positions]


def summarize(
    positions: Sequence[BrokerPosition],
    brokers: Sequence[BrokerConnection],
) -> Tuple[BrokerPnLSummary, ...]:
    """Roll positions up into one summary per broker that holds any.

    Summaries follow the order of ``brokers``; a connected broker with no
    positions is left out of the result.
    """

    return tuple(acc.summary() for acc in _accumulate(positions, brokers))


def broker_performance(
    positions: Sequence[BrokerPosition],
    brokers: Sequence[BrokerConnection],
) -> Tuple[BrokerPerformance, ...]:
    """Return win rate and average win/loss sizes for each broker with positions."""

    results: List[BrokerPerformance] = []
    for acc in _accumulate(positions, brokers):
        wins = [p.pnl for p in acc.positions if p.pnl > 0]
        losses = [p.pnl for p in acc.positions if p.pnl < 0]
        avg_win = safe_ratio(sum(wins), len(wins))
        avg_loss = abs(safe_ratio(sum(losses), len(losses)))
        results.append(
            BrokerPerformance(
                broker_id=acc.broker.id,
                broker_name=acc.broker.display_name,
                return_percent=safe_ratio(acc.total_pnl, acc.total_value) * 100.0,
                win_rate=safe_ratio(len(wins), len(acc.positions)) * 100.0,
                avg_win=avg_win,
                avg_loss=avg_loss,
                profit_factor=safe_ratio(avg_win, avg_loss),
            )
        )
    return tuple(results)


__all__ = ["broker_performance", "summarize"]
