"""Merge per-broker positions into one aggregate per symbol."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from .models import AggregatedPosition, BrokerPosition
from .ratios import percent_of_cost, safe_ratio

logger = logging.getLogger(__name__)


@dataclass
class _SymbolFold:
    """Running totals for one symbol while its contributors are folded in."""

    quantity: int = 0
    cost: float = 0.0
    value: float = 0.0
    pnl: float = 0.0
    day_pnl: float = 0.0
    current_price: float = 0.0

    def add(self, position: BrokerPosition) -> None:
        self.quantity += position.quantity
        self.cost += position.avg_price * position.quantity
        self.value += position.quantity * position.current_price
        self.pnl += position.pnl
        self.day_pnl += position.day_pnl
        # Assumed identical across brokers; the latest contributor wins.
        self.current_price = position.current_price

    @property
    def avg_price(self) -> float:
        return safe_ratio(self.cost, self.quantity)

    @property
    def pnl_percent(self) -> float:
        return safe_ratio(self.value - self.cost, self.cost) * 100.0

    @property
    def day_pnl_percent(self) -> float:
        return percent_of_cost(self.day_pnl, self.value)


def _group_by_symbol(positions: Iterable[BrokerPosition]) -> Dict[str, List[BrokerPosition]]:
    grouped: Dict[str, List[BrokerPosition]] = {}
    for position in positions:
        grouped.setdefault(position.symbol, []).append(position)
    return grouped


def aggregate_symbol(symbol: str, contributors: Sequence[BrokerPosition]) -> AggregatedPosition:
    """Fold the contributors for ``symbol`` left to right into one aggregate."""

    fold = _SymbolFold()
    for position in contributors:
        fold.add(position)
    return AggregatedPosition(
        symbol=symbol,
        total_quantity=fold.quantity,
        avg_price=fold.avg_price,
        current_price=fold.current_price,
        total_value=fold.value,
        total_pnl=fold.pnl,
        total_pnl_percent=fold.pnl_percent,
        day_pnl=fold.day_pnl,
        day_pnl_percent=fold.day_pnl_percent,
        broker_positions=tuple(contributors),
    )


def aggregate(positions: Sequence[BrokerPosition]) -> Tuple[AggregatedPosition, ...]:
    """Group positions by symbol (first-seen order) and aggregate each group."""

    grouped = _group_by_symbol(positions)
    aggregates = tuple(aggregate_symbol(symbol, members) for symbol, members in grouped.items())
    logger.debug("Aggregated %d positions into %d symbols", len(positions), len(aggregates))
    return aggregates


__all__ = ["aggregate", "aggregate_symbol"]
