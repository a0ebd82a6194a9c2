"""Single entry point that evaluates one position snapshot end to end."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from opentelemetry import trace

from .aggregation import aggregate
from .models import (
    AggregatedPosition,
    BrokerConnection,
    BrokerPnLSummary,
    BrokerPosition,
    MarketQuote,
    PortfolioMetrics,
    RiskPosition,
    RiskSnapshot,
)
from .risk import DEFAULT_BETA, UNKNOWN_SECTOR, VAR_Z_SCORE_95, analyze_risk
from .summaries import summarize
from .totals import totalize

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Read-only input for one evaluation cycle."""

    positions: Tuple[BrokerPosition, ...]
    brokers: Tuple[BrokerConnection, ...]
    portfolio_value: Optional[float] = None
    market_data: Mapping[str, MarketQuote] = field(default_factory=dict)

    def resolved_portfolio_value(self) -> float:
        """Explicit portfolio value, or the market value of all positions."""

        if self.portfolio_value is not None:
            return self.portfolio_value
        return sum((p.market_value for p in self.positions), 0.0)


@dataclass(frozen=True)
class DashboardResult:
    """Immutable outputs of one evaluation cycle."""

    aggregates: Tuple[AggregatedPosition, ...]
    summaries: Tuple[BrokerPnLSummary, ...]
    totals: PortfolioMetrics
    risk: RiskSnapshot


def evaluate(
    snapshot: Snapshot,
    *,
    default_beta: float = DEFAULT_BETA,
    z_score: float = VAR_Z_SCORE_95,
    unknown_sector: str = UNKNOWN_SECTOR,
) -> DashboardResult:
    """Produce aggregates, broker summaries, totals and risk for ``snapshot``.

    Every stage reads only the snapshot, so the outputs are independent of
    stage order and identical for identical input.
    """

    with tracer.start_as_current_span("broker_pnl.evaluate") as span:
        span.set_attribute("broker_pnl.positions", len(snapshot.positions))
        span.set_attribute("broker_pnl.brokers", len(snapshot.brokers))

        with tracer.start_as_current_span("broker_pnl.aggregate"):
            aggregates = aggregate(snapshot.positions)
        with tracer.start_as_current_span("broker_pnl.summarize"):
            summaries = summarize(snapshot.positions, snapshot.brokers)
        with tracer.start_as_current_span("broker_pnl.totalize"):
            totals = totalize(summaries)
        with tracer.start_as_current_span("broker_pnl.analyze_risk"):
            risk = analyze_risk(
                [RiskPosition.from_broker_position(p) for p in snapshot.positions],
                snapshot.resolved_portfolio_value(),
                snapshot.market_data,
                default_beta=default_beta,
                z_score=z_score,
                unknown_sector=unknown_sector,
            )

    logger.debug(
        "Evaluated snapshot: %d symbols, %d brokers with positions, total value %.2f",
        len(aggregates),
        len(summaries),
        totals.total_value,
    )
    return DashboardResult(aggregates=aggregates, summaries=summaries, totals=totals, risk=risk)


__all__ = ["DashboardResult", "Snapshot", "evaluate"]
