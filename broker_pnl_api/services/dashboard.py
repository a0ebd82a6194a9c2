"""Bridge between validated API payloads and the consolidation core."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any

from opentelemetry import metrics

from broker_pnl import (
    AggregatedPosition,
    BrokerConnection,
    BrokerPosition,
    MarketQuote,
    RiskSnapshot,
    Snapshot,
    aggregate,
    broker_performance,
    evaluate,
    filter_positions,
    sort_positions,
    summarize_aggregates,
)
from broker_pnl_api.config import AppSettings
from broker_pnl_api.schemas import (
    AggregatedPositionSchema,
    BrokerPerformanceSchema,
    BrokerPnLSummarySchema,
    DashboardResponse,
    PortfolioMetricsSchema,
    PositionSummarySchema,
    PositionsViewRequest,
    PositionsViewResponse,
    RiskSnapshotSchema,
    SnapshotRequest,
)

logger = logging.getLogger(__name__)
meter = metrics.get_meter(__name__)

_evaluations = meter.create_counter(
    "broker_pnl.evaluations",
    description="Snapshots evaluated by the consolidation pipeline",
)
_snapshot_positions = meter.create_histogram(
    "broker_pnl.snapshot.positions",
    description="Number of broker positions per evaluated snapshot",
)


def build_snapshot(request: SnapshotRequest) -> Snapshot:
    """Convert a validated request into the core's immutable snapshot."""

    positions = tuple(BrokerPosition(**p.model_dump()) for p in request.positions)
    brokers = tuple(
        BrokerConnection(
            id=b.id,
            display_name=b.display_name,
            broker_type=b.broker_type,
            status=b.status,
            capabilities=tuple(b.capabilities),
        )
        for b in request.brokers
    )
    market_data = {symbol: MarketQuote(**quote.model_dump()) for symbol, quote in request.market_data.items()}
    return Snapshot(
        positions=positions,
        brokers=brokers,
        portfolio_value=request.portfolio_value,
        market_data=market_data,
    )


def _aggregate_schema(position: AggregatedPosition) -> AggregatedPositionSchema:
    return AggregatedPositionSchema.model_validate(asdict(position))


def _risk_schema(risk: RiskSnapshot) -> RiskSnapshotSchema:
    payload: dict[str, Any] = asdict(risk)
    del payload["sector_values"]
    payload["sector_exposure"] = dict(risk.sector_exposure)
    payload["sector_weights"] = risk.sector_weights()
    payload["is_high_beta"] = risk.is_high_beta
    return RiskSnapshotSchema.model_validate(payload)


def evaluate_dashboard(request: SnapshotRequest, settings: AppSettings) -> DashboardResponse:
    """Run one full evaluation cycle for the dashboard."""

    snapshot = build_snapshot(request)
    result = evaluate(
        snapshot,
        default_beta=settings.default_beta,
        z_score=settings.var_z_score,
        unknown_sector=settings.unknown_sector_label,
    )
    performance = broker_performance(snapshot.positions, snapshot.brokers)

    _evaluations.add(1)
    _snapshot_positions.record(len(snapshot.positions))
    logger.info(
        "Evaluated %d positions across %d brokers (%d symbols)",
        len(snapshot.positions),
        len(result.summaries),
        len(result.aggregates),
    )

    return DashboardResponse(
        aggregates=[_aggregate_schema(a) for a in result.aggregates],
        summaries=[BrokerPnLSummarySchema.model_validate(asdict(s)) for s in result.summaries],
        totals=PortfolioMetricsSchema.model_validate(asdict(result.totals)),
        risk=_risk_schema(result.risk),
        performance=[BrokerPerformanceSchema.model_validate(asdict(p)) for p in performance],
    )


def positions_view(request: PositionsViewRequest, settings: AppSettings) -> PositionsViewResponse:
    """Aggregate, filter and sort positions for the positions table.

    Raises ``ValueError`` for an unknown filter, sort field or direction.
    """

    snapshot = build_snapshot(request)
    aggregates = aggregate(snapshot.positions)
    band = request.break_even_band if request.break_even_band is not None else settings.break_even_band
    selected = filter_positions(aggregates, request.filter_type, break_even_band=band)
    ordered = sort_positions(selected, request.sort_field, request.sort_direction)
    return PositionsViewResponse(
        positions=[_aggregate_schema(a) for a in ordered],
        summary=PositionSummarySchema.model_validate(asdict(summarize_aggregates(aggregates))),
    )


__all__ = ["build_snapshot", "evaluate_dashboard", "positions_view"]
