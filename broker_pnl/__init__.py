"""Core package for multi-broker position and P&L consolidation."""

from .aggregation import aggregate
from .models import (
    AggregatedPosition,
    BrokerConnection,
    BrokerPerformance,
    BrokerPnLSummary,
    BrokerPosition,
    MarketQuote,
    PortfolioMetrics,
    PositionSummary,
    RiskPosition,
    RiskSnapshot,
)
from .pipeline import DashboardResult, Snapshot, evaluate
from .risk import analyze_risk, classify_risk
from .summaries import broker_performance, summarize
from .totals import totalize
from .views import filter_positions, sort_positions, summarize_aggregates

__all__ = [
    "AggregatedPosition",
    "BrokerConnection",
    "BrokerPerformance",
    "BrokerPnLSummary",
    "BrokerPosition",
    "DashboardResult",
    "MarketQuote",
    "PortfolioMetrics",
    "PositionSummary",
    "RiskPosition",
    "RiskSnapshot",
    "Snapshot",
    "aggregate",
    "analyze_risk",
    "broker_performance",
    "classify_risk",
    "evaluate",
    "filter_positions",
    "sort_positions",
    "summarize",
    "summarize_aggregates",
    "totalize",
]
