"""Pydantic schemas exposed by the API."""

from .dashboard import (
    AggregatedPositionSchema,
    BrokerConnectionSchema,
    BrokerPerformanceSchema,
    BrokerPnLSummarySchema,
    BrokerPositionSchema,
    DashboardResponse,
    MarketQuoteSchema,
    PortfolioMetricsSchema,
    PositionSummarySchema,
    PositionsViewRequest,
    PositionsViewResponse,
    RiskSnapshotSchema,
    SnapshotRequest,
)

__all__ = [
    "AggregatedPositionSchema",
    "BrokerConnectionSchema",
    "BrokerPerformanceSchema",
    "BrokerPnLSummarySchema",
    "BrokerPositionSchema",
    "DashboardResponse",
    "MarketQuoteSchema",
    "PortfolioMetricsSchema",
    "PositionSummarySchema",
    "PositionsViewRequest",
    "PositionsViewResponse",
    "RiskSnapshotSchema",
    "SnapshotRequest",
]
