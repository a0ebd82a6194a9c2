"""Pydantic schemas for snapshot evaluation requests and dashboard responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class BrokerPositionSchema(BaseModel):
    symbol: str = Field(..., min_length=1, examples=["TCS"])
    broker_id: str = Field(..., min_length=1)
    broker_name: str
    quantity: int
    avg_price: float
    current_price: float
    pnl: float
    pnl_percent: float
    day_pnl: float
    day_pnl_percent: float = 0.0
    sector: str | None = None


class BrokerConnectionSchema(BaseModel):
    id: str = Field(..., min_length=1)
    display_name: str
    broker_type: str
    status: str = "connected"
    capabilities: list[str] = Field(default_factory=list)


class MarketQuoteSchema(BaseModel):
    price: float
    beta: float | None = None
    change: float = 0.0
    volume: int = 0


class SnapshotRequest(BaseModel):
    """One evaluation cycle's input as supplied by the position source."""

    positions: list[BrokerPositionSchema] = Field(default_factory=list)
    brokers: list[BrokerConnectionSchema] = Field(default_factory=list)
    portfolio_value: float | None = Field(
        default=None,
        description="Account value used by the risk ratios; defaults to the positions' market value.",
    )
    market_data: dict[str, MarketQuoteSchema] = Field(default_factory=dict)


class PositionsViewRequest(SnapshotRequest):
    filter_type: str = Field(default="all", examples=["all", "profitable", "losing", "break-even"])
    sort_field: str = Field(default="total_pnl", examples=["symbol", "total_value", "total_pnl"])
    sort_direction: str = Field(default="desc", examples=["asc", "desc"])
    break_even_band: float | None = Field(default=None, ge=0.0)


class AggregatedPositionSchema(BaseModel):
    symbol: str
    total_quantity: int
    avg_price: float
    current_price: float
    total_value: float
    total_pnl: float
    total_pnl_percent: float
    day_pnl: float
    day_pnl_percent: float
    broker_positions: list[BrokerPositionSchema]


class BrokerPnLSummarySchema(BaseModel):
    broker_id: str
    broker_name: str
    broker_type: str
    total_value: float
    total_pnl: float
    total_pnl_percent: float
    day_pnl: float
    day_pnl_percent: float
    position_count: int
    profitable_positions: int
    losing_positions: int
    avg_pnl_per_position: float
    top_performer: str | None = None
    worst_performer: str | None = None


class BrokerPerformanceSchema(BaseModel):
    broker_id: str
    broker_name: str
    return_percent: float
    win_rate: float
    avg_win: float
    avg_loss: float
    profit_factor: float


class PortfolioMetricsSchema(BaseModel):
    total_value: float
    total_pnl: float
    total_pnl_percent: float
    total_day_pnl: float
    total_day_pnl_percent: float
    total_positions: int
    best_performing_broker: BrokerPnLSummarySchema | None = None
    worst_performing_broker: BrokerPnLSummarySchema | None = None


class RiskSnapshotSchema(BaseModel):
    position_value: float
    portfolio_value: float
    position_risk_percent: float
    correlation_risk: float
    sector_exposure: dict[str, float]
    sector_weights: dict[str, float]
    max_drawdown_percent: float
    value_at_risk: float
    beta: float
    is_high_beta: bool
    sharpe_ratio: float
    volatility: float
    mean_return: float
    concentration_percent: float
    risk_level: str


class PositionSummarySchema(BaseModel):
    total_positions: int
    total_value: float
    total_pnl: float
    total_pnl_percent: float
    total_day_pnl: float
    total_day_pnl_percent: float
    profitable_positions: int
    losing_positions: int


class DashboardResponse(BaseModel):
    aggregates: list[AggregatedPositionSchema]
    summaries: list[BrokerPnLSummarySchema]
    totals: PortfolioMetricsSchema
    risk: RiskSnapshotSchema
    performance: list[BrokerPerformanceSchema]


class PositionsViewResponse(BaseModel):
    positions: list[AggregatedPositionSchema]
    summary: PositionSummarySchema


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
