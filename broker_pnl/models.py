"""Domain models for the multi-broker consolidation pipeline.

Inputs (positions, broker connections, market quotes) are supplied by upstream
collaborators and treated as immutable for one evaluation cycle. Every derived
entity is a frozen dataclass so consumers never observe a partially updated
aggregate.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .ratios import safe_ratio


@dataclass(frozen=True)
class BrokerPosition:
    """One holding of a symbol at one broker."""

    symbol: str
    broker_id: str
    broker_name: str
    quantity: int
    avg_price: float
    current_price: float
    pnl: float
    pnl_percent: float
    day_pnl: float
    day_pnl_percent: float = 0.0
    sector: Optional[str] = None

    @property
    def market_value(self) -> float:
        return self.quantity * self.current_price


@dataclass(frozen=True)
class BrokerConnection:
    """A registered broker account."""

    id: str
    display_name: str
    broker_type: str
    status: str = "connected"
    capabilities: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MarketQuote:
    """Latest market metadata for a symbol."""

    price: float
    beta: Optional[float] = None
    change: float = 0.0
    volume: int = 0


@dataclass(frozen=True)
class RiskPosition:
    """Position shape consumed by the risk analyzer."""

    symbol: str
    quantity: float
    avg_cost: float
    current_price: float
    unrealized_pnl: float
    sector: Optional[str] = None

    @property
    def market_value(self) -> float:
        return self.quantity * self.current_price

    @property
    def cost_basis(self) -> float:
        return self.quantity * self.avg_cost

    @classmethod
    def from_broker_position(cls, position: BrokerPosition) -> "RiskPosition":
        return cls(
            symbol=position.symbol,
            quantity=position.quantity,
            avg_cost=position.avg_price,
            current_price=position.current_price,
            unrealized_pnl=position.pnl,
            sector=position.sector,
        )


@dataclass(frozen=True)
class AggregatedPosition:
    """Symbol-level merge of one or more broker positions."""

    symbol: str
    total_quantity: int
    avg_price: float
    current_price: float
    total_value: float
    total_pnl: float
    total_pnl_percent: float
    day_pnl: float
    day_pnl_percent: float
    broker_positions: Tuple[BrokerPosition, ...] = ()

    @property
    def broker_count(self) -> int:
        return len(self.broker_positions)


@dataclass(frozen=True)
class BrokerPnLSummary:
    """Per-broker roll-up of positions and P&L."""

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
    top_performer: Optional[str] = None
    worst_performer: Optional[str] = None


@dataclass(frozen=True)
class BrokerPerformance:
    """Win/loss statistics for a broker's open positions."""

    broker_id: str
    broker_name: str
    return_percent: float
    win_rate: float
    avg_win: float
    avg_loss: float
    profit_factor: float


@dataclass(frozen=True)
class PortfolioMetrics:
    """Portfolio-wide totals across all brokers."""

    total_value: float
    total_pnl: float
    total_pnl_percent: float
    total_day_pnl: float
    total_day_pnl_percent: float
    total_positions: int
    best_performing_broker: Optional[BrokerPnLSummary] = None
    worst_performing_broker: Optional[BrokerPnLSummary] = None


@dataclass(frozen=True)
class PositionSummary:
    """Totals over a list of aggregated positions."""

    total_positions: int
    total_value: float
    total_pnl: float
    total_pnl_percent: float
    total_day_pnl: float
    total_day_pnl_percent: float
    profitable_positions: int
    losing_positions: int


@dataclass(frozen=True)
class RiskSnapshot:
    """Cross-sectional risk statistics for the current positions."""

    position_value: float
    portfolio_value: float
    position_risk_percent: float
    correlation_risk: float
    sector_values: Tuple[Tuple[str, float], ...]
    max_drawdown_percent: float
    value_at_risk: float
    beta: float
    sharpe_ratio: float
    volatility: float = 0.0
    mean_return: float = 0.0
    concentration_percent: float = 0.0
    risk_level: str = "Low"

    @property
    def sector_exposure(self) -> Mapping[str, float]:
        """Read-only view of market value per sector, in first-seen order."""

        return MappingProxyType(dict(self.sector_values))

    @property
    def is_high_beta(self) -> bool:
        return self.beta > 1

    def sector_weights(self) -> dict[str, float]:
        """Return each sector's share of position value in percent."""

        return {
            sector: safe_ratio(value, self.position_value) * 100.0
            for sector, value in self.sector_exposure.items()
        }


__all__ = [
    "AggregatedPosition",
    "BrokerConnection",
    "BrokerPerformance",
    "BrokerPnLSummary",
    "BrokerPosition",
    "MarketQuote",
    "PortfolioMetrics",
    "PositionSummary",
    "RiskPosition",
    "RiskSnapshot",
]
