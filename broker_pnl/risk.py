"""Simplified cross-sectional risk statistics for the current positions.

The model is deliberately coarse: returns are taken across positions rather
than over time, volatility is the population standard deviation of those
returns, and Value-at-Risk uses a one-tailed normal approximation. It matches
what the dashboards display and is not a covariance-based risk engine.
"""
from __future__ import annotations

import logging
from statistics import fmean, pstdev
from typing import Dict, Mapping, Sequence

from .models import MarketQuote, RiskPosition, RiskSnapshot
from .ratios import safe_ratio

logger = logging.getLogger(__name__)

DEFAULT_BETA = 1.0
VAR_Z_SCORE_95 = 1.645
UNKNOWN_SECTOR = "Unknown"
CONCENTRATED_CORRELATION = 0.8
DIVERSIFIED_CORRELATION = 0.3
MAX_CONCENTRATED_SECTORS = 2

# Upper bounds (inclusive) of position risk percent per level.
RISK_LEVELS = (
    (2.0, "Low"),
    (5.0, "Medium"),
    (10.0, "High"),
)
HIGHEST_RISK_LEVEL = "Very High"


def classify_risk(position_risk_percent: float) -> str:
    """Map a position risk percentage onto a display level."""

    for upper, label in RISK_LEVELS:
        if position_risk_percent <= upper:
            return label
    return HIGHEST_RISK_LEVEL


def sector_exposure(
    positions: Sequence[RiskPosition],
    *,
    unknown_label: str = UNKNOWN_SECTOR,
) -> Dict[str, float]:
    exposure: Dict[str, float] = {}
    for position in positions:
        sector = position.sector or unknown_label
        exposure[sector] = exposure.get(sector, 0.0) + position.market_value
    return exposure


def portfolio_beta(
    positions: Sequence[RiskPosition],
    market_data: Mapping[str, MarketQuote],
    *,
    default_beta: float = DEFAULT_BETA,
) -> float:
    """Value-weighted beta; symbols without a quoted beta count as ``default_beta``."""

    total_value = sum((p.market_value for p in positions), 0.0)
    weighted = 0.0
    for position in positions:
        quote = market_data.get(position.symbol)
        beta = quote.beta if quote is not None and quote.beta is not None else default_beta
        weighted += safe_ratio(position.market_value, total_value) * beta
    return weighted


def position_returns(positions: Sequence[RiskPosition]) -> list[float]:
    return [safe_ratio(p.unrealized_pnl, p.cost_basis) for p in positions]


def analyze_risk(
    positions: Sequence[RiskPosition],
    portfolio_value: float,
    market_data: Mapping[str, MarketQuote],
    *,
    default_beta: float = DEFAULT_BETA,
    z_score: float = VAR_Z_SCORE_95,
    unknown_sector: str = UNKNOWN_SECTOR,
) -> RiskSnapshot:
    """Compute exposure, beta, VaR and a Sharpe-like ratio for ``positions``."""

    position_value = sum((p.market_value for p in positions), 0.0)
    total_unrealized = sum((p.unrealized_pnl for p in positions), 0.0)
    exposure = sector_exposure(positions, unknown_label=unknown_sector)

    returns = position_returns(positions)
    mean_return = fmean(returns) if returns else 0.0
    volatility = pstdev(returns) if returns else 0.0
    # Zero volatility falls back to 1 so the ratio degrades to the mean return.
    sharpe_ratio = mean_return / (volatility or 1.0)

    correlation_risk = (
        CONCENTRATED_CORRELATION if len(exposure) <= MAX_CONCENTRATED_SECTORS else DIVERSIFIED_CORRELATION
    )
    largest = max((p.market_value for p in positions), default=0.0)
    position_risk_percent = safe_ratio(abs(total_unrealized), portfolio_value) * 100.0

    snapshot = RiskSnapshot(
        position_value=position_value,
        portfolio_value=portfolio_value,
        position_risk_percent=position_risk_percent,
        correlation_risk=correlation_risk,
        sector_values=tuple(exposure.items()),
        max_drawdown_percent=min(0.0, safe_ratio(total_unrealized, portfolio_value) * 100.0),
        value_at_risk=portfolio_value * volatility * z_score,
        beta=portfolio_beta(positions, market_data, default_beta=default_beta),
        sharpe_ratio=sharpe_ratio,
        volatility=volatility,
        mean_return=mean_return,
        concentration_percent=safe_ratio(largest, position_value) * 100.0,
        risk_level=classify_risk(position_risk_percent),
    )
    logger.debug(
        "Risk snapshot: value=%.2f beta=%.3f volatility=%.4f var=%.2f",
        position_value,
        snapshot.beta,
        volatility,
        snapshot.value_at_risk,
    )
    return snapshot


__all__ = [
    "DEFAULT_BETA",
    "UNKNOWN_SECTOR",
    "VAR_Z_SCORE_95",
    "analyze_risk",
    "classify_risk",
    "portfolio_beta",
    "position_returns",
    "sector_exposure",
]
