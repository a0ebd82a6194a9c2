"""Application configuration and environment helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings

from broker_pnl.risk import DEFAULT_BETA, UNKNOWN_SECTOR, VAR_Z_SCORE_95
from broker_pnl.views import DEFAULT_BREAK_EVEN_BAND


class AppSettings(BaseSettings):
    """Configuration options for the consolidation service."""

    app_name: str = Field(default="Multi-Broker P&L Consolidation")
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    default_beta: float = Field(
        default=DEFAULT_BETA,
        description="Beta assumed for symbols the market data feed has no beta for.",
    )
    var_z_score: float = Field(
        default=VAR_Z_SCORE_95,
        gt=0.0,
        description="One-tailed z-score used by the Value-at-Risk approximation.",
    )
    unknown_sector_label: str = Field(default=UNKNOWN_SECTOR)
    break_even_band: float = Field(
        default=DEFAULT_BREAK_EVEN_BAND,
        ge=0.0,
        description="Absolute P&L within which a position counts as break-even.",
    )

    telemetry_enabled: bool = Field(default=False)
    telemetry_service_name: str = Field(default="broker-pnl")
    telemetry_otlp_endpoint: str | None = Field(default=None)
    telemetry_otlp_insecure: bool = Field(default=True)
    telemetry_sample_ratio: float = Field(default=1.0, ge=0.0, le=1.0)

    class Config:
        env_prefix = "BROKER_PNL_"
        env_file = ".env"
        env_file_encoding = "utf-8"

    def dict_for_logging(self) -> dict[str, Any]:
        """Return a sanitised dict for logging purposes."""

        hidden = {"telemetry_otlp_endpoint"}
        return {k: ("***" if k in hidden and v else v) for k, v in self.model_dump().items()}


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """Return cached application settings with optional overrides."""

    if overrides:
        return AppSettings(**overrides)
    return AppSettings()


__all__ = ["AppSettings", "get_settings"]
