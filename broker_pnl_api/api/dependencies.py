"""Shared FastAPI dependencies for the consolidation service."""

from __future__ import annotations

from broker_pnl_api.config import AppSettings, get_settings


def get_app_settings() -> AppSettings:
    return get_settings()


__all__ = ["get_app_settings"]
