"""Dashboard evaluation endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from broker_pnl_api.api.dependencies import get_app_settings
from broker_pnl_api.config import AppSettings
from broker_pnl_api.schemas import (
    DashboardResponse,
    PositionsViewRequest,
    PositionsViewResponse,
    SnapshotRequest,
)
from broker_pnl_api.services import dashboard as dashboard_service

router = APIRouter()


@router.post("/evaluate", response_model=DashboardResponse)
async def evaluate_snapshot(
    request: SnapshotRequest,
    settings: AppSettings = Depends(get_app_settings),
) -> DashboardResponse:
    """Return aggregates, broker summaries, totals and risk for one snapshot."""

    return dashboard_service.evaluate_dashboard(request, settings)


@router.post("/positions", response_model=PositionsViewResponse)
async def view_positions(
    request: PositionsViewRequest,
    settings: AppSettings = Depends(get_app_settings),
) -> PositionsViewResponse:
    """Return the symbol-level positions table filtered and sorted as requested."""

    try:
        return dashboard_service.positions_view(request, settings)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


__all__ = ["evaluate_snapshot", "view_positions"]
