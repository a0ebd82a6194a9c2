"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from broker_pnl_api.api.routes import api_router
from broker_pnl_api.config import get_settings
from broker_pnl_api.core.logging import setup_logging
from broker_pnl_api.core.telemetry import setup_telemetry

logger = logging.getLogger(__name__)

settings = get_settings()
app = FastAPI(title=settings.app_name, version="0.1.0")
setup_logging()
setup_telemetry(app, settings)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["traceparent", "tracestate", "x-request-id"],
)


@app.on_event("startup")
async def startup() -> None:
    logger.info("Consolidation service configuration: %s", settings.dict_for_logging())


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    """Return service readiness metadata."""

    return {
        "status": "ok",
        "timestamp": datetime.now().isoformat(),
    }


def configure_app() -> FastAPI:
    """Attach routes and dependencies."""

    app.include_router(api_router)
    return app


configure_app()

__all__ = ["app", "configure_app"]
