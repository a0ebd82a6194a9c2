"""OpenTelemetry configuration helpers."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI
from opentelemetry import metrics, trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk._logs import LoggerProvider
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.metrics.view import ExplicitBucketHistogramAggregation, View
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.semconv.resource import ResourceAttributes

from broker_pnl_api.config import AppSettings

logger = logging.getLogger(__name__)

_TELEMETRY_INITIALISED = False
_METRIC_EXPORT_INTERVAL_MS = 10000
# Positions per evaluated snapshot.
SNAPSHOT_POSITION_BUCKETS = (0.0, 1.0, 5.0, 10.0, 25.0, 50.0, 100.0, 250.0, 500.0, 1000.0)


def _build_resource(settings: AppSettings) -> Resource:
    attributes: dict[str, Any] = {
        ResourceAttributes.SERVICE_NAME: settings.telemetry_service_name or settings.app_name,
        ResourceAttributes.SERVICE_NAMESPACE: "broker-pnl",
        "broker_pnl.risk.var_z_score": settings.var_z_score,
        "broker_pnl.risk.default_beta": settings.default_beta,
    }
    return Resource.create(attributes)


def metric_views() -> list[View]:
    """Histogram buckets for the dashboard service's own instruments."""

    return [
        View(
            instrument_name="broker_pnl.snapshot.positions",
            aggregation=ExplicitBucketHistogramAggregation(boundaries=SNAPSHOT_POSITION_BUCKETS),
        )
    ]


def setup_telemetry(app: FastAPI, settings: AppSettings) -> bool:
    """Configure OTLP exporters and instrument FastAPI.

    Returns ``True`` when instrumentation is active after the call.
    """

    global _TELEMETRY_INITIALISED  # noqa: PLW0603 - single initialisation guard

    if _TELEMETRY_INITIALISED:
        return True

    if not settings.telemetry_enabled:
        logger.info("Telemetry disabled via configuration")
        return False

    resource = _build_resource(settings)
    sampler = ParentBased(TraceIdRatioBased(settings.telemetry_sample_ratio))
    exporter_options = _build_exporter_options(settings)

    tracer_provider = _configure_tracing(resource, sampler, exporter_options)
    meter_provider = _configure_metrics(resource, exporter_options)
    _configure_logging(resource, exporter_options)

    FastAPIInstrumentor.instrument_app(
        app,
        tracer_provider=tracer_provider,
        meter_provider=meter_provider,
        excluded_urls="health",
    )

    _TELEMETRY_INITIALISED = True
    logger.info("Telemetry initialised and instrumentation enabled")
    return True


# Helpers

def _build_exporter_options(settings: AppSettings) -> dict[str, Any]:
    options: dict[str, Any] = {"insecure": settings.telemetry_otlp_insecure}
    if settings.telemetry_otlp_endpoint:
        options["endpoint"] = settings.telemetry_otlp_endpoint
    return options


def _configure_tracing(
    resource: Resource,
    sampler: ParentBased,
    exporter_options: dict[str, Any],
) -> TracerProvider:
    tracer_provider = TracerProvider(resource=resource, sampler=sampler)
    span_processor = BatchSpanProcessor(OTLPSpanExporter(**exporter_options))
    tracer_provider.add_span_processor(span_processor)
    trace.set_tracer_provider(tracer_provider)
    return tracer_provider


def _configure_metrics(
    resource: Resource,
    exporter_options: dict[str, Any],
) -> MeterProvider:
    metric_exporter = OTLPMetricExporter(**exporter_options)
    metric_reader = PeriodicExportingMetricReader(
        metric_exporter,
        export_interval_millis=_METRIC_EXPORT_INTERVAL_MS,
    )
    meter_provider = MeterProvider(
        resource=resource,
        metric_readers=[metric_reader],
        views=metric_views(),
    )
    metrics.set_meter_provider(meter_provider)
    return meter_provider


def _configure_logging(resource: Resource, exporter_options: dict[str, Any]) -> None:
    logger_provider = LoggerProvider(resource=resource)
    log_exporter = OTLPLogExporter(**exporter_options)
    logger_provider.add_log_record_processor(BatchLogRecordProcessor(log_exporter))
    set_logger_provider(logger_provider)
    LoggingInstrumentor().instrument(set_logging_format=False)


__all__ = ["SNAPSHOT_POSITION_BUCKETS", "metric_views", "setup_telemetry"]
