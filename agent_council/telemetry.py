"""OpenTelemetry tracing for Agent Council.

An OTLP exporter is installed only when OTEL_EXPORTER_OTLP_ENDPOINT is
configured. Until then the OpenTelemetry API hands out its built-in
non-recording tracer, so spans cost nothing.
"""

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Status, StatusCode

from . import __version__

logger = logging.getLogger(__name__)

OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "agent-council")

_telemetry_enabled = False


def is_telemetry_enabled() -> bool:
    """Check if OpenTelemetry tracing is enabled."""
    return _telemetry_enabled


def setup_telemetry() -> bool:
    """Install the OTLP tracer provider if an endpoint is configured.

    Returns:
        True if telemetry was configured, False otherwise.
    """
    global _telemetry_enabled

    if not OTEL_EXPORTER_OTLP_ENDPOINT:
        logger.info("OpenTelemetry disabled: OTEL_EXPORTER_OTLP_ENDPOINT not configured")
        return False

    resource = Resource.create(
        {
            "service.name": OTEL_SERVICE_NAME,
            "service.version": __version__,
        }
    )
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=OTEL_EXPORTER_OTLP_ENDPOINT))
    )
    trace.set_tracer_provider(provider)
    _telemetry_enabled = True

    logger.info(
        "OpenTelemetry initialized. Endpoint: %s, Service: %s",
        OTEL_EXPORTER_OTLP_ENDPOINT,
        OTEL_SERVICE_NAME,
    )
    return True


def get_tracer() -> trace.Tracer:
    """Tracer for council spans (non-recording until telemetry is set up)."""
    return trace.get_tracer("agent_council")


def instrument_fastapi(app: Any) -> None:
    """Instrument a FastAPI application when telemetry is enabled."""
    if not _telemetry_enabled:
        logger.debug("Skipping FastAPI instrumentation: telemetry disabled")
        return

    FastAPIInstrumentor.instrument_app(app)
    logger.info("FastAPI instrumentation enabled")


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Iterator[trace.Span]:
    """Create a traced span as a context manager.

    Exceptions escaping the block are recorded on the span by OpenTelemetry.

    Args:
        name: The name of the span.
        attributes: Optional attributes to set on the span.

    Yields:
        The active span.
    """
    with get_tracer().start_as_current_span(name) as span:
        if attributes:
            span.set_attributes(attributes)
        yield span


def mark_failed(span: trace.Span, code: str) -> None:
    """Tag a span with a caller-facing error code."""
    span.set_attribute("council.error_code", code)
    span.set_status(Status(StatusCode.ERROR, code))
