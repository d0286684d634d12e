"""OpenTelemetry setup and span helpers.

Spans are exported over OTLP/HTTP, which Jaeger's all-in-one image accepts
on port 4318.
"""

import functools
import logging
from typing import Any, Callable, Optional, TypeVar

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Status, StatusCode

from todo_service.config import settings

F = TypeVar("F", bound=Callable[..., Any])

_current_provider: Optional[TracerProvider] = None

logger = logging.getLogger(__name__)


def build_tracer_provider(service_name: str, endpoint: str) -> TracerProvider:
    """Create a provider that batches spans to an OTLP/HTTP collector."""
    resource = Resource(
        attributes={
            "service.name": service_name,
            "service.namespace": "todos",
        }
    )
    provider = TracerProvider(resource=resource)

    exporter = OTLPSpanExporter(endpoint=endpoint, timeout=30)
    provider.add_span_processor(BatchSpanProcessor(exporter))
    return provider


def setup_opentelemetry() -> TracerProvider:
    global _current_provider

    if _current_provider is not None:
        return _current_provider

    provider = build_tracer_provider(
        settings.service_name, settings.otlp_traces_endpoint
    )
    trace.set_tracer_provider(provider)
    _current_provider = provider

    logger.info(
        f"OpenTelemetry initialized, exporting to {settings.otlp_traces_endpoint}"
    )
    return provider


def shutdown_opentelemetry() -> None:
    """Flush pending spans and stop the exporter."""
    global _current_provider
    if _current_provider is not None:
        _current_provider.shutdown()
        _current_provider = None


def traced(span_name: Optional[str] = None) -> Callable[[F], F]:
    """Run an async function inside a child span named after it."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = trace.get_tracer(func.__module__)
            with tracer.start_as_current_span(span_name or func.__name__) as span:
                span.set_attribute("code.function", func.__name__)
                span.set_attribute("code.namespace", func.__module__)
                try:
                    result = await func(*args, **kwargs)
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper  # type: ignore[return-value]

    return decorator
