"""
Distributed Tracing Setup (OpenTelemetry).

setup_tracing() installs an SDK provider exporting over OTLP; bind_span()
wraps one record bind. Without a provider the API tracer is a no-op.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from envcfg_config.settings import Settings
from envcfg_obs.logging import get_logger

logger = get_logger(__name__)

BIND_SPAN_NAME = "envcfg.bind"


def setup_tracing(settings: Settings) -> None:
    """
    Setup OpenTelemetry tracing for bind spans.

    Exports: OTLP (Jaeger/Tempo/Collector)
    """
    if not settings.OTEL_TRACES_ENABLED:
        return

    resource = Resource.create(
        {
            "service.name": settings.OTEL_SERVICE_NAME,
            "deployment.environment": settings.ENVIRONMENT,
        }
    )

    provider = TracerProvider(resource=resource)
    otlp_exporter = OTLPSpanExporter(endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT)
    provider.add_span_processor(BatchSpanProcessor(otlp_exporter))
    trace.set_tracer_provider(provider)

    logger.info(
        "otel_tracing_enabled",
        service=settings.OTEL_SERVICE_NAME,
        endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT,
    )


@contextmanager
def bind_span(record_name: str, field_count: int) -> Iterator[trace.Span]:
    """Span around one bind of a record."""
    tracer = trace.get_tracer("envcfg")
    with tracer.start_as_current_span(BIND_SPAN_NAME) as span:
        span.set_attribute("envcfg.record", record_name)
        span.set_attribute("envcfg.field_count", field_count)
        yield span
