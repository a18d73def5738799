"""Bind Event Sinks.

Concrete EventSink implementations. The binding engine only knows the
EventSink protocol; the sink chosen here decides where events end up.
"""

from opentelemetry import trace

from envcfg_config.settings import Settings
from envcfg_core.events import NOOP_SINK, BindEvent, EventSink
from envcfg_obs.logging import get_logger

FIELD_BOUND_EVENT = "env_field_bound"


class LoggingEventSink:
    """Emits a debug-level structlog event per bound field."""

    def __init__(self, logger=None):
        self._logger = logger or get_logger("envcfg.trace")

    def record_event(self, event: BindEvent) -> None:
        self._logger.debug(
            FIELD_BOUND_EVENT,
            record_name=event.record_name,
            field_name=event.field_name,
            variable_name=event.variable_name,
        )


class SpanEventSink:
    """Adds an OpenTelemetry event to the current span per bound field."""

    def record_event(self, event: BindEvent) -> None:
        span = trace.get_current_span()
        if not span.is_recording():
            return
        span.add_event(
            FIELD_BOUND_EVENT,
            attributes={
                "envcfg.record": event.record_name,
                "envcfg.field": event.field_name,
                "envcfg.variable": event.variable_name,
            },
        )


class CompositeEventSink:
    """Fans each event out to several sinks."""

    def __init__(self, *sinks: EventSink):
        self.sinks = sinks

    def record_event(self, event: BindEvent) -> None:
        for sink in self.sinks:
            sink.record_event(event)


def sink_from_settings(settings: Settings) -> EventSink:
    """
    Select the event sink from settings.

    TRACE_ENABLED=false -> no-op sink (no events constructed)
    TRACE_SINK: log | otel | both
    """
    if not settings.TRACE_ENABLED:
        return NOOP_SINK

    if settings.TRACE_SINK == "otel":
        return SpanEventSink()
    if settings.TRACE_SINK == "both":
        return CompositeEventSink(LoggingEventSink(), SpanEventSink())
    return LoggingEventSink()
