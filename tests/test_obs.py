"""Observability Tests."""

import structlog
from prometheus_client import REGISTRY

from envcfg_config.settings import Settings, reset_settings
from envcfg_core import NOOP_SINK, MappingEnvironment, bind
from envcfg_obs.logging import drop_raw_values, setup_logging
from envcfg_obs.metrics import observe_result
from envcfg_obs.sinks import (
    CompositeEventSink,
    LoggingEventSink,
    SpanEventSink,
    sink_from_settings,
)


def _sample(name: str, labels: dict) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_sink_disabled_by_default():
    """Test the hook is off unless enabled."""
    assert sink_from_settings(Settings()) is NOOP_SINK


def test_sink_selection():
    """Test ENVCFG_TRACE_SINK picks the concrete sink."""
    assert isinstance(
        sink_from_settings(Settings(TRACE_ENABLED=True)), LoggingEventSink
    )
    assert isinstance(
        sink_from_settings(Settings(TRACE_ENABLED=True, TRACE_SINK="otel")),
        SpanEventSink,
    )
    both = sink_from_settings(Settings(TRACE_ENABLED=True, TRACE_SINK="both"))
    assert isinstance(both, CompositeEventSink)
    assert len(both.sinks) == 2


def test_drop_raw_values_masks_value_keys():
    """Test the processor masks anything value-bearing."""
    event = drop_raw_values(
        None, "info", {"event": "x", "raw_value": "hunter2", "variable_name": "RECORD_API_KEY"}
    )
    assert event["raw_value"] == "<redacted>"
    assert event["variable_name"] == "RECORD_API_KEY"


def test_setup_logging_configures_structlog():
    """Test setup_logging installs the processor chain."""
    try:
        setup_logging(Settings(LOG_FORMAT="text", LOG_LEVEL="DEBUG"))
        processors = structlog.get_config()["processors"]
        assert drop_raw_values in processors
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
    finally:
        structlog.reset_defaults()


def test_observe_result_counts_binds_and_errors(record_spec, make_env):
    """Test metrics count binds by status and errors by reason."""
    labels = {"record": "Record", "status": "failure"}
    missing = {"record": "Record", "reason": "missing_required"}
    before_binds = _sample("envcfg_binds_total", labels)
    before_missing = _sample("envcfg_field_errors_total", missing)

    observe_result(bind(record_spec, make_env({})))

    assert _sample("envcfg_binds_total", labels) == before_binds + 1
    assert _sample("envcfg_field_errors_total", missing) == before_missing + 2


def test_metrics_enabled_from_settings(monkeypatch):
    """Test from_env updates counters when ENVCFG_METRICS_ENABLED is set."""
    from pydantic import BaseModel

    from envcfg_derive import env_config

    @env_config()
    class MetricsConfig(BaseModel):
        url: str

    labels = {"record": "MetricsConfig", "status": "success"}
    before = _sample("envcfg_binds_total", labels)

    MetricsConfig.from_env(MappingEnvironment({"METRICS_CONFIG_URL": "x"}))
    assert _sample("envcfg_binds_total", labels) == before

    monkeypatch.setenv("ENVCFG_METRICS_ENABLED", "true")
    reset_settings()
    MetricsConfig.from_env(MappingEnvironment({"METRICS_CONFIG_URL": "x"}))
    assert _sample("envcfg_binds_total", labels) == before + 1
