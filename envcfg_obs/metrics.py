"""
Prometheus Metrics Registration.

Bind counters, labelled by record name. Updated from the model glue when
ENVCFG_METRICS_ENABLED is set.
"""

from prometheus_client import Counter

from envcfg_core.engine import ConfigResult

# ============================================================================
# COUNTERS
# ============================================================================

binds_total = Counter(
    "envcfg_binds_total",
    "Record binds from the environment",
    ["record", "status"],  # success, failure
)

field_errors_total = Counter(
    "envcfg_field_errors_total",
    "Fields that failed to bind",
    ["record", "reason"],  # missing_required, coercion_failed
)


def observe_result(result: ConfigResult) -> None:
    """Count one bind result."""
    status = "success" if result.ok else "failure"
    binds_total.labels(record=result.record_name, status=status).inc()
    for error in result.errors:
        field_errors_total.labels(record=result.record_name, reason=error.reason.value).inc()
