"""
envcfg Observability Package.

Provides:
- Structured logging (structlog)
- Bind event sinks (structlog / OpenTelemetry span events)
- Distributed tracing (OpenTelemetry)
- Metrics (Prometheus)
"""

__all__ = ["logging", "sinks", "tracing", "metrics"]
