"""
Structured Logging (structlog).

Bind results are logged by record and variable name. The drop_raw_values
processor masks anything that could carry a configuration value, so a
secret never reaches the log stream even if a caller binds one to a logger.
"""

import logging
import sys
from typing import Any

import structlog

from envcfg_config.settings import Settings

RAW_VALUE_KEYS = frozenset({"value", "raw", "raw_value", "default"})


def drop_raw_values(logger: Any, method_name: str, event_dict: dict) -> dict:
    """structlog processor: mask value-bearing keys."""
    for key in RAW_VALUE_KEYS.intersection(event_dict):
        event_dict[key] = "<redacted>"
    return event_dict


def setup_logging(settings: Settings) -> None:
    """
    Configure structlog for envcfg.

    Output format: JSON (default) or console text (ENVCFG_LOG_FORMAT=text)
    Includes: logger name, level, ISO timestamp
    """
    logging.basicConfig(
        format="%(message)s", stream=sys.stdout, level=settings.LOG_LEVEL
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        drop_raw_values,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get an envcfg logger."""
    return structlog.get_logger(name)
