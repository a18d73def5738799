"""Aggregator.

bind() runs the field binder over every field of a record in declaration
order and always completes the pass: a failing field never stops the
others, so one run reports every misconfigured variable.
"""

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from envcfg_core.binder import bind_field
from envcfg_core.coercion import render_value
from envcfg_core.environment import EnvironmentView, ProcessEnvironment
from envcfg_core.errors import ConfigError, FieldError
from envcfg_core.events import NOOP_SINK, BindEvent, EventSink
from envcfg_core.spec import RecordSpec
from envcfg_obs.logging import get_logger

logger = get_logger(__name__)


class ConfigResult(BaseModel):
    """Outcome of one bind: the record, or every field error."""

    model_config = ConfigDict(frozen=True)

    record_name: str
    record: Any = None
    errors: tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> Any:
        """Return the record or raise ConfigError listing every failure."""
        if self.errors:
            raise ConfigError(self.record_name, self.errors)
        return self.record

    def render(self) -> str:
        if self.ok:
            return f"{self.record_name}: all variables bound"
        return ConfigError(self.record_name, self.errors).render()


def bind(
    record: RecordSpec,
    environment: EnvironmentView | None = None,
    sink: EventSink | None = None,
    factory: Callable[..., Any] | None = None,
) -> ConfigResult:
    """
    Bind every field of a record from the environment.

    Args:
        record: Record declaration
        environment: Variable lookup (default: live process environment)
        sink: Receives one BindEvent per bound field (default: no-op)
        factory: Builds the record from keyword values (default: dict)

    Returns:
        ConfigResult with the record on success, or all FieldErrors in
        declaration order. The factory is never called on failure.
    """
    environment = environment if environment is not None else ProcessEnvironment()
    sink = sink if sink is not None else NOOP_SINK
    factory = factory if factory is not None else dict

    values: dict[str, Any] = {}
    errors: list[FieldError] = []

    for spec in record.fields:
        outcome = bind_field(record, spec, environment)
        if not outcome.ok:
            errors.append(outcome.error)
            continue

        values[spec.name] = outcome.value
        if sink is not NOOP_SINK:
            sink.record_event(
                BindEvent(
                    record_name=record.name,
                    field_name=outcome.field_name,
                    variable_name=outcome.variable_name,
                )
            )

    if errors:
        logger.warning(
            "env_record_bind_failed",
            record=record.name,
            error_count=len(errors),
            variables=[error.variable_name for error in errors],
        )
        return ConfigResult(record_name=record.name, errors=tuple(errors))

    logger.debug("env_record_bound", record=record.name, field_count=len(values))
    return ConfigResult(record_name=record.name, record=factory(**values))


def to_environment(record: RecordSpec, values: Mapping[str, Any]) -> dict[str, str]:
    """
    Serialize record values to the variables bind() would read them from.

    Optional fields holding None are omitted.
    """
    environment: dict[str, str] = {}
    for spec in record.fields:
        value = values[spec.name]
        if value is None:
            continue
        environment[record.variable_name(spec)] = render_value(value, spec.type)
    return environment
