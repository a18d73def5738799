"""Field Binder.

Per-field policy:
- present -> coerce, or CoercionFailed
- absent + optional -> None
- absent + default literal -> coerced default
- absent otherwise -> MissingRequired
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from envcfg_core.coercion import coerce
from envcfg_core.environment import EnvironmentView
from envcfg_core.errors import CoercionError, ErrorReason, FieldError
from envcfg_core.spec import FieldSpec, RecordSpec


class BindOutcome(BaseModel):
    """Result of binding one field: a value or a FieldError."""

    model_config = ConfigDict(frozen=True)

    field_name: str
    variable_name: str
    value: Any = None
    error: FieldError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def bind_field(record: RecordSpec, spec: FieldSpec, environment: EnvironmentView) -> BindOutcome:
    """Resolve one field from the environment. Never raises for bad input."""
    variable = record.variable_name(spec)
    raw = environment.get(variable)

    if raw is None:
        if spec.optional:
            return BindOutcome(field_name=spec.name, variable_name=variable, value=None)
        if spec.default is not None:
            # Validated when the FieldSpec was built
            value = coerce(spec.default, spec.type)
            return BindOutcome(field_name=spec.name, variable_name=variable, value=value)
        return BindOutcome(
            field_name=spec.name,
            variable_name=variable,
            error=FieldError(
                field_name=spec.name,
                variable_name=variable,
                reason=ErrorReason.MISSING_REQUIRED,
                type_tag=spec.type,
            ),
        )

    try:
        value = coerce(raw, spec.type)
    except CoercionError as exc:
        return BindOutcome(
            field_name=spec.name,
            variable_name=variable,
            error=FieldError(
                field_name=spec.name,
                variable_name=variable,
                reason=ErrorReason.COERCION_FAILED,
                raw_value=exc.raw,
                type_tag=exc.type_tag,
                detail=exc.detail,
            ),
        )
    return BindOutcome(field_name=spec.name, variable_name=variable, value=value)
