"""Binding errors.

Custom exception hierarchy plus the FieldError value reported per failing field.

Spec-construction errors subclass Exception rather than ValueError so they
propagate unwrapped out of pydantic validators.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from envcfg_core.types import TypeTag


class ErrorReason(str, Enum):
    """Why a field failed to bind."""

    MISSING_REQUIRED = "missing_required"
    COERCION_FAILED = "coercion_failed"
    INVALID_OVERRIDE = "invalid_override"


class FieldError(BaseModel):
    """One failing field: which variable was checked and why it failed."""

    model_config = ConfigDict(frozen=True)

    field_name: str
    variable_name: str
    reason: ErrorReason
    raw_value: str | None = None
    type_tag: TypeTag | None = None
    detail: str = ""

    @property
    def message(self) -> str:
        """Single operator-facing line."""
        if self.reason is ErrorReason.MISSING_REQUIRED:
            text = f"{self.variable_name} is not set (required by field '{self.field_name}')"
        elif self.reason is ErrorReason.COERCION_FAILED and self.raw_value is None:
            text = f"{self.variable_name} rejected by '{self.field_name}'"
        elif self.reason is ErrorReason.COERCION_FAILED:
            tag = self.type_tag.value if self.type_tag else "?"
            text = (
                f"{self.variable_name}={self.raw_value!r} is not a valid {tag} "
                f"(field '{self.field_name}')"
            )
        else:
            text = f"invalid variable name {self.variable_name!r} for field '{self.field_name}'"
        if self.detail:
            text = f"{text}: {self.detail}"
        return text

    def __str__(self) -> str:
        return self.message


class EnvConfigError(Exception):
    """Base exception for environment binding."""

    pass


# ============================================================================
# SPEC CONSTRUCTION ERRORS (fatal, raised before any environment access)
# ============================================================================


class SpecError(EnvConfigError):
    """Record or field declaration is unusable."""

    pass


class InvalidOverrideError(SpecError):
    """Explicit variable name override is malformed."""

    def __init__(self, error: FieldError):
        super().__init__(error.message)
        self.error = error


class InvalidDefaultError(SpecError):
    """Default literal does not fit the field."""

    pass


class DuplicateFieldError(SpecError):
    """Two fields share a name or resolve to the same variable."""

    pass


class UnsupportedTypeError(SpecError):
    """Annotation has no matching type tag."""

    pass


# ============================================================================
# BIND-TIME ERRORS
# ============================================================================


class CoercionError(EnvConfigError):
    """Raw text cannot be converted to the target type."""

    def __init__(self, raw: str, type_tag: TypeTag, detail: str = ""):
        message = f"cannot parse {raw!r} as {type_tag.value}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.raw = raw
        self.type_tag = type_tag
        self.detail = detail


class ConfigError(EnvConfigError):
    """Aggregated failure: every field that could not be bound."""

    def __init__(self, record_name: str, errors: list[FieldError] | tuple[FieldError, ...]):
        self.record_name = record_name
        self.errors = tuple(errors)
        super().__init__(self.render())

    def render(self) -> str:
        lines = [f"{len(self.errors)} environment error(s) in {self.record_name}:"]
        lines.extend(f"  - {error.message}" for error in self.errors)
        return "\n".join(lines)
