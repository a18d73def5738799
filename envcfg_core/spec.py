"""Record and field declarations.

FieldSpec / RecordSpec are frozen and fully validated at construction, so a
malformed override or default fails before any environment access.
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from envcfg_core.coercion import coerce
from envcfg_core.errors import (
    CoercionError,
    DuplicateFieldError,
    ErrorReason,
    FieldError,
    InvalidDefaultError,
    InvalidOverrideError,
)
from envcfg_core.naming import resolve_variable_name
from envcfg_core.types import TypeTag


class FieldSpec(BaseModel):
    """One record field as declared."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Field identifier")
    type: TypeTag = Field(..., description="Semantic type of the value")
    optional: bool = Field(False, description="Absent variable binds to None")
    default: str | None = Field(None, description="Default literal used when the variable is absent")
    env: str | None = Field(None, description="Explicit variable name, used verbatim")

    @field_validator("env")
    @classmethod
    def check_override(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is None:
            return value

        detail = ""
        if not value.strip():
            detail = "override must not be empty"
        elif value != value.strip():
            detail = "override must not have surrounding whitespace"
        elif "=" in value or "\x00" in value:
            detail = "override must not contain '=' or NUL"

        if detail:
            raise InvalidOverrideError(
                FieldError(
                    field_name=info.data.get("name", "?"),
                    variable_name=value,
                    reason=ErrorReason.INVALID_OVERRIDE,
                    detail=detail,
                )
            )
        return value

    @model_validator(mode="after")
    def check_default(self) -> "FieldSpec":
        if self.default is None:
            return self
        if self.optional:
            raise InvalidDefaultError(
                f"field '{self.name}': optional fields cannot declare a default"
            )
        try:
            coerce(self.default, self.type)
        except CoercionError as exc:
            raise InvalidDefaultError(f"field '{self.name}': default {exc}") from exc
        return self


class RecordSpec(BaseModel):
    """Ordered field declarations of one record type."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Record name, used as variable prefix")
    fields: tuple[FieldSpec, ...] = ()

    @model_validator(mode="after")
    def check_unique(self) -> "RecordSpec":
        seen_fields: set[str] = set()
        seen_variables: dict[str, str] = {}
        for spec in self.fields:
            if spec.name in seen_fields:
                raise DuplicateFieldError(f"{self.name}: field '{spec.name}' declared twice")
            seen_fields.add(spec.name)

            variable = self.variable_name(spec)
            if variable in seen_variables:
                raise DuplicateFieldError(
                    f"{self.name}: fields '{seen_variables[variable]}' and '{spec.name}' "
                    f"both read {variable}"
                )
            seen_variables[variable] = spec.name
        return self

    def variable_name(self, spec: FieldSpec) -> str:
        """Variable name a field reads."""
        return resolve_variable_name(self.name, spec.name, spec.env)

    def variable_names(self) -> dict[str, str]:
        """Field name -> variable name, in declaration order."""
        return {spec.name: self.variable_name(spec) for spec in self.fields}

    def field(self, name: str) -> FieldSpec | None:
        return next((spec for spec in self.fields if spec.name == name), None)
