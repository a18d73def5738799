"""
envcfg Binding Engine.

Binds the fields of a declared record to environment variables:
name derivation, type coercion, per-field policy and aggregated errors.
"""

from envcfg_core.binder import BindOutcome, bind_field
from envcfg_core.coercion import coerce, render_value
from envcfg_core.engine import ConfigResult, bind, to_environment
from envcfg_core.environment import EnvironmentView, MappingEnvironment, ProcessEnvironment
from envcfg_core.errors import (
    CoercionError,
    ConfigError,
    DuplicateFieldError,
    EnvConfigError,
    ErrorReason,
    FieldError,
    InvalidDefaultError,
    InvalidOverrideError,
    SpecError,
    UnsupportedTypeError,
)
from envcfg_core.events import NOOP_SINK, BindEvent, EventSink, NoopEventSink
from envcfg_core.naming import derive_variable_name, to_screaming_snake
from envcfg_core.spec import FieldSpec, RecordSpec
from envcfg_core.types import TypeTag

__all__ = [
    "BindEvent",
    "BindOutcome",
    "CoercionError",
    "ConfigError",
    "ConfigResult",
    "DuplicateFieldError",
    "EnvConfigError",
    "EnvironmentView",
    "ErrorReason",
    "EventSink",
    "FieldError",
    "FieldSpec",
    "InvalidDefaultError",
    "InvalidOverrideError",
    "MappingEnvironment",
    "NOOP_SINK",
    "NoopEventSink",
    "ProcessEnvironment",
    "RecordSpec",
    "SpecError",
    "TypeTag",
    "UnsupportedTypeError",
    "bind",
    "bind_field",
    "coerce",
    "derive_variable_name",
    "render_value",
    "to_environment",
    "to_screaming_snake",
]
