"""Pydantic model glue.

Builds a RecordSpec from a pydantic model by reflection and attaches the
"build configuration from environment" entry points:

    @env_config()
    class ServerConfig(BaseModel):
        api_key: str
        port: Annotated[int, EnvField(type=TypeTag.U16, default="8080")]
        debug: bool | None = None

    ServerConfig.from_env()  # reads SERVER_CONFIG_API_KEY, SERVER_CONFIG_PORT, ...

The RecordSpec is derived once, at decoration time, so a bad override or
default fails when the class is defined.
"""

import types
import typing
from typing import Any

from pydantic import BaseModel, ValidationError
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined

from envcfg_config.settings import Settings, get_settings
from envcfg_core.coercion import render_value
from envcfg_core.engine import ConfigResult, bind
from envcfg_core.environment import EnvironmentView
from envcfg_core.errors import ErrorReason, FieldError, InvalidDefaultError, UnsupportedTypeError
from envcfg_core.events import EventSink
from envcfg_core.spec import FieldSpec, RecordSpec
from envcfg_core.types import TypeTag
from envcfg_obs.logging import get_logger
from envcfg_obs.metrics import observe_result
from envcfg_obs.sinks import sink_from_settings
from envcfg_obs.tracing import bind_span

logger = get_logger(__name__)

DEFAULT_TAGS: dict[type, TypeTag] = {
    str: TypeTag.TEXT,
    bool: TypeTag.BOOL,
    int: TypeTag.I64,
    float: TypeTag.F64,
}


class EnvField:
    """Per-field attributes, attached with typing.Annotated."""

    def __init__(
        self,
        type: TypeTag | None = None,
        env: str | None = None,
        default: str | None = None,
    ):
        self.type = type
        self.env = env
        self.default = default

    def __repr__(self) -> str:
        return f"EnvField(type={self.type}, env={self.env!r}, default={self.default!r})"


def _python_type(tag: TypeTag) -> type:
    if tag in (TypeTag.TEXT, TypeTag.CHAR):
        return str
    if tag is TypeTag.BOOL:
        return bool
    if tag.is_integer:
        return int
    return float


def _split_optional(annotation: Any) -> tuple[Any, bool]:
    """X | None -> (X, True); anything else -> (annotation, False)."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0], True
    return annotation, False


def _default_literal(
    model_name: str, name: str, info: FieldInfo, tag: TypeTag, optional: bool
) -> str | None:
    """Model default -> default literal; None when the model declares none."""
    if info.default is PydanticUndefined or info.default is None:
        return None
    if optional:
        raise InvalidDefaultError(
            f"{model_name}.{name}: optional fields cannot declare a default "
            f"(got {info.default!r}); an absent variable binds None"
        )
    try:
        return render_value(info.default, tag)
    except (TypeError, ValueError) as exc:
        raise InvalidDefaultError(
            f"{model_name}.{name}: default {info.default!r} does not fit {tag.value}"
        ) from exc


def _field_spec(model_name: str, name: str, info: FieldInfo) -> FieldSpec:
    marker = next((item for item in info.metadata if isinstance(item, EnvField)), EnvField())
    base, optional = _split_optional(info.annotation)

    if marker.type is not None:
        if _python_type(marker.type) is not base:
            raise UnsupportedTypeError(
                f"{model_name}.{name}: {marker.type.value} does not fit annotation {base!r}"
            )
        tag = marker.type
    elif base in DEFAULT_TAGS:
        tag = DEFAULT_TAGS[base]
    else:
        raise UnsupportedTypeError(f"{model_name}.{name}: unsupported annotation {base!r}")

    default = marker.default
    if default is None:
        default = _default_literal(model_name, name, info, tag, optional)

    return FieldSpec(name=name, type=tag, optional=optional, default=default, env=marker.env)


def record_spec_from_model(model: type[BaseModel], name: str | None = None) -> RecordSpec:
    """Derive a RecordSpec from a pydantic model's fields, in declaration order."""
    record_name = name or model.__name__
    fields = tuple(
        _field_spec(record_name, field_name, info)
        for field_name, info in model.model_fields.items()
    )
    return RecordSpec(name=record_name, fields=fields)


def _library_settings() -> Settings:
    """Shared library settings; defaults when ENVCFG_* variables are invalid."""
    try:
        return get_settings()
    except ValidationError as exc:
        logger.warning("envcfg_settings_invalid", error_count=exc.error_count())
        return Settings.model_construct()


def _build_model(model: type[BaseModel], spec: RecordSpec, result: ConfigResult) -> ConfigResult:
    """
    Validate bound values against the model.

    Constraint and validator failures become FieldErrors on the variables
    that fed them; errors without a field location are charged to every
    variable of the record.
    """
    values = result.record
    aliases = {
        (info.alias or field_name): field_name for field_name, info in model.model_fields.items()
    }
    payload = {
        model.model_fields[field_name].alias or field_name: value
        for field_name, value in values.items()
    }

    try:
        return ConfigResult(record_name=spec.name, record=model(**payload))
    except ValidationError as exc:
        errors = []
        for error in exc.errors():
            location = error["loc"][0] if error["loc"] else None
            field_name = aliases.get(location, location)
            field = spec.field(field_name) if isinstance(field_name, str) else None

            if field is None:
                errors.append(
                    FieldError(
                        field_name=model.__name__,
                        variable_name=", ".join(spec.variable_names().values()),
                        reason=ErrorReason.COERCION_FAILED,
                        detail=error["msg"],
                    )
                )
                continue

            value = values.get(field.name)
            errors.append(
                FieldError(
                    field_name=field.name,
                    variable_name=spec.variable_name(field),
                    reason=ErrorReason.COERCION_FAILED,
                    raw_value=None if value is None else render_value(value, field.type),
                    type_tag=field.type,
                    detail=error["msg"],
                )
            )

    logger.warning(
        "env_record_validation_failed",
        record=spec.name,
        error_count=len(errors),
        variables=[error.variable_name for error in errors],
    )
    return ConfigResult(record_name=spec.name, errors=tuple(errors))


def env_config(name: str | None = None):
    """
    Class decorator adding env_spec, try_from_env() and from_env().

    Args:
        name: Record name used as variable prefix (default: class name)
    """

    def decorate(model: type[BaseModel]) -> type[BaseModel]:
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            raise TypeError("env_config decorates pydantic BaseModel subclasses")

        spec = record_spec_from_model(model, name)

        def try_from_env(
            cls, environment: EnvironmentView | None = None, sink: EventSink | None = None
        ) -> ConfigResult:
            settings = _library_settings()
            if sink is None:
                sink = sink_from_settings(settings)
            with bind_span(spec.name, len(spec.fields)):
                result = bind(spec, environment, sink)
                if result.ok:
                    result = _build_model(cls, spec, result)
            if settings.METRICS_ENABLED:
                observe_result(result)
            return result

        def from_env(
            cls, environment: EnvironmentView | None = None, sink: EventSink | None = None
        ):
            return try_from_env(cls, environment, sink).unwrap()

        model.env_spec = spec
        model.try_from_env = classmethod(try_from_env)
        model.from_env = classmethod(from_env)
        return model

    return decorate
