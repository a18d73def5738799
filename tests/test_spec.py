"""Record and Field Declaration Tests."""

import pytest
from pydantic import ValidationError

from envcfg_core.errors import (
    DuplicateFieldError,
    ErrorReason,
    InvalidDefaultError,
    InvalidOverrideError,
    SpecError,
)
from envcfg_core.spec import FieldSpec, RecordSpec
from envcfg_core.types import TypeTag


def test_record_spec_variable_names(record_spec):
    """Test variable names follow declaration order."""
    assert record_spec.variable_names() == {
        "api_key": "RECORD_API_KEY",
        "port": "RECORD_PORT",
        "debug": "RECORD_DEBUG",
    }


def test_field_lookup(record_spec):
    """Test field lookup by name."""
    assert record_spec.field("port").type is TypeTag.U16
    assert record_spec.field("missing") is None


def test_override_replaces_derived_name():
    """Test override is used verbatim."""
    spec = RecordSpec(
        name="Record",
        fields=(FieldSpec(name="api_key", type=TypeTag.TEXT, env="API_TOKEN"),),
    )
    assert spec.variable_names() == {"api_key": "API_TOKEN"}


@pytest.mark.parametrize("override", ["", "   ", " PADDED", "A=B", "NUL\x00"])
def test_invalid_override_rejected_at_construction(override):
    """Test malformed overrides fail before any binding."""
    with pytest.raises(InvalidOverrideError) as exc_info:
        FieldSpec(name="api_key", type=TypeTag.TEXT, env=override)

    error = exc_info.value.error
    assert error.reason is ErrorReason.INVALID_OVERRIDE
    assert error.field_name == "api_key"
    assert error.variable_name == override
    assert isinstance(exc_info.value, SpecError)


def test_default_must_coerce():
    """Test a default literal is validated against the field type."""
    FieldSpec(name="port", type=TypeTag.U16, default="8080")

    with pytest.raises(InvalidDefaultError, match="port"):
        FieldSpec(name="port", type=TypeTag.U16, default="70000")


def test_optional_field_cannot_declare_default():
    """Test optional + default is rejected."""
    with pytest.raises(InvalidDefaultError):
        FieldSpec(name="debug", type=TypeTag.BOOL, optional=True, default="true")


def test_duplicate_field_names_rejected():
    """Test two fields with the same name are rejected."""
    with pytest.raises(DuplicateFieldError):
        RecordSpec(
            name="Record",
            fields=(
                FieldSpec(name="port", type=TypeTag.U16),
                FieldSpec(name="port", type=TypeTag.U32),
            ),
        )


def test_fields_reading_same_variable_rejected():
    """Test an override colliding with a derived name is rejected."""
    with pytest.raises(DuplicateFieldError, match="RECORD_PORT"):
        RecordSpec(
            name="Record",
            fields=(
                FieldSpec(name="port", type=TypeTag.U16),
                FieldSpec(name="listen_port", type=TypeTag.U16, env="RECORD_PORT"),
            ),
        )


def test_specs_are_frozen(record_spec):
    """Test declarations never mutate."""
    with pytest.raises(ValidationError):
        record_spec.name = "Other"
    with pytest.raises(ValidationError):
        record_spec.fields[0].optional = True


def test_unknown_type_tag_rejected():
    """Test type tags are validated."""
    with pytest.raises(ValidationError):
        FieldSpec(name="port", type="u7")
