"""Pytest fixtures."""

import os

import pytest

from envcfg_config.settings import reset_settings
from envcfg_core import FieldSpec, MappingEnvironment, RecordSpec, TypeTag


class RecordingSink:
    """Event sink that keeps every event it receives."""

    def __init__(self):
        self.events = []

    def record_event(self, event) -> None:
        self.events.append(event)


@pytest.fixture
def recording_sink():
    """Fresh recording sink."""
    return RecordingSink()


@pytest.fixture
def record_spec():
    """api_key: text, port: u16, debug: optional bool."""
    return RecordSpec(
        name="Record",
        fields=(
            FieldSpec(name="api_key", type=TypeTag.TEXT),
            FieldSpec(name="port", type=TypeTag.U16),
            FieldSpec(name="debug", type=TypeTag.BOOL, optional=True),
        ),
    )


@pytest.fixture
def make_env():
    """Build an in-memory environment from a dict."""

    def _make(values: dict[str, str]) -> MappingEnvironment:
        return MappingEnvironment(values)

    return _make


@pytest.fixture(autouse=True)
def library_settings_env(monkeypatch):
    """Start every test from default library settings."""
    for name in list(os.environ):
        if name.upper().startswith("ENVCFG_"):
            monkeypatch.delenv(name)
    reset_settings()
    yield
    reset_settings()
