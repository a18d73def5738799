"""Bind events and the abstract sink they are recorded against.

Events carry names only; raw values never leave the binder.
"""

from typing import Protocol

from pydantic import BaseModel, ConfigDict


class BindEvent(BaseModel):
    """A field bound successfully."""

    model_config = ConfigDict(frozen=True)

    record_name: str
    field_name: str
    variable_name: str


class EventSink(Protocol):
    """Receives one event per successfully bound field."""

    def record_event(self, event: BindEvent) -> None:
        ...


class NoopEventSink:
    """Default sink: discards everything."""

    def record_event(self, event: BindEvent) -> None:
        pass


NOOP_SINK = NoopEventSink()
