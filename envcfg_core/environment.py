"""Environment views.

The engine only ever reads variables through EnvironmentView.get(), so tests
can bind against an in-memory mapping instead of mutating os.environ.
"""

import os
from collections.abc import Mapping
from typing import Protocol


class EnvironmentView(Protocol):
    """Read-only variable lookup."""

    def get(self, name: str) -> str | None:
        """Return the variable value, or None when unset."""
        ...


class ProcessEnvironment:
    """Live view of the process environment (read fresh on every lookup)."""

    def get(self, name: str) -> str | None:
        return os.environ.get(name)


class MappingEnvironment:
    """Snapshot of a plain mapping."""

    def __init__(self, values: Mapping[str, str] | None = None):
        self._values = dict(values or {})

    def get(self, name: str) -> str | None:
        return self._values.get(name)

    def __repr__(self) -> str:
        return f"MappingEnvironment({sorted(self._values)})"
