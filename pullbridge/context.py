"""Context keys published for the host application.

The host reads these keys elsewhere (for example to decide which views or
commands are enabled). Publishers push values synchronously through a
:class:`ContextSink`.
"""

from __future__ import annotations

import typing as typ

REPOS_MANAGER_STATE_CONTEXT = "ReposManagerState"
INITIALIZED_CONTEXT = "github:initialized"


@typ.runtime_checkable
class ContextSink(typ.Protocol):
    """Receiver for host context values."""

    def set_context(self, key: str, value: object) -> None:
        """Publish ``value`` under ``key``."""
        ...


class NullContext:
    """Sink that discards every value."""

    def set_context(self, key: str, value: object) -> None:
        """Ignore the update."""
        del key, value


class InMemoryContext:
    """Sink that keeps the latest value per key and an ordered change log."""

    def __init__(self) -> None:
        """Start with no values."""
        self.values: dict[str, object] = {}
        self.history: list[tuple[str, object]] = []

    def set_context(self, key: str, value: object) -> None:
        """Record ``value`` as the current value of ``key``."""
        self.values[key] = value
        self.history.append((key, value))

    def get(self, key: str, default: object = None) -> object:
        """Return the current value of ``key``."""
        return self.values.get(key, default)


__all__ = [
    "INITIALIZED_CONTEXT",
    "REPOS_MANAGER_STATE_CONTEXT",
    "ContextSink",
    "InMemoryContext",
    "NullContext",
]
