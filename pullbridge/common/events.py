"""Synchronous publish/subscribe primitives.

An :class:`EventEmitter` owns a listener list and exposes a subscribe
callable through :attr:`EventEmitter.event`. Subscribing returns a
:class:`Subscription` whose ``dispose()`` detaches the listener; disposal is
idempotent so owners can release subscriptions unconditionally at teardown.

Usage
-----
>>> emitter: EventEmitter[int] = EventEmitter()
>>> seen: list[int] = []
>>> sub = emitter.event(seen.append)
>>> emitter.fire(1)
>>> sub.dispose()
>>> emitter.fire(2)
>>> seen
[1]

"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

type Listener[T] = cabc.Callable[[T], object]
type Event[T] = cabc.Callable[[Listener[T]], Subscription]


@typ.runtime_checkable
class Disposable(typ.Protocol):
    """Anything that releases resources through ``dispose()``."""

    def dispose(self) -> None:
        """Release held resources."""
        ...


class Subscription:
    """Handle returned by subscribing to an event."""

    __slots__ = ("_on_dispose",)

    def __init__(self, on_dispose: cabc.Callable[[], None] | None = None) -> None:
        """Store the detach callback run on first disposal."""
        self._on_dispose = on_dispose

    @property
    def disposed(self) -> bool:
        """Return True once ``dispose()`` has run."""
        return self._on_dispose is None

    def dispose(self) -> None:
        """Detach the listener; later calls do nothing."""
        on_dispose, self._on_dispose = self._on_dispose, None
        if on_dispose is not None:
            on_dispose()


class EventEmitter[T]:
    """Fire values to listeners in subscription order."""

    def __init__(self) -> None:
        """Start with no listeners."""
        self._listeners: list[Listener[T]] = []
        self._disposed = False

    @property
    def listener_count(self) -> int:
        """Return the number of attached listeners."""
        return len(self._listeners)

    def event(self, listener: Listener[T]) -> Subscription:
        """Subscribe ``listener`` and return its subscription."""
        if self._disposed:
            return Subscription()
        self._listeners.append(listener)
        return Subscription(lambda: self._remove(listener))

    def fire(self, value: T) -> None:
        """Call every listener attached before this call with ``value``.

        Listener exceptions propagate to the caller and stop delivery to
        the remaining listeners.
        """
        for listener in tuple(self._listeners):
            listener(value)

    def dispose(self) -> None:
        """Drop all listeners and ignore future subscriptions."""
        self._listeners.clear()
        self._disposed = True

    def _remove(self, listener: Listener[T]) -> None:
        # Identity, not equality: equal bound methods are distinct registrations.
        for index, candidate in enumerate(self._listeners):
            if candidate is listener:
                del self._listeners[index]
                return


def once_event[T](event: Event[T]) -> Event[T]:
    """Wrap ``event`` so each listener runs for the first firing only."""

    def subscribe(listener: Listener[T]) -> Subscription:
        subscription: Subscription | None = None
        fired = False

        def wrapper(value: T) -> None:
            nonlocal fired
            if fired:
                return
            fired = True
            if subscription is not None:
                subscription.dispose()
            listener(value)

        subscription = event(wrapper)
        return subscription

    return subscribe


def dispose_all(disposables: cabc.Iterable[Disposable]) -> None:
    """Dispose each item in iteration order."""
    for disposable in disposables:
        disposable.dispose()


__all__ = [
    "Disposable",
    "Event",
    "EventEmitter",
    "Listener",
    "Subscription",
    "dispose_all",
    "once_event",
]
