"""Timeline event kinds reported by the forge."""

from __future__ import annotations

import enum


class EventType(enum.StrEnum):
    """Kinds of pull-request timeline events."""

    COMMITTED = "committed"
    MENTIONED = "mentioned"
    SUBSCRIBED = "subscribed"
    COMMENTED = "commented"
    REVIEWED = "reviewed"
    OTHER = "other"


_EVENT_TYPES_BY_LABEL: dict[str, EventType] = {
    event_type.value: event_type
    for event_type in EventType
    if event_type is not EventType.OTHER
}


def get_event_type(text: str) -> EventType:
    """Map a timeline label to its :class:`EventType`.

    Only the exact lowercase labels are recognised; anything else, including
    ``"other"`` itself and differently cased labels, maps to
    :attr:`EventType.OTHER`.

    Examples
    --------
    >>> get_event_type("reviewed")
    <EventType.REVIEWED: 'reviewed'>
    >>> get_event_type("Reviewed")
    <EventType.OTHER: 'other'>

    """
    return _EVENT_TYPES_BY_LABEL.get(text, EventType.OTHER)


__all__ = ["EventType", "get_event_type"]
