"""Shared primitives: events, remotes and text helpers."""

from pullbridge.common.events import (
    Disposable,
    EventEmitter,
    Subscription,
    dispose_all,
    once_event,
)
from pullbridge.common.remote import (
    Protocol,
    ProtocolType,
    Remote,
    strip_extension,
    url_extension,
)
from pullbridge.common.text import CommitMessage, title_and_body_from
from pullbridge.common.timeline import EventType, get_event_type

__all__ = [
    "CommitMessage",
    "Disposable",
    "EventEmitter",
    "EventType",
    "Protocol",
    "ProtocolType",
    "Remote",
    "Subscription",
    "dispose_all",
    "get_event_type",
    "once_event",
    "strip_extension",
    "title_and_body_from",
    "url_extension",
]
