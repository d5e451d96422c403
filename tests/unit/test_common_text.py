"""Unit tests for timeline labels and commit message splitting."""

from __future__ import annotations

import pytest

from pullbridge.common.text import CommitMessage, title_and_body_from
from pullbridge.common.timeline import EventType, get_event_type


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("committed", EventType.COMMITTED),
        ("mentioned", EventType.MENTIONED),
        ("subscribed", EventType.SUBSCRIBED),
        ("commented", EventType.COMMENTED),
        ("reviewed", EventType.REVIEWED),
    ],
)
def test_known_labels_map_to_their_kind(label: str, expected: EventType) -> None:
    """Each recognised label returns the matching kind."""
    assert get_event_type(label) is expected


@pytest.mark.parametrize(
    "label",
    ["", "Committed", "REVIEWED", " reviewed", "xyz", "other", "labeled"],
)
def test_unknown_labels_map_to_other(label: str) -> None:
    """Anything outside the exact lowercase labels is OTHER."""
    assert get_event_type(label) is EventType.OTHER


def test_title_and_body_split_at_first_newline() -> None:
    """The body keeps every character after the first newline."""
    message = title_and_body_from("fix bug\n\nDetails here\nmore")

    assert message == CommitMessage(title="fix bug", body="\nDetails here\nmore")


@pytest.mark.parametrize(
    ("text", "title", "body"),
    [
        ("single line", "single line", ""),
        ("", "", ""),
        ("\nbody only", "", "body only"),
        ("trailing\n", "trailing", ""),
        ("title  \n  spaced body  ", "title  ", "  spaced body  "),
        ("crlf\r\nbody", "crlf\r", "body"),
    ],
)
def test_title_and_body_edge_cases(text: str, title: str, body: str) -> None:
    """No trimming happens beyond the single split."""
    result = title_and_body_from(text)

    assert result.title == title
    assert result.body == body
