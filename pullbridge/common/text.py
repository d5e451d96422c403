"""Commit message helpers."""

from __future__ import annotations

import typing as typ


class CommitMessage(typ.NamedTuple):
    """A message split into its first line and the remainder."""

    title: str
    body: str


def title_and_body_from(message: str) -> CommitMessage:
    """Split ``message`` at its first newline.

    The title is everything before the first ``\\n`` (the whole message when
    there is none). The body is everything after it, verbatim, so a blank
    separator line survives as a leading ``\\n``.

    Examples
    --------
    >>> title_and_body_from("fix bug\\n\\nDetails")
    CommitMessage(title='fix bug', body='\\nDetails')
    >>> title_and_body_from("single line")
    CommitMessage(title='single line', body='')

    """
    title, separator, body = message.partition("\n")
    if not separator:
        return CommitMessage(title=message, body="")
    return CommitMessage(title=title, body=body)


__all__ = ["CommitMessage", "title_and_body_from"]
