"""Forge items and query results exchanged with folder managers."""

from __future__ import annotations

import dataclasses
import typing as typ

import msgspec

if typ.TYPE_CHECKING:
    from pullbridge.common.remote import Remote

REMOTES_SETTING = "remotes"
NO_MILESTONE = "No Milestone"


class HasRemote(typ.Protocol):
    """Anything that knows which remote it was loaded from."""

    @property
    def remote(self) -> Remote:
        """Return the remote the item belongs to."""
        ...


@dataclasses.dataclass(frozen=True, slots=True)
class IssueModel:
    """An issue or pull request loaded from a forge remote."""

    number: int
    title: str
    remote: Remote
    body: str = ""
    milestone: str | None = None

    @property
    def milestone_title(self) -> str:
        """Return the milestone, or ``NO_MILESTONE`` when unset."""
        return self.milestone or NO_MILESTONE


class PullRequestDefaults(msgspec.Struct, kw_only=True, frozen=True):
    """Owner, repository and base branch a new pull request targets."""

    owner: str
    repo: str
    base: str


@dataclasses.dataclass
class ItemsResponseResult[T]:
    """One page of items gathered across a folder's forge repositories."""

    items: list[T] = dataclasses.field(default_factory=list)
    has_more_pages: bool = False
    has_unsearched_repositories: bool = False


__all__ = [
    "NO_MILESTONE",
    "REMOTES_SETTING",
    "HasRemote",
    "IssueModel",
    "ItemsResponseResult",
    "PullRequestDefaults",
]
