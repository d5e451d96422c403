"""Snapshot of a local git repository as seen by the folder managers."""

from __future__ import annotations

import dataclasses
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


@dataclasses.dataclass(frozen=True, slots=True)
class UpstreamRef:
    """Remote-tracking branch configured for a local branch."""

    remote: str
    name: str


@dataclasses.dataclass(frozen=True, slots=True)
class Branch:
    """The checked-out ref; ``name`` is None when HEAD is detached."""

    name: str | None
    commit: str | None = None
    upstream: UpstreamRef | None = None

    @property
    def is_detached(self) -> bool:
        """Return True when HEAD does not point at a named branch."""
        return self.name is None


@dataclasses.dataclass(frozen=True, slots=True)
class GitRemote:
    """A configured remote and its fetch/push URLs."""

    name: str
    fetch_url: str | None = None
    push_url: str | None = None

    @property
    def url(self) -> str | None:
        """Return the fetch URL, falling back to the push URL."""
        return self.fetch_url or self.push_url


@dataclasses.dataclass(frozen=True, slots=True)
class RepositoryState:
    """HEAD and remotes of a repository at read time."""

    head: Branch | None = None
    remotes: tuple[GitRemote, ...] = ()

    def remote_named(self, name: str) -> GitRemote | None:
        """Return the remote called ``name``, if configured."""
        return next((remote for remote in self.remotes if remote.name == name), None)


@dataclasses.dataclass(frozen=True, slots=True)
class Repository:
    """A local repository folder."""

    root_path: Path
    state: RepositoryState = dataclasses.field(default_factory=RepositoryState)

    @property
    def root_uri(self) -> str:
        """Return the folder as a ``file://`` URI."""
        return self.root_path.absolute().as_uri()
