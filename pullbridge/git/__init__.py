"""Local git repository snapshots and the CLI-backed reader."""

from pullbridge.git.errors import GitCommandError, NotARepositoryError
from pullbridge.git.models import (
    Branch,
    GitRemote,
    Repository,
    RepositoryState,
    UpstreamRef,
)
from pullbridge.git.reader import (
    GitRepositoryReader,
    GitResult,
    read_repository,
    read_repository_async,
)

__all__ = [
    "Branch",
    "GitCommandError",
    "GitRemote",
    "GitRepositoryReader",
    "GitResult",
    "NotARepositoryError",
    "Repository",
    "RepositoryState",
    "UpstreamRef",
    "read_repository",
    "read_repository_async",
]
