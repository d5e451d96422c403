"""Read repository state from the ``git`` command line.

Each read issues a handful of fixed-argv git commands against one folder:

- ``rev-parse --show-toplevel`` for the work-tree root
- ``symbolic-ref --quiet --short HEAD`` for the branch (status 1 = detached)
- ``rev-parse --verify --quiet HEAD`` for the commit (absent on unborn branches)
- ``config --get branch.<name>.remote`` / ``.merge`` for the upstream
- ``config --get-regexp`` over ``remote.*.url`` / ``remote.*.pushurl``

The runner is injectable so tests can supply canned git output.
"""

from __future__ import annotations

import asyncio
import shutil
import subprocess
import typing as typ
from pathlib import Path

from pullbridge.git.errors import GitCommandError, NotARepositoryError
from pullbridge.git.models import (
    Branch,
    GitRemote,
    Repository,
    RepositoryState,
    UpstreamRef,
)
from pullbridge.logging import get_logger, log_debug

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = get_logger(__name__)

_GIT_TIMEOUT_S = 5
_HEADS_PREFIX = "refs/heads/"
_REMOTE_URL_PATTERN = r"^remote\..*\.(url|pushurl)$"


class GitResult(typ.NamedTuple):
    """Outcome of a single git invocation."""

    returncode: int
    stdout: str
    stderr: str


type GitRunner = cabc.Callable[[tuple[str, ...]], GitResult]


def run_git(args: tuple[str, ...]) -> GitResult:
    """Run git with ``args`` and capture its output."""
    git_executable = shutil.which("git")
    if git_executable is None:
        raise GitCommandError.executable_missing()

    completed = subprocess.run(  # noqa: S603  # fixed argv to local git only
        [git_executable, *args],
        check=False,
        capture_output=True,
        text=True,
        timeout=_GIT_TIMEOUT_S,
    )
    return GitResult(completed.returncode, completed.stdout, completed.stderr)


class GitRepositoryReader:
    """Build :class:`Repository` snapshots for folders on disk."""

    def __init__(self, runner: GitRunner = run_git) -> None:
        """Use ``runner`` to execute git commands."""
        self._runner = runner

    def read(self, path: Path | str) -> Repository:
        """Return a snapshot of the repository containing ``path``.

        Raises
        ------
        NotARepositoryError
            If ``path`` is not inside a git work tree.
        GitCommandError
            If any other git command fails unexpectedly.

        """
        folder = Path(path)
        toplevel = self._git(folder, "rev-parse", "--show-toplevel", allowed=(128,))
        if toplevel is None:
            raise NotARepositoryError(str(folder))

        root = Path(toplevel)
        state = RepositoryState(head=self._read_head(root), remotes=self._read_remotes(root))
        log_debug(
            logger,
            "Read repository %s: head=%s remotes=%d",
            root,
            state.head.name if state.head else None,
            len(state.remotes),
        )
        return Repository(root_path=root, state=state)

    async def read_async(self, path: Path | str) -> Repository:
        """Read ``path`` without blocking the event loop."""
        return await asyncio.to_thread(self.read, path)

    def _read_head(self, root: Path) -> Branch:
        commit = self._git(root, "rev-parse", "--verify", "--quiet", "HEAD", allowed=(1,))
        name = self._git(root, "symbolic-ref", "--quiet", "--short", "HEAD", allowed=(1,))
        if name is None:
            return Branch(name=None, commit=commit)
        return Branch(name=name, commit=commit, upstream=self._read_upstream(root, name))

    def _read_upstream(self, root: Path, branch: str) -> UpstreamRef | None:
        remote = self._git(root, "config", "--get", f"branch.{branch}.remote", allowed=(1,))
        merge = self._git(root, "config", "--get", f"branch.{branch}.merge", allowed=(1,))
        if remote is None or merge is None:
            return None
        return UpstreamRef(remote=remote, name=merge.removeprefix(_HEADS_PREFIX))

    def _read_remotes(self, root: Path) -> tuple[GitRemote, ...]:
        output = self._git(
            root, "config", "--get-regexp", _REMOTE_URL_PATTERN, allowed=(1,)
        )
        if output is None:
            return ()

        fetch_urls: dict[str, str] = {}
        push_urls: dict[str, str] = {}
        for line in output.splitlines():
            key, _, value = line.partition(" ")
            remote_name, _, kind = key.removeprefix("remote.").rpartition(".")
            target = fetch_urls if kind == "url" else push_urls
            target.setdefault(remote_name, value.strip())

        names = list(dict.fromkeys([*fetch_urls, *push_urls]))
        return tuple(
            GitRemote(name=name, fetch_url=fetch_urls.get(name), push_url=push_urls.get(name))
            for name in names
        )

    def _git(self, root: Path, *args: str, allowed: tuple[int, ...] = ()) -> str | None:
        """Run git in ``root``; statuses in ``allowed`` yield None."""
        argv = ("-C", str(root), *args)
        result = self._runner(argv)
        if result.returncode == 0:
            return result.stdout.strip()
        if result.returncode in allowed:
            return None
        raise GitCommandError(argv, result.returncode, result.stderr)


def read_repository(path: Path | str, runner: GitRunner = run_git) -> Repository:
    """Read the repository containing ``path`` with a one-off reader."""
    return GitRepositoryReader(runner).read(path)


async def read_repository_async(
    path: Path | str, runner: GitRunner = run_git
) -> Repository:
    """Async variant of :func:`read_repository`."""
    return await GitRepositoryReader(runner).read_async(path)


__all__ = [
    "GitRepositoryReader",
    "GitResult",
    "GitRunner",
    "read_repository",
    "read_repository_async",
    "run_git",
]
