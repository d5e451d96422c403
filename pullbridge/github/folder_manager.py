"""Per-folder manager binding one local repository to its forge remotes."""

from __future__ import annotations

import enum
import typing as typ

from pullbridge.common.events import EventEmitter
from pullbridge.common.remote import Remote
from pullbridge.config import PullBridgeConfig
from pullbridge.github.errors import (
    BadUpstreamError,
    DetachedHeadError,
    NoGitHubReposError,
)
from pullbridge.github.models import PullRequestDefaults
from pullbridge.github.repository import GitHubRepository
from pullbridge.logging import get_logger, log_debug

if typ.TYPE_CHECKING:
    from pullbridge.common.events import Event
    from pullbridge.git.models import Repository
    from pullbridge.github.credentials import CredentialStore

logger = get_logger(__name__)


class ReposManagerState(enum.StrEnum):
    """Coarse readiness of the repository managers.

    ``INITIALIZING`` also means "re-check everything": setting it asks
    downstream consumers to re-evaluate every folder.
    """

    INITIALIZING = "Initializing"
    NEEDS_AUTHENTICATION = "NeedsAuthentication"
    REPOSITORIES_LOADED = "RepositoriesLoaded"


class FolderRepositoryManager:
    """Track the forge repositories reachable from one local folder."""

    def __init__(
        self,
        repository: Repository,
        credential_store: CredentialStore,
        config: PullBridgeConfig | None = None,
    ) -> None:
        """Bind ``repository`` to the shared credential store."""
        self.repository = repository
        self._credential_store = credential_store
        self._config = config or PullBridgeConfig()
        self._github_repositories: list[GitHubRepository] = []
        self._on_did_load_repositories: EventEmitter[ReposManagerState] = (
            EventEmitter()
        )

    @property
    def on_did_load_repositories(self) -> Event[ReposManagerState]:
        """Subscribe to load completions; listeners receive the new state."""
        return self._on_did_load_repositories.event

    @property
    def github_repositories(self) -> list[GitHubRepository]:
        """Return the forge bindings found by the last update."""
        return list(self._github_repositories)

    @property
    def credential_store(self) -> CredentialStore:
        """Return the shared credential store."""
        return self._credential_store

    def _forge_remotes(self) -> list[Remote]:
        remotes: list[Remote] = []
        for git_remote in self.repository.state.remotes:
            if git_remote.url is None or not self._config.accepts_remote(git_remote.name):
                continue
            remote = Remote.from_url(git_remote.name, git_remote.url)
            if remote.host == self._config.github_host and remote.slug is not None:
                remotes.append(remote)
        return remotes

    async def update_repositories(self) -> ReposManagerState:
        """Rebuild the forge bindings and announce the resulting state.

        Returns
        -------
        ReposManagerState
            ``REPOSITORIES_LOADED`` when the credential store holds a
            session, otherwise ``NEEDS_AUTHENTICATION``.

        """
        self._github_repositories = [
            GitHubRepository(remote, self._credential_store)
            for remote in self._forge_remotes()
        ]
        log_debug(
            logger,
            "Folder %s has %d forge repositories: %s",
            self.repository.root_path,
            len(self._github_repositories),
            ", ".join(repo.slug or "?" for repo in self._github_repositories),
        )

        state = (
            ReposManagerState.REPOSITORIES_LOADED
            if self._credential_store.is_authenticated()
            else ReposManagerState.NEEDS_AUTHENTICATION
        )
        self._on_did_load_repositories.fire(state)
        return state

    def get_pull_request_defaults(self) -> PullRequestDefaults:
        """Return the owner, repository and base for a new pull request.

        Raises
        ------
        NoGitHubReposError
            If the folder has no forge bindings.
        DetachedHeadError
            If HEAD is not on a named branch.
        BadUpstreamError
            If the branch's upstream remote is missing or not on the forge.

        """
        if not self._github_repositories:
            raise NoGitHubReposError(self.repository)

        head = self.repository.state.head
        if head is None or head.name is None:
            raise DetachedHeadError(self.repository)

        upstream = head.upstream
        if upstream is None:
            origin = self._github_repositories[0]
            return PullRequestDefaults(
                owner=origin.owner or "", repo=origin.name or "", base=head.name
            )

        if self.repository.state.remote_named(upstream.remote) is None:
            raise BadUpstreamError.missing_remote(head.name, upstream)

        binding = next(
            (
                repo
                for repo in self._github_repositories
                if repo.remote.remote_name == upstream.remote
            ),
            None,
        )
        if binding is None:
            raise BadUpstreamError.not_on_forge(head.name, upstream)

        return PullRequestDefaults(
            owner=binding.owner or "", repo=binding.name or "", base=upstream.name
        )

    def dispose(self) -> None:
        """Detach load listeners."""
        self._on_did_load_repositories.dispose()


__all__ = ["FolderRepositoryManager", "ReposManagerState"]
