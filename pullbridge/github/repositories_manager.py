"""Registry of the folder managers open in one session.

:class:`RepositoriesManager` aggregates every :class:`FolderRepositoryManager`,
tracks a single :class:`ReposManagerState` derived from their load
notifications, owns the shared credential store, and resolves forge items
back to the folder that owns them.

Construction order
------------------
Build the credential store and the folder managers first, then the
registry::

    store = EnvCredentialStore()
    await store.initialize()
    managers = [FolderRepositoryManager(repo, store) for repo in repositories]
    registry = RepositoriesManager(managers, store, context=sink)

State changes are published to the context sink under
``REPOS_MANAGER_STATE_CONTEXT`` before :attr:`RepositoriesManager.on_did_change_state`
fires, and only when the value actually changes.
"""

from __future__ import annotations

import typing as typ

from pullbridge.common.events import EventEmitter, Subscription, dispose_all
from pullbridge.common.remote import Remote, strip_extension
from pullbridge.config import DEFAULT_GITHUB_HOST
from pullbridge.context import REPOS_MANAGER_STATE_CONTEXT, ContextSink, NullContext
from pullbridge.github.folder_manager import FolderRepositoryManager, ReposManagerState
from pullbridge.github.repository import GitHubRepository
from pullbridge.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pullbridge.common.events import Event
    from pullbridge.github.credentials import CredentialStore
    from pullbridge.github.models import HasRemote

logger = get_logger(__name__)


class RepositoriesManager:
    """Single source of truth for known folders and their aggregate state.

    Parameters
    ----------
    folder_managers:
        Managers for the folders open at construction time.
    credential_store:
        Credential store shared with every folder manager.
    context:
        Sink receiving state updates; defaults to :class:`NullContext`.
    github_host:
        Host used by :meth:`create_github_repository_from_owner_name`.

    """

    ID = "RepositoriesManager"

    def __init__(
        self,
        folder_managers: cabc.Iterable[FolderRepositoryManager],
        credential_store: CredentialStore,
        *,
        context: ContextSink | None = None,
        github_host: str = DEFAULT_GITHUB_HOST,
    ) -> None:
        """Subscribe to every folder manager and publish the initial state."""
        self.folder_managers: list[FolderRepositoryManager] = []
        self._credential_store = credential_store
        self._context = context if context is not None else NullContext()
        self._github_host = github_host
        self._subs: list[Subscription] = []
        self._on_did_change_state: EventEmitter[None] = EventEmitter()
        self._state = ReposManagerState.INITIALIZING

        self._context.set_context(REPOS_MANAGER_STATE_CONTEXT, self._state)
        for folder_manager in folder_managers:
            self.add_folder_manager(folder_manager)

    @property
    def on_did_change_state(self) -> Event[None]:
        """Subscribe to state changes."""
        return self._on_did_change_state.event

    @property
    def state(self) -> ReposManagerState:
        """Return the aggregate lifecycle state."""
        return self._state

    @state.setter
    def state(self, state: ReposManagerState) -> None:
        changed = state != self._state
        self._state = state
        if not changed:
            return
        log_info(logger, "Repositories state changed to %s", state)
        self._context.set_context(REPOS_MANAGER_STATE_CONTEXT, state)
        self._on_did_change_state.fire(None)

    @property
    def credential_store(self) -> CredentialStore:
        """Return the shared credential store."""
        return self._credential_store

    def add_folder_manager(self, folder_manager: FolderRepositoryManager) -> None:
        """Track ``folder_manager`` and follow its load notifications."""
        self.folder_managers.append(folder_manager)
        self._subs.append(
            folder_manager.on_did_load_repositories(self._on_folder_loaded)
        )

    def _on_folder_loaded(self, state: ReposManagerState) -> None:
        self.state = state

    def get_manager_for_issue_model(
        self, issue_model: HasRemote | None
    ) -> FolderRepositoryManager | None:
        """Return the folder manager whose forge repositories own ``issue_model``.

        URLs on both sides are compared after :func:`strip_extension`, so
        ``https://host/org/repo`` and ``https://host/org/repo.git`` match.
        """
        if issue_model is None:
            return None

        issue_remote_url = strip_extension(issue_model.remote.url)
        for folder_manager in self.folder_managers:
            known_urls = {
                strip_extension(repo.remote.url)
                for repo in folder_manager.github_repositories
            }
            if issue_remote_url in known_urls:
                return folder_manager
        return None

    async def clear_credential_cache(self) -> None:
        """Reset the credential store, then return to ``INITIALIZING``.

        The state is only written once the reset has completed; a failing
        reset propagates and leaves the state untouched.
        """
        await self._credential_store.reset()
        self.state = ReposManagerState.INITIALIZING

    async def authenticate(self) -> bool:
        """Log in through the credential store; return True on a session."""
        return bool(await self._credential_store.login())

    def create_github_repository(
        self, remote: Remote, credential_store: CredentialStore
    ) -> GitHubRepository:
        """Bind ``remote`` to ``credential_store``."""
        return GitHubRepository(remote, credential_store)

    def create_github_repository_from_owner_name(
        self, owner: str, name: str
    ) -> GitHubRepository:
        """Bind the canonical web URL for ``owner/name`` to the shared store."""
        uri = f"https://{self._github_host}/{owner}/{name}"
        return self.create_github_repository(
            Remote.from_url(name, uri), self._credential_store
        )

    def dispose(self) -> None:
        """Release the folder subscriptions; safe to call repeatedly."""
        subs, self._subs = self._subs, []
        dispose_all(subs)
        self._on_did_change_state.dispose()


__all__ = ["RepositoriesManager"]
