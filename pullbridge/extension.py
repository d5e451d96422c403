"""Activation and teardown of the pull-request integration.

Construction order is fixed:

1. the credential store is initialised,
2. one :class:`FolderRepositoryManager` is built per repository,
3. the :class:`RepositoriesManager` is built over them,
4. session changes are wired to ``clear_credential_cache`` followed by a
   refresh of every folder,
5. each folder loads its repositories once,
6. ``INITIALIZED_CONTEXT`` is published.

Everything constructed is registered on the :class:`ExtensionContext` and
released in reverse order by :func:`deactivate`.
"""

from __future__ import annotations

import asyncio
import dataclasses
import typing as typ

from pullbridge.common.events import Disposable, EventEmitter, Subscription
from pullbridge.config import PullBridgeConfig
from pullbridge.context import INITIALIZED_CONTEXT, ContextSink, NullContext
from pullbridge.github.credentials import EnvCredentialStore
from pullbridge.github.folder_manager import FolderRepositoryManager
from pullbridge.github.repositories_manager import RepositoriesManager
from pullbridge.logging import get_logger, log_exception, log_info

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pullbridge.common.events import Event
    from pullbridge.git.models import Repository
    from pullbridge.github.credentials import CredentialStore, GitHubSession

logger = get_logger(__name__)


class ExtensionContext:
    """Owner of everything created during activation."""

    def __init__(self) -> None:
        """Start with no subscriptions."""
        self.subscriptions: list[Disposable] = []

    def register(self, *disposables: Disposable) -> None:
        """Dispose ``disposables`` at deactivation."""
        self.subscriptions.extend(disposables)


@dataclasses.dataclass(slots=True)
class Extension:
    """Handles to the objects built by :func:`activate`."""

    repositories_manager: RepositoriesManager
    folder_managers: list[FolderRepositoryManager]
    credential_store: CredentialStore
    config: PullBridgeConfig
    _pending: set[asyncio.Task[None]] = dataclasses.field(
        default_factory=set, init=False, repr=False
    )
    _on_did_open_folder: EventEmitter[FolderRepositoryManager] = dataclasses.field(
        default_factory=EventEmitter, init=False, repr=False
    )

    @property
    def on_did_open_folder(self) -> Event[FolderRepositoryManager]:
        """Fire after a folder opened post-activation has been registered."""
        return self._on_did_open_folder.event

    async def open_repository(self, repository: Repository) -> FolderRepositoryManager:
        """Register a repository opened after activation and load it."""
        manager = FolderRepositoryManager(
            repository, self.credential_store, self.config
        )
        self.folder_managers.append(manager)
        self.repositories_manager.add_folder_manager(manager)
        log_info(logger, "Opened repository %s", repository.root_path)
        self._on_did_open_folder.fire(manager)
        await manager.update_repositories()
        return manager

    async def refresh(self) -> None:
        """Reset credentials and reload every folder."""
        await self.repositories_manager.clear_credential_cache()
        for manager in self.folder_managers:
            await manager.update_repositories()

    def schedule_refresh(self) -> None:
        """Run :meth:`refresh` in the background on the running loop."""
        task = asyncio.get_running_loop().create_task(self.refresh())
        self._pending.add(task)
        task.add_done_callback(self._refresh_done)

    def _refresh_done(self, task: asyncio.Task[None]) -> None:
        self._pending.discard(task)
        if not task.cancelled() and (exc := task.exception()) is not None:
            log_exception(logger, "Refresh after session change failed", exc)

    async def wait_for_pending(self) -> None:
        """Wait until background refreshes have finished."""
        while self._pending:
            await asyncio.gather(*tuple(self._pending), return_exceptions=True)

    def dispose(self) -> None:
        """Cancel background refreshes and dispose every folder manager."""
        for task in tuple(self._pending):
            task.cancel()
        self._pending.clear()
        self._on_did_open_folder.dispose()
        for manager in self.folder_managers:
            manager.dispose()


async def activate(
    ext_context: ExtensionContext,
    repositories: cabc.Sequence[Repository],
    *,
    config: PullBridgeConfig | None = None,
    credential_store: CredentialStore | None = None,
    context: ContextSink | None = None,
) -> Extension:
    """Build and wire the registry for ``repositories``.

    Parameters
    ----------
    ext_context:
        Receives every disposable created here.
    repositories:
        Local repositories open at activation time; more can be added later
        through :meth:`Extension.open_repository`.
    config:
        Resolved configuration; defaults to :meth:`PullBridgeConfig.from_env`.
    credential_store:
        Shared store; defaults to :class:`EnvCredentialStore`.
    context:
        Host context sink; defaults to :class:`NullContext`.

    Returns
    -------
    Extension
        The registry, folder managers and supporting handles.

    """
    resolved_config = config or PullBridgeConfig.from_env()
    sink = context if context is not None else NullContext()
    store = credential_store if credential_store is not None else EnvCredentialStore()

    await store.initialize()
    if isinstance(store, Disposable):
        ext_context.register(store)

    log_info(
        logger,
        "Activating for %d repositories (host=%s)",
        len(repositories),
        resolved_config.github_host,
    )
    folder_managers = [
        FolderRepositoryManager(repository, store, resolved_config)
        for repository in repositories
    ]
    repos_manager = RepositoriesManager(
        folder_managers,
        store,
        context=sink,
        github_host=resolved_config.github_host,
    )
    extension = Extension(
        repositories_manager=repos_manager,
        folder_managers=list(folder_managers),
        credential_store=store,
        config=resolved_config,
    )
    ext_context.register(repos_manager, extension)

    session_sub: Subscription = store.on_did_change_sessions(
        lambda session: _on_sessions_changed(extension, session)
    )
    ext_context.register(session_sub)

    for manager in folder_managers:
        await manager.update_repositories()

    sink.set_context(INITIALIZED_CONTEXT, value=True)
    log_info(logger, "Activation complete (state=%s)", repos_manager.state)
    return extension


def _on_sessions_changed(extension: Extension, session: GitHubSession | None) -> None:
    log_info(
        logger,
        "Sessions changed (signed_in=%s); refreshing folders",
        session is not None,
    )
    extension.schedule_refresh()


def deactivate(ext_context: ExtensionContext) -> None:
    """Dispose everything registered on ``ext_context``, newest first."""
    subscriptions, ext_context.subscriptions = ext_context.subscriptions, []
    for disposable in reversed(subscriptions):
        disposable.dispose()
    log_info(logger, "Deactivated (%d disposables released)", len(subscriptions))


__all__ = ["Extension", "ExtensionContext", "activate", "deactivate"]
