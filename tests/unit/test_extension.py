"""Unit tests for activation and deactivation."""

from __future__ import annotations

import pytest

from pullbridge.config import PullBridgeConfig
from pullbridge.context import (
    INITIALIZED_CONTEXT,
    REPOS_MANAGER_STATE_CONTEXT,
    InMemoryContext,
)
from pullbridge.extension import ExtensionContext, activate, deactivate
from pullbridge.github import GitHubSession, ReposManagerState
from tests.fakes import FakeCredentialStore, make_repository

APP = make_repository("/work/app", remotes={"origin": "https://github.com/octo/app.git"})
DOCS = make_repository("/work/docs", remotes={"origin": "git@github.com:octo/docs.git"})
CONFIG = PullBridgeConfig()


@pytest.mark.asyncio
async def test_activate_builds_and_loads_everything(
    credential_store: FakeCredentialStore, journal: list[str]
) -> None:
    """Activation initialises the store, loads folders and flags readiness."""
    context = InMemoryContext()

    extension = await activate(
        ExtensionContext(),
        [APP, DOCS],
        config=CONFIG,
        credential_store=credential_store,
        context=context,
    )

    registry = extension.repositories_manager
    assert journal[0] == "initialize", "Expected the store to initialise first"
    assert [m.repository for m in registry.folder_managers] == [APP, DOCS]
    assert registry.state is ReposManagerState.REPOSITORIES_LOADED
    assert context.history[0] == (
        REPOS_MANAGER_STATE_CONTEXT,
        ReposManagerState.INITIALIZING,
    )
    assert context.history[-1] == (INITIALIZED_CONTEXT, True)


@pytest.mark.asyncio
async def test_session_change_refreshes_folders(
    anonymous_store: FakeCredentialStore, journal: list[str]
) -> None:
    """A session change resets credentials and reloads every folder."""
    context = InMemoryContext()
    extension = await activate(
        ExtensionContext(),
        [APP],
        config=CONFIG,
        credential_store=anonymous_store,
        context=context,
    )
    assert extension.repositories_manager.state is (
        ReposManagerState.NEEDS_AUTHENTICATION
    )

    anonymous_store.change_session(GitHubSession(access_token="new"))
    await extension.wait_for_pending()

    assert "reset:done" in journal
    states = [value for key, value in context.history if key == REPOS_MANAGER_STATE_CONTEXT]
    assert states[-2:] == [
        ReposManagerState.INITIALIZING,
        ReposManagerState.REPOSITORIES_LOADED,
    ]


@pytest.mark.asyncio
async def test_open_repository_registers_new_folder(
    credential_store: FakeCredentialStore,
) -> None:
    """Folders opened after activation join the registry."""
    extension = await activate(
        ExtensionContext(), [], config=CONFIG, credential_store=credential_store
    )
    opened: list[object] = []
    extension.on_did_open_folder(opened.append)

    manager = await extension.open_repository(DOCS)

    assert extension.repositories_manager.folder_managers == [manager]
    assert opened == [manager]
    assert [repo.slug for repo in manager.github_repositories] == ["octo/docs"]


@pytest.mark.asyncio
async def test_deactivate_releases_everything(
    credential_store: FakeCredentialStore,
) -> None:
    """After deactivation nothing reacts to folder or session events."""
    ext_context = ExtensionContext()
    extension = await activate(
        ext_context, [APP], config=CONFIG, credential_store=credential_store
    )
    registry = extension.repositories_manager
    manager = registry.folder_managers[0]

    deactivate(ext_context)
    deactivate(ext_context)
    credential_store.change_session(None)
    registry.state = ReposManagerState.INITIALIZING
    await manager.update_repositories()

    assert ext_context.subscriptions == []
    assert registry.state is ReposManagerState.INITIALIZING
