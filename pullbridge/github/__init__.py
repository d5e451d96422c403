"""Forge-facing registry, folder managers, bindings and errors.

Usage
-----
Track the folders of a session and route an item to its folder::

    from pullbridge.github import (
        EnvCredentialStore,
        FolderRepositoryManager,
        RepositoriesManager,
    )

    store = EnvCredentialStore()
    await store.initialize()
    managers = [FolderRepositoryManager(repo, store) for repo in repositories]
    registry = RepositoriesManager(managers, store)
    for manager in managers:
        await manager.update_repositories()
    owner = registry.get_manager_for_issue_model(issue)

"""

from pullbridge.github.credentials import (
    CredentialStore,
    EnvCredentialStore,
    GitHubSession,
)
from pullbridge.github.errors import (
    BadUpstreamError,
    DetachedHeadError,
    ForgeRepositoryError,
    NoGitHubReposError,
    format_error_message,
)
from pullbridge.github.folder_manager import FolderRepositoryManager, ReposManagerState
from pullbridge.github.models import (
    NO_MILESTONE,
    REMOTES_SETTING,
    IssueModel,
    ItemsResponseResult,
    PullRequestDefaults,
)
from pullbridge.github.repositories_manager import RepositoriesManager
from pullbridge.github.repository import GitHubRepository

__all__ = [
    "NO_MILESTONE",
    "REMOTES_SETTING",
    "BadUpstreamError",
    "CredentialStore",
    "DetachedHeadError",
    "EnvCredentialStore",
    "FolderRepositoryManager",
    "ForgeRepositoryError",
    "GitHubRepository",
    "GitHubSession",
    "IssueModel",
    "ItemsResponseResult",
    "NoGitHubReposError",
    "PullRequestDefaults",
    "ReposManagerState",
    "RepositoriesManager",
    "format_error_message",
]
