"""Inspect how local folders map onto forge repositories."""

from __future__ import annotations

import argparse
import asyncio
import typing as typ
from pathlib import Path

from pullbridge.common.remote import Remote
from pullbridge.config import PullBridgeConfig, SettingsError
from pullbridge.extension import ExtensionContext, activate, deactivate
from pullbridge.git.errors import GitCommandError, NotARepositoryError
from pullbridge.git.reader import GitRepositoryReader
from pullbridge.github.errors import ForgeRepositoryError
from pullbridge.github.models import IssueModel
from pullbridge.logging import configure_logging, get_logger, log_warning

if typ.TYPE_CHECKING:
    from pullbridge.git.models import Repository
    from pullbridge.github.folder_manager import FolderRepositoryManager

logger = get_logger(__name__)


def _describe_folder(manager: FolderRepositoryManager) -> list[str]:
    slugs = ", ".join(repo.slug or repo.remote.url for repo in manager.github_repositories)
    lines = [f"{manager.repository.root_path}: {slugs or '(no forge remotes)'}"]
    try:
        defaults = manager.get_pull_request_defaults()
    except ForgeRepositoryError as exc:
        lines.append(f"  cannot open pull requests: {exc}")
    else:
        lines.append(
            f"  pull requests target {defaults.owner}/{defaults.repo}:{defaults.base}"
        )
    return lines


async def _report(
    repositories: list[Repository],
    config: PullBridgeConfig,
    item_url: str | None,
) -> None:
    ext_context = ExtensionContext()
    try:
        extension = await activate(ext_context, repositories, config=config)
        registry = extension.repositories_manager
        for manager in registry.folder_managers:
            for line in _describe_folder(manager):
                print(line)
        print(f"state: {registry.state}")

        if item_url is not None:
            item = IssueModel(number=0, title="", remote=Remote.from_url("item", item_url))
            owner = registry.get_manager_for_issue_model(item)
            if owner is None:
                print(f"{item_url}: no owning folder")
            else:
                print(f"{item_url}: {owner.repository.root_path}")
    finally:
        deactivate(ext_context)


def main(argv: list[str] | None = None) -> int:
    """Report forge bindings, readiness and item ownership for folders.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success, 1 when settings or a folder cannot be read.

    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("folders", type=Path, nargs="+", help="Repository folders")
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Optional YAML settings file overriding environment configuration",
    )
    parser.add_argument(
        "--item-url",
        default=None,
        help="Remote URL of an issue or pull request to route to its folder",
    )
    args = parser.parse_args(argv)

    try:
        config = PullBridgeConfig.from_settings(args.settings)
    except SettingsError as exc:
        print(f"Invalid configuration: {exc}")
        return 1

    level, invalid = configure_logging(config.log_level)
    if invalid:
        log_warning(
            logger, "Invalid log level %r, falling back to %s", config.log_level, level
        )

    reader = GitRepositoryReader()
    repositories: list[Repository] = []
    for folder in args.folders:
        try:
            repositories.append(reader.read(folder))
        except (GitCommandError, NotARepositoryError) as exc:
            print(f"Cannot read {folder}: {exc}")
            return 1

    asyncio.run(_report(repositories, config, args.item_url))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
