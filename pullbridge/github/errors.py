"""Errors describing why a folder cannot be used for pull requests.

The exceptions carry structured fields only. Text is produced on demand by
:func:`format_error_message`, so callers that need the offending repository,
branch or upstream read the attributes instead of parsing ``str(error)``.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pullbridge.git.models import Repository, UpstreamRef


class ForgeRepositoryError(Exception):
    """Base class for folder-level pull-request errors."""

    def __str__(self) -> str:
        """Render the message from the structured fields."""
        return format_error_message(self)


class NoGitHubReposError(ForgeRepositoryError):
    """The repository has no remotes bound to the forge."""

    def __init__(self, repository: Repository) -> None:
        """Record the repository without forge remotes."""
        super().__init__(repository)
        self.repository = repository


class DetachedHeadError(ForgeRepositoryError):
    """HEAD is not attached to a named branch."""

    def __init__(self, repository: Repository) -> None:
        """Record the repository with the detached HEAD."""
        super().__init__(repository)
        self.repository = repository


class BadUpstreamError(ForgeRepositoryError):
    """The current branch tracks an unusable upstream ref."""

    def __init__(self, branch_name: str, upstream_ref: UpstreamRef, problem: str) -> None:
        """Record the branch, its upstream and what is wrong with it.

        ``problem`` completes the sentence "The upstream ref ... for branch
        ...", e.g. ``"refers to a missing remote"``.
        """
        super().__init__(branch_name, upstream_ref, problem)
        self.branch_name = branch_name
        self.upstream_ref = upstream_ref
        self.problem = problem

    @classmethod
    def missing_remote(cls, branch_name: str, upstream_ref: UpstreamRef) -> BadUpstreamError:
        """Return an error for an upstream on a remote that is not configured."""
        return cls(branch_name, upstream_ref, "refers to a missing remote")

    @classmethod
    def not_on_forge(cls, branch_name: str, upstream_ref: UpstreamRef) -> BadUpstreamError:
        """Return an error for an upstream whose remote is not a forge repository."""
        return cls(branch_name, upstream_ref, "is not a GitHub repository")


def format_error_message(error: ForgeRepositoryError) -> str:
    """Return the user-facing message for ``error``."""
    match error:
        case NoGitHubReposError(repository=repository):
            return f"{repository.root_uri} has no GitHub remotes"
        case DetachedHeadError(repository=repository):
            return f"{repository.root_uri} has a detached HEAD (create a branch first)"
        case BadUpstreamError(
            branch_name=branch_name, upstream_ref=upstream_ref, problem=problem
        ):
            return (
                f"The upstream ref {upstream_ref.remote}/{upstream_ref.name} "
                f"for branch {branch_name} {problem}."
            )
        case _:
            return type(error).__name__


__all__ = [
    "BadUpstreamError",
    "DetachedHeadError",
    "ForgeRepositoryError",
    "NoGitHubReposError",
    "format_error_message",
]
