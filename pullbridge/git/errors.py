"""Errors raised while reading local repositories."""

from __future__ import annotations


class GitCommandError(RuntimeError):
    """Raised when a git invocation fails."""

    def __init__(self, args: tuple[str, ...], returncode: int, stderr: str) -> None:
        """Record the failing argv, exit status and stderr."""
        self.command = args
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or "no output"
        super().__init__(
            f"git {' '.join(args)} exited with status {returncode}: {detail}"
        )

    @classmethod
    def executable_missing(cls) -> GitCommandError:
        """Return an error for a PATH without git."""
        return cls((), 127, "git executable not found on PATH")


class NotARepositoryError(ValueError):
    """Raised when a folder is not inside a git work tree."""

    def __init__(self, path: str) -> None:
        """Record the rejected folder."""
        self.path = path
        super().__init__(f"{path} is not a git repository")
