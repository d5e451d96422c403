"""Forge repository bindings."""

from __future__ import annotations

import dataclasses
import typing as typ

if typ.TYPE_CHECKING:
    from pullbridge.common.remote import Remote
    from pullbridge.github.credentials import CredentialStore


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubRepository:
    """A remote forge repository paired with the credentials used to reach it.

    Construction performs no network access. Two bindings are equal when
    their remotes are equal, whichever credential store they carry.
    """

    remote: Remote
    credential_store: CredentialStore = dataclasses.field(compare=False, repr=False)

    @property
    def owner(self) -> str | None:
        """Return the repository owner."""
        return self.remote.owner

    @property
    def name(self) -> str | None:
        """Return the repository name."""
        return self.remote.repository_name

    @property
    def slug(self) -> str | None:
        """Return ``owner/name``."""
        return self.remote.slug

    @property
    def normalized_url(self) -> str:
        """Return the remote URL with its trailing extension stripped."""
        return self.remote.normalized_url

    def is_authenticated(self) -> bool:
        """Return True when the shared credential store holds a session."""
        return self.credential_store.is_authenticated()
