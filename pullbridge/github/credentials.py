"""Credential store contract and an environment-backed implementation.

The registry and every folder manager share one credential store. Only the
registry asks it to ``reset()`` or ``login()``; the store owns the actual
token handling.
"""

from __future__ import annotations

import os
import typing as typ

import msgspec

from pullbridge.common.events import EventEmitter
from pullbridge.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pullbridge.common.events import Event

logger = get_logger(__name__)

TOKEN_ENV_VAR = "PULLBRIDGE_GITHUB_TOKEN"
ACCOUNT_ENV_VAR = "PULLBRIDGE_GITHUB_ACCOUNT"


class GitHubSession(msgspec.Struct, kw_only=True, frozen=True):
    """An authenticated forge session.

    Attributes
    ----------
    account
        Login name the token belongs to; empty when unknown.
    access_token
        Bearer token used for forge requests.
    scopes
        OAuth scopes granted to the token.

    """

    access_token: str
    account: str = ""
    scopes: tuple[str, ...] = ()


@typ.runtime_checkable
class CredentialStore(typ.Protocol):
    """Source of forge sessions shared by the registry and folder managers."""

    @property
    def on_did_change_sessions(self) -> Event[GitHubSession | None]:
        """Fire when a login produces a different session."""
        ...

    async def initialize(self) -> None:
        """Load any existing session without prompting."""
        ...

    async def reset(self) -> None:
        """Drop cached credentials and reload them silently."""
        ...

    async def login(self) -> GitHubSession | None:
        """Acquire a session, returning None when none is available."""
        ...

    def is_authenticated(self) -> bool:
        """Return True when a usable session is cached."""
        ...


def token_from_env() -> str | None:
    """Return the token from ``PULLBRIDGE_GITHUB_TOKEN``, if set."""
    return os.environ.get(TOKEN_ENV_VAR)


class EnvCredentialStore:
    """Credential store that reads a token from a provider callable.

    The default provider reads ``PULLBRIDGE_GITHUB_TOKEN``. Blank tokens count
    as no session. ``login()`` re-reads the provider and fires
    :attr:`on_did_change_sessions` when the session changes; ``reset()``
    re-reads it without firing.
    """

    def __init__(
        self,
        token_provider: cabc.Callable[[], str | None] = token_from_env,
        *,
        account: str | None = None,
    ) -> None:
        """Configure the token source and optional account name."""
        self._token_provider = token_provider
        self._account = account
        self._session: GitHubSession | None = None
        self._on_did_change_sessions: EventEmitter[GitHubSession | None] = (
            EventEmitter()
        )

    @property
    def on_did_change_sessions(self) -> Event[GitHubSession | None]:
        """Subscribe to session changes produced by ``login()``."""
        return self._on_did_change_sessions.event

    @property
    def session(self) -> GitHubSession | None:
        """Return the cached session."""
        return self._session

    async def initialize(self) -> None:
        """Load the current token, if any."""
        self._session = self._read_session()

    async def reset(self) -> None:
        """Forget the cached session and reload it from the provider."""
        self._session = None
        self._session = self._read_session()
        log_info(
            logger,
            "Credential cache reset (authenticated=%s)",
            self._session is not None,
        )

    async def login(self) -> GitHubSession | None:
        """Read the provider and return the resulting session."""
        previous = self._session
        self._session = self._read_session()
        if self._session != previous:
            self._on_did_change_sessions.fire(self._session)
        return self._session

    def is_authenticated(self) -> bool:
        """Return True when a session is cached."""
        return self._session is not None

    def dispose(self) -> None:
        """Detach session listeners."""
        self._on_did_change_sessions.dispose()

    def _read_session(self) -> GitHubSession | None:
        token = (self._token_provider() or "").strip()
        if not token:
            return None
        account = self._account
        if account is None:
            account = os.environ.get(ACCOUNT_ENV_VAR, "")
        return GitHubSession(access_token=token, account=account)


__all__ = [
    "ACCOUNT_ENV_VAR",
    "TOKEN_ENV_VAR",
    "CredentialStore",
    "EnvCredentialStore",
    "GitHubSession",
    "token_from_env",
]
