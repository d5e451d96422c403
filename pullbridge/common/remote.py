"""Remote references and forge URL parsing.

Remote URLs come in several shapes (``https://host/owner/name.git``,
``git@host:owner/name.git``, ``ssh://git@host/owner/name``, local paths).
:class:`Protocol` reduces them to ``host``, ``owner`` and ``repository_name``
so remotes can be matched against forge repositories. They are not
filesystem paths, so only :func:`url_extension` borrows path semantics.
"""

from __future__ import annotations

import dataclasses
import enum
import posixpath
import re
from urllib.parse import urlsplit

_SCP_LIKE = re.compile(r"^(?:(?P<user>[^@/]+)@)?(?P<host>[^:/]+):(?!//)(?P<path>.+)$")
_GIT_SUFFIX = ".git"


class ProtocolType(enum.StrEnum):
    """Transport used by a remote URL."""

    LOCAL = "local"
    HTTP = "http"
    SSH = "ssh"
    GIT = "git"
    OTHER = "other"


_SCHEME_TYPES: dict[str, ProtocolType] = {
    "http": ProtocolType.HTTP,
    "https": ProtocolType.HTTP,
    "ssh": ProtocolType.SSH,
    "git+ssh": ProtocolType.SSH,
    "git": ProtocolType.GIT,
    "file": ProtocolType.LOCAL,
}


def url_extension(url: str) -> str:
    """Return the extension of the last path segment of ``url``.

    Trailing separators are ignored when locating the segment and a segment
    that starts with its only dot has no extension, as with a generic path
    extension function.

    Examples
    --------
    >>> url_extension("https://github.com/octo/repo.git")
    '.git'
    >>> url_extension("https://github.com/octo/.github")
    ''

    """
    segment = url.rstrip("/").rsplit("/", 1)[-1]
    return posixpath.splitext(segment)[1]


def strip_extension(url: str) -> str:
    """Drop ``len(url_extension(url))`` characters from the end of ``url``.

    This strips ``.git`` decorations but equally turns ``repo.js`` into
    ``repo``; lookups rely on both sides being normalised the same way.

    Examples
    --------
    >>> strip_extension("https://github.com/octo/repo.git")
    'https://github.com/octo/repo'

    """
    extension = url_extension(url)
    return url[: len(url) - len(extension)]


def _split_path(path: str) -> tuple[str | None, str | None]:
    segments = [segment for segment in path.strip("/").split("/") if segment]
    if not segments:
        return (None, None)
    name = segments[-1].removesuffix(_GIT_SUFFIX) or None
    owner = segments[-2] if len(segments) > 1 else None
    return (owner, name)


@dataclasses.dataclass(frozen=True, slots=True)
class Protocol:
    """Parsed view of a remote URL."""

    url: str
    type: ProtocolType
    host: str
    owner: str | None
    repository_name: str | None

    @classmethod
    def parse(cls, url: str) -> Protocol:
        """Parse ``url`` into its transport, host, owner and repository name."""
        text = url.strip()
        scp = _SCP_LIKE.match(text)
        if scp is not None and "://" not in text:
            owner, name = _split_path(scp.group("path"))
            return cls(text, ProtocolType.SSH, scp.group("host").lower(), owner, name)

        parts = urlsplit(text)
        if not parts.scheme:
            owner, name = _split_path(parts.path)
            return cls(text, ProtocolType.LOCAL, "", owner, name)

        protocol_type = _SCHEME_TYPES.get(parts.scheme.lower(), ProtocolType.OTHER)
        host = (parts.hostname or "").lower()
        owner, name = _split_path(parts.path)
        return cls(text, protocol_type, host, owner, name)

    @property
    def is_forge_addressable(self) -> bool:
        """Return True when the URL names a host, an owner and a repository."""
        return bool(self.host and self.owner and self.repository_name)

    def normalize_uri(self) -> str | None:
        """Return the canonical ``https://host/owner/name`` form, if any."""
        if not self.is_forge_addressable:
            return None
        return f"https://{self.host}/{self.owner}/{self.repository_name}"


@dataclasses.dataclass(frozen=True, slots=True)
class Remote:
    """A named git remote bound to a parsed URL."""

    remote_name: str
    url: str
    protocol: Protocol

    @classmethod
    def from_url(cls, remote_name: str, url: str) -> Remote:
        """Build a remote by parsing ``url``."""
        return cls(remote_name, url, Protocol.parse(url))

    @property
    def host(self) -> str:
        """Return the lower-cased host name."""
        return self.protocol.host

    @property
    def owner(self) -> str | None:
        """Return the repository owner, when the URL has one."""
        return self.protocol.owner

    @property
    def repository_name(self) -> str | None:
        """Return the repository name without a ``.git`` suffix."""
        return self.protocol.repository_name

    @property
    def slug(self) -> str | None:
        """Return ``owner/name`` when both parts are known."""
        if self.owner is None or self.repository_name is None:
            return None
        return f"{self.owner}/{self.repository_name}"

    @property
    def normalized_url(self) -> str:
        """Return :attr:`url` with its trailing extension stripped."""
        return strip_extension(self.url)


__all__ = [
    "Protocol",
    "ProtocolType",
    "Remote",
    "strip_extension",
    "url_extension",
]
