"""Unit tests for remote URL parsing and normalisation."""

from __future__ import annotations

import pytest

from pullbridge.common.remote import (
    Protocol,
    ProtocolType,
    Remote,
    strip_extension,
    url_extension,
)


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://example.com/org/repo.git", "https://example.com/org/repo"),
        ("https://example.com/org/repo", "https://example.com/org/repo"),
        ("https://example.com/org/repo.js", "https://example.com/org/repo"),
        ("https://example.com/org/repo.tar.gz", "https://example.com/org/repo.tar"),
        ("https://example.com/org/.github", "https://example.com/org/.github"),
        ("git@github.com:org/repo.git", "git@github.com:org/repo"),
        ("", ""),
    ],
)
def test_strip_extension(url: str, expected: str) -> None:
    """Only the last segment's extension is removed."""
    assert strip_extension(url) == expected


def test_trailing_slash_keeps_extension_length_semantics() -> None:
    """The extension is found past a trailing slash and cut from the end."""
    assert url_extension("https://example.com/org/repo.git/") == ".git"
    assert strip_extension("https://example.com/org/repo.git/") == (
        "https://example.com/org/repo."
    )


@pytest.mark.parametrize(
    ("url", "protocol_type", "host", "owner", "name"),
    [
        ("https://github.com/octo/app.git", ProtocolType.HTTP, "github.com", "octo", "app"),
        ("http://GitHub.com/octo/app", ProtocolType.HTTP, "github.com", "octo", "app"),
        ("git@github.com:octo/app.git", ProtocolType.SSH, "github.com", "octo", "app"),
        ("ssh://git@github.com/octo/app", ProtocolType.SSH, "github.com", "octo", "app"),
        ("git://github.com/octo/app.git", ProtocolType.GIT, "github.com", "octo", "app"),
        ("/srv/git/octo/app.git", ProtocolType.LOCAL, "", "octo", "app"),
        ("svn://example.com/octo/app", ProtocolType.OTHER, "example.com", "octo", "app"),
    ],
)
def test_protocol_parse(
    url: str, protocol_type: ProtocolType, host: str, owner: str, name: str
) -> None:
    """Common remote URL shapes reduce to host, owner and name."""
    protocol = Protocol.parse(url)

    assert protocol.type is protocol_type
    assert protocol.host == host
    assert protocol.owner == owner
    assert protocol.repository_name == name


def test_normalize_uri() -> None:
    """Addressable URLs normalise to https; partial ones do not."""
    assert Protocol.parse("git@github.com:octo/app.git").normalize_uri() == (
        "https://github.com/octo/app"
    )
    assert Protocol.parse("https://github.com/").normalize_uri() is None
    assert Protocol.parse("/srv/git/app").normalize_uri() is None


def test_remote_delegates_to_protocol() -> None:
    """Remote exposes the parsed parts and its normalised URL."""
    remote = Remote.from_url("origin", "https://github.com/octo/app.git")

    assert remote.host == "github.com"
    assert remote.slug == "octo/app"
    assert remote.normalized_url == "https://github.com/octo/app"


def test_remote_without_owner_has_no_slug() -> None:
    """A single-segment path yields no slug."""
    assert Remote.from_url("local", "https://github.com/app").slug is None
