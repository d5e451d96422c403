"""Unit tests for PullBridgeConfig and settings files."""

from __future__ import annotations

import typing as typ

import pytest

from pullbridge.config import (
    PullBridgeConfig,
    Settings,
    SettingsError,
    load_settings,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

_ENV_VARS = ("PULLBRIDGE_GITHUB_HOST", "PULLBRIDGE_REMOTES", "PULLBRIDGE_LOG_LEVEL")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    """Without environment values the defaults apply."""
    config = PullBridgeConfig.from_env()

    assert config == PullBridgeConfig(
        github_host="github.com", remotes=(), log_level="INFO"
    )
    assert config.accepts_remote("anything") is True


def test_from_env_reads_values(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables override the defaults."""
    monkeypatch.setenv("PULLBRIDGE_GITHUB_HOST", " GIT.Example.com ")
    monkeypatch.setenv("PULLBRIDGE_REMOTES", "origin, upstream,,")
    monkeypatch.setenv("PULLBRIDGE_LOG_LEVEL", "debug")

    config = PullBridgeConfig.from_env()

    assert config.github_host == "git.example.com"
    assert config.remotes == ("origin", "upstream")
    assert config.log_level == "debug"
    assert config.accepts_remote("fork") is False


@pytest.mark.parametrize("host", ["https://github.com", "github.com/octo", "host:22"])
def test_from_env_rejects_non_bare_hosts(
    monkeypatch: pytest.MonkeyPatch, host: str
) -> None:
    """Hosts with schemes, paths or ports are rejected."""
    monkeypatch.setenv("PULLBRIDGE_GITHUB_HOST", host)

    with pytest.raises(SettingsError, match="bare host name"):
        PullBridgeConfig.from_env()


def test_load_settings_uses_camel_case_keys(tmp_path: Path) -> None:
    """Settings files use camelCase keys."""
    path = tmp_path / "settings.yaml"
    path.write_text(
        "githubHost: git.example.com\nremotes:\n  - origin\nlogLevel: WARNING\n",
        encoding="utf-8",
    )

    assert load_settings(path) == Settings(
        github_host="git.example.com", remotes=("origin",), log_level="WARNING"
    )


def test_empty_settings_file(tmp_path: Path) -> None:
    """An empty file changes nothing."""
    path = tmp_path / "settings.yaml"
    path.write_text("", encoding="utf-8")

    assert load_settings(path) == Settings()


@pytest.mark.parametrize(
    ("content", "match"),
    [
        ("githubHost: [unclosed\n", "failed to parse"),
        ("remotes: 3\n", "invalid settings"),
    ],
)
def test_invalid_settings(tmp_path: Path, content: str, match: str) -> None:
    """Malformed YAML and schema mismatches raise SettingsError."""
    path = tmp_path / "settings.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(SettingsError, match=match):
        load_settings(path)


def test_missing_settings_file(tmp_path: Path) -> None:
    """Unreadable files raise SettingsError."""
    with pytest.raises(SettingsError, match="failed to parse"):
        load_settings(tmp_path / "missing.yaml")


def test_from_settings_overrides_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Keys present in the file win; absent keys keep environment values."""
    monkeypatch.setenv("PULLBRIDGE_REMOTES", "origin")
    monkeypatch.setenv("PULLBRIDGE_LOG_LEVEL", "DEBUG")
    path = tmp_path / "settings.yaml"
    path.write_text("githubHost: git.example.com\n", encoding="utf-8")

    config = PullBridgeConfig.from_settings(path)

    assert config == PullBridgeConfig(
        github_host="git.example.com", remotes=("origin",), log_level="DEBUG"
    )
