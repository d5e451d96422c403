"""Runtime configuration for pullbridge.

Values come from environment variables and, optionally, a YAML settings
file that overrides them.

Usage
-----
>>> config = PullBridgeConfig()
>>> config.github_host
'github.com'

>>> import os
>>> os.environ["PULLBRIDGE_REMOTES"] = "origin, upstream"
>>> PullBridgeConfig.from_env().remotes
('origin', 'upstream')

"""

from __future__ import annotations

import dataclasses as dc
import os
from pathlib import Path

import msgspec
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from pullbridge.logging import DEFAULT_LOG_LEVEL

YAML_VERSION = (1, 2)
DEFAULT_GITHUB_HOST = "github.com"


class SettingsError(ValueError):
    """Raised when configuration values or settings files are invalid."""

    @classmethod
    def invalid_yaml(cls, path: Path, detail: object) -> SettingsError:
        """Return an error for an unreadable or malformed settings file."""
        return cls(f"failed to parse settings file {path}: {detail}")

    @classmethod
    def invalid_schema(cls, path: Path, detail: object) -> SettingsError:
        """Return an error for settings that do not match the schema."""
        return cls(f"invalid settings in {path}: {detail}")

    @classmethod
    def invalid_host(cls, host: str) -> SettingsError:
        """Return an error for a host containing a scheme or path."""
        return cls(f"github host must be a bare host name, got: {host!r}")


class Settings(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Settings file schema; unset keys leave the environment values alone.

    Attributes
    ----------
    github_host
        Forge host whose remotes become bindings (``githubHost``).
    remotes
        Remote names considered when building bindings; empty means all.
    log_level
        femtologging level name (``logLevel``).

    """

    github_host: str | None = None
    remotes: tuple[str, ...] | None = None
    log_level: str | None = None


def _yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.version = YAML_VERSION
    yaml.allow_duplicate_keys = False
    return yaml


def load_settings(path: Path | str) -> Settings:
    """Parse a YAML settings file.

    An empty file yields default :class:`Settings`.

    Raises
    ------
    SettingsError
        If the file cannot be read, is not valid YAML, or does not match
        the schema.

    """
    path_obj = Path(path)
    try:
        loaded = _yaml().load(path_obj.read_text(encoding="utf-8"))
    except (OSError, YAMLError) as exc:
        raise SettingsError.invalid_yaml(path_obj, exc) from exc

    if loaded is None:
        return Settings()

    try:
        return msgspec.convert(loaded, type=Settings)
    except msgspec.ValidationError as exc:
        raise SettingsError.invalid_schema(path_obj, exc) from exc


def _parse_remotes(raw: str) -> tuple[str, ...]:
    return tuple(name.strip() for name in raw.split(",") if name.strip())


def _validate_host(host: str) -> str:
    candidate = host.strip().lower()
    if not candidate or "/" in candidate or ":" in candidate:
        raise SettingsError.invalid_host(host)
    return candidate


@dc.dataclass(frozen=True, slots=True)
class PullBridgeConfig:
    """Resolved configuration.

    Attributes
    ----------
    github_host
        Host name of the forge. Remotes on other hosts are ignored.
    remotes
        Remote names to bind; an empty tuple binds every remote on the host.
    log_level
        Level passed to :func:`pullbridge.logging.configure_logging`.

    """

    github_host: str = DEFAULT_GITHUB_HOST
    remotes: tuple[str, ...] = ()
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> PullBridgeConfig:
        """Build configuration from environment variables.

        Reads:

        - ``PULLBRIDGE_GITHUB_HOST``: forge host (default ``github.com``)
        - ``PULLBRIDGE_REMOTES``: comma-separated remote names
        - ``PULLBRIDGE_LOG_LEVEL``: log level (default ``INFO``)

        Raises
        ------
        SettingsError
            If ``PULLBRIDGE_GITHUB_HOST`` is not a bare host name.

        """
        raw_host = os.environ.get("PULLBRIDGE_GITHUB_HOST", "")
        host = _validate_host(raw_host) if raw_host.strip() else DEFAULT_GITHUB_HOST
        return cls(
            github_host=host,
            remotes=_parse_remotes(os.environ.get("PULLBRIDGE_REMOTES", "")),
            log_level=os.environ.get("PULLBRIDGE_LOG_LEVEL", "").strip()
            or DEFAULT_LOG_LEVEL,
        )

    def with_settings(self, settings: Settings) -> PullBridgeConfig:
        """Return a copy with every key set in ``settings`` applied."""
        changes: dict[str, object] = {}
        if settings.github_host is not None:
            changes["github_host"] = _validate_host(settings.github_host)
        if settings.remotes is not None:
            changes["remotes"] = tuple(settings.remotes)
        if settings.log_level is not None:
            changes["log_level"] = settings.log_level
        return dc.replace(self, **changes)

    @classmethod
    def from_settings(cls, path: Path | str | None = None) -> PullBridgeConfig:
        """Build configuration from the environment, then ``path`` if given."""
        config = cls.from_env()
        if path is None:
            return config
        return config.with_settings(load_settings(path))

    def accepts_remote(self, remote_name: str) -> bool:
        """Return True when ``remote_name`` passes the ``remotes`` filter."""
        return not self.remotes or remote_name in self.remotes


__all__ = [
    "DEFAULT_GITHUB_HOST",
    "PullBridgeConfig",
    "Settings",
    "SettingsError",
    "load_settings",
]
