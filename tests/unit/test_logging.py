"""Unit tests for the femtologging helpers.

Run with:
    pytest tests/unit/test_logging.py
"""

from __future__ import annotations

import pytest

from pullbridge.logging import (
    configure_logging,
    format_log_message,
    log_debug,
    log_error,
    log_exception,
    log_info,
    log_warning,
    normalize_log_level,
)


class _FakeLogger:
    """Collects log calls for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, object | None, bool]] = []

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str:
        self.calls.append((level, message, exc_info, stack_info))
        return message


@pytest.mark.parametrize(
    ("raw", "expected", "invalid"),
    [
        ("warning", "WARNING", False),
        (" debug ", "DEBUG", False),
        (None, "INFO", True),
        ("", "INFO", True),
        ("verbose", "INFO", True),
    ],
)
def test_normalize_log_level(raw: str | None, expected: str, *, invalid: bool) -> None:
    """Known levels are upper-cased; anything else falls back to INFO."""
    assert normalize_log_level(raw) == (expected, invalid)


def test_format_log_message() -> None:
    """Templates use percent formatting; bare templates pass through."""
    assert format_log_message("%d folders in %s", 2, "ws") == "2 folders in ws"
    assert format_log_message("100% done") == "100% done"


@pytest.mark.parametrize(
    ("helper", "level"),
    [
        (log_info, "INFO"),
        (log_warning, "WARNING"),
        (log_error, "ERROR"),
    ],
)
def test_level_helpers_forward_exc_info(helper: object, level: str) -> None:
    """Each helper formats the message and forwards exc_info."""
    logger = _FakeLogger()
    exc = ValueError("boom")

    helper(logger, "state=%s", "Ready", exc_info=exc)  # type: ignore[operator]

    assert logger.calls == [(level, "state=Ready", exc, False)]


def test_log_debug() -> None:
    """log_debug emits DEBUG without exc_info."""
    logger = _FakeLogger()

    log_debug(logger, "%d remotes", 3)

    assert logger.calls == [("DEBUG", "3 remotes", None, False)]


def test_log_exception_attaches_exception() -> None:
    """log_exception logs at ERROR with the exception as exc_info."""
    logger = _FakeLogger()
    exc = RuntimeError("refresh failed")

    log_exception(logger, "Refresh failed", exc)

    assert logger.calls == [("ERROR", "Refresh failed", exc, False)]


def test_configure_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """configure_logging applies the normalised level via basicConfig."""
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr("pullbridge.logging.basicConfig", fake_basic_config)

    assert configure_logging("nope") == ("INFO", True)
    assert captured == {"level": "INFO", "force": False}
