"""Unit tests for femtologging integration helpers."""

from __future__ import annotations

import pytest

from repocat.logging import (
    configure_logging,
    format_log_message,
    log_debug,
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
    ("raw", "expected"),
    [
        ("warning", ("WARNING", False)),
        (" trace ", ("TRACE", False)),
        (None, ("INFO", True)),
        ("", ("INFO", True)),
        ("verbose", ("INFO", True)),
    ],
)
def test_normalize_log_level(raw: str | None, expected: tuple[str, bool]) -> None:
    """Known levels are upper-cased; anything else falls back to INFO."""
    assert normalize_log_level(raw) == expected


def test_format_log_message_interpolates() -> None:
    """Templates use percent-style interpolation."""
    assert format_log_message("%s listed %d", "octo", 3) == "octo listed 3"


def test_log_helpers_emit_levels() -> None:
    """Each helper emits its level with a pre-formatted message."""
    logger = _FakeLogger()

    log_debug(logger, "d=%d", 1)
    log_info(logger, "i=%s", "x")
    log_warning(logger, "w")

    assert logger.calls == [
        ("DEBUG", "d=1", None, False),
        ("INFO", "i=x", None, False),
        ("WARNING", "w", None, False),
    ]


def test_log_warning_forwards_exc_info() -> None:
    """Warnings can carry the handled exception."""
    logger = _FakeLogger()
    exc = RuntimeError("provider down")

    log_warning(logger, "failed: %s", "github", exc_info=exc)

    assert logger.calls == [("WARNING", "failed: github", exc, False)]


@pytest.mark.parametrize(
    ("raw", "expected_level", "expected_invalid"),
    [("debug", "DEBUG", False), ("nope", "INFO", True)],
)
def test_configure_logging(
    monkeypatch: pytest.MonkeyPatch,
    raw: str,
    expected_level: str,
    expected_invalid: bool,  # noqa: FBT001
) -> None:
    """configure_logging applies the normalized level to basicConfig."""
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr("repocat.logging.basicConfig", fake_basic_config)

    assert configure_logging(raw) == (expected_level, expected_invalid)
    assert captured == {"level": expected_level, "force": False}
