from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

import pytest

from claimpath.config import (
    LOG_FORMAT,
    LOG_LEVEL_ENV_VAR,
    InvalidConfigurationValueError,
    configure_logging,
    resolve_log_level,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


@contextmanager
def _restored_root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    try:
        yield root
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


def test_resolve_log_level_defaults_to_warning() -> None:
    assert resolve_log_level() == logging.WARNING


def test_resolve_log_level_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, " Info ")

    assert resolve_log_level() == logging.INFO


def test_verbose_overrides_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "error")

    assert resolve_log_level(verbose=True) == logging.DEBUG


def test_resolve_log_level_rejects_unknown_names(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "loud")

    with pytest.raises(InvalidConfigurationValueError) as exc:
        resolve_log_level()

    assert exc.value.name == LOG_LEVEL_ENV_VAR
    assert "expected one of debug, info, warning, error, critical" in str(exc.value)


def test_configure_logging_applies_level_and_format(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "error")

    with _restored_root_logger() as root:
        applied = configure_logging(force=True)
        level = root.level
        formatter = root.handlers[0].formatter

    assert applied == logging.ERROR
    assert level == logging.ERROR
    assert formatter is not None
    assert formatter._fmt == LOG_FORMAT  # noqa: SLF001


def test_explicit_level_wins_over_verbose() -> None:
    with _restored_root_logger():
        applied = configure_logging(verbose=True, level=logging.INFO, force=True)

    assert applied == logging.INFO
