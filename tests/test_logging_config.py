"""Tests for logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pythonjsonlogger.json import JsonFormatter

from desk_charts.core.logging_config import LOGGING_CONFIG, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    yield
    logger = logging.getLogger("desk_charts")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_setup_creates_log_dir(tmp_path: Path) -> None:
    setup_logging()
    assert (tmp_path / "logs").is_dir()


def test_log_level_applied() -> None:
    setup_logging(log_level="warning")
    logger = logging.getLogger("desk_charts")
    assert logger.level == logging.WARNING
    # Base config is copied, never mutated
    assert LOGGING_CONFIG["loggers"]["desk_charts"]["level"] == "DEBUG"


def test_json_console_output() -> None:
    setup_logging(json_output=True)
    logger = logging.getLogger("desk_charts")
    console = [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]
    assert console
    assert isinstance(console[0].formatter, JsonFormatter)


def test_get_logger_is_namespaced() -> None:
    assert get_logger("desk_charts.layout.scale").name == "desk_charts.layout.scale"
