"""Tests for CLI output formatting utilities."""

from __future__ import annotations

import pytest

from desk_charts.cli import output
from desk_charts.cli.output import OutputColor


def test_success_with_prefix(capsys: pytest.CaptureFixture[str]) -> None:
    """Test success message includes checkmark emoji by default."""
    output.success("Chart written")
    captured = capsys.readouterr()
    assert "✅ Chart written" in captured.out


def test_success_without_prefix(capsys: pytest.CaptureFixture[str]) -> None:
    output.success("Chart written", prefix=False)
    captured = capsys.readouterr()
    assert "✅" not in captured.out
    assert "Chart written" in captured.out


def test_error_writes_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    """Test error message writes to stderr by default."""
    output.error("Bad spec")
    captured = capsys.readouterr()
    assert "❌ Bad spec" in captured.err
    assert captured.out == ""


def test_error_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    output.error("Bad spec", err=False)
    assert "❌ Bad spec" in capsys.readouterr().out


def test_warning_with_prefix(capsys: pytest.CaptureFixture[str]) -> None:
    output.warning("Hover ignored")
    captured = capsys.readouterr()
    assert "⚠️" in captured.out
    assert "Hover ignored" in captured.out


def test_info_and_data(capsys: pytest.CaptureFixture[str]) -> None:
    output.info("Loading spec")
    output.data("Gridlines:")
    captured = capsys.readouterr()
    assert "Loading spec" in captured.out
    assert "📊 Gridlines:" in captured.out


def test_plain_with_color(capsys: pytest.CaptureFixture[str]) -> None:
    output.plain("  domain max: 8.8", color=OutputColor.WHITE)
    output.plain("uncolored")
    captured = capsys.readouterr()
    assert "domain max: 8.8" in captured.out
    assert "uncolored" in captured.out
