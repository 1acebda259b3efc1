"""Tests for settings and theme loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from desk_charts.core.config import get_settings
from desk_charts.core.errors import SpecValidationError
from desk_charts.core.theme import DEFAULT_PALETTE, Theme, load_theme


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "DESK_CHARTS_DEFAULT_WIDTH",
        "CHART_DEFAULT_WIDTH",
        "DESK_CHARTS_THEME",
        "CHART_THEME",
        "DESK_CHARTS_PNG_DPI",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestSettings:
    def test_defaults(self) -> None:
        settings = get_settings()
        assert settings.default_width is None
        assert settings.theme_path == "configs/theme.yaml"
        assert settings.png_dpi == 100

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DESK_CHARTS_DEFAULT_WIDTH", "640")
        monkeypatch.setenv("DESK_CHARTS_PNG_DPI", "150")
        settings = get_settings()
        assert settings.default_width == 640
        assert settings.png_dpi == 150

    def test_fallback_names(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHART_THEME", "custom.yaml")
        assert get_settings().theme_path == "custom.yaml"

    def test_dotenv_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text(
            "# local\nDESK_CHARTS_DEFAULT_WIDTH='720'\nnot a pair\n", encoding="utf-8"
        )
        assert get_settings().default_width == 720

    def test_invalid_width_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DESK_CHARTS_DEFAULT_WIDTH", "wide")
        assert get_settings().default_width is None


class TestTheme:
    def test_missing_file_gives_default(self, tmp_path: Path) -> None:
        assert load_theme(tmp_path / "nope.yaml") == Theme()

    def test_custom_palette(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.yaml"
        path.write_text(
            "theme:\n  palette: ['#111111', '#222222']\n  grid_color: '#EEEEEE'\n",
            encoding="utf-8",
        )
        theme = load_theme(path)
        assert theme.palette == ("#111111", "#222222")
        assert theme.grid_color == "#EEEEEE"
        assert theme.color_for(2) == "#111111"

    def test_bad_palette(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.yaml"
        path.write_text("theme:\n  palette: red\n", encoding="utf-8")
        with pytest.raises(SpecValidationError):
            load_theme(path)

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.yaml"
        path.write_text("theme: [unclosed\n", encoding="utf-8")
        with pytest.raises(SpecValidationError, match="Invalid theme file"):
            load_theme(path)

    def test_theme_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.yaml"
        path.write_text("theme: ['#111111']\n", encoding="utf-8")
        with pytest.raises(SpecValidationError, match="must be a mapping"):
            load_theme(path)

    def test_default_palette_has_seven_colors(self) -> None:
        assert len(DEFAULT_PALETTE) == 7
