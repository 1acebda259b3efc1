from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from .errors import SpecValidationError

DEFAULT_PALETTE: tuple[str, ...] = (
    "#6366F1",
    "#8B5CF6",
    "#EC4899",
    "#F59E0B",
    "#10B981",
    "#3B82F6",
    "#64748B",
)


@dataclass(frozen=True)
class Theme:
    palette: tuple[str, ...] = DEFAULT_PALETTE
    grid_color: str = "#CBD5E1"
    plot_background: str = "#F8FAFC"
    axis_text: str = "#64748B"
    emphasis_text: str = "#0F172A"
    tooltip_background: str = "#0F172A"

    def color_for(self, index: int) -> str:
        """Return the palette color for a series index, cycling past the end."""
        if index < 0:
            index = 0
        return self.palette[index % len(self.palette)]


def _load_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise SpecValidationError(f"Invalid theme file {path}: {e}") from e
    if not isinstance(data, dict):
        raise SpecValidationError(f"Theme file {path} must contain a mapping")
    return data


def load_theme(path: str | Path = "configs/theme.yaml") -> Theme:
    data = _load_yaml(Path(path))
    cfg = data.get("theme") or {}
    if not isinstance(cfg, dict):
        raise SpecValidationError(f"'theme' in {path} must be a mapping")
    if not cfg:
        return Theme()
    palette = cfg.get("palette") or list(DEFAULT_PALETTE)
    if not isinstance(palette, list) or not all(isinstance(c, str) for c in palette):
        raise SpecValidationError(f"Theme palette in {path} must be a list of color strings")
    defaults = Theme()
    return Theme(
        palette=tuple(palette),
        grid_color=cfg.get("grid_color", defaults.grid_color),
        plot_background=cfg.get("plot_background", defaults.plot_background),
        axis_text=cfg.get("axis_text", defaults.axis_text),
        emphasis_text=cfg.get("emphasis_text", defaults.emphasis_text),
        tooltip_background=cfg.get("tooltip_background", defaults.tooltip_background),
    )
