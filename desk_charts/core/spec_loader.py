from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .errors import SpecValidationError
from .models import ChartSpec, Series


def _load_document(path: Path) -> dict:
    if not path.exists():
        raise SpecValidationError(f"Chart spec file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SpecValidationError(f"Could not parse chart spec {path}: {e}") from e
    if not isinstance(data, dict):
        raise SpecValidationError(f"Chart spec {path} must be a mapping at the top level")
    return data


def _series(cfg: Any, where: str) -> Series:
    if not isinstance(cfg, dict):
        raise SpecValidationError(f"{where} must be a mapping with 'label' and 'values'")
    values = cfg.get("values")
    if not isinstance(values, list):
        raise SpecValidationError(f"{where} needs a 'values' list")
    return Series(
        label=str(cfg.get("label", where)),
        values=tuple(values),
        color=cfg.get("color"),
    )


def chart_spec_from_dict(data: dict) -> ChartSpec:
    """Build a ChartSpec from a parsed YAML/JSON mapping."""
    series_cfg = data.get("series")
    if not isinstance(series_cfg, list):
        raise SpecValidationError("Chart spec needs a 'series' list")
    categories = data.get("categories")
    if not isinstance(categories, list):
        raise SpecValidationError("Chart spec needs a 'categories' list")
    line_cfg = data.get("line")
    return ChartSpec(
        kind=data.get("kind"),
        categories=tuple(categories),
        series=tuple(_series(s, f"series[{i}]") for i, s in enumerate(series_cfg)),
        line=_series(line_cfg, "line") if line_cfg is not None else None,
        title=data.get("title"),
        subtitle=data.get("subtitle"),
        unit=str(data.get("unit") or ""),
    )


def load_chart_spec(path: str | Path) -> ChartSpec:
    return chart_spec_from_dict(_load_document(Path(path)))
