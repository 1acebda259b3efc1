"""Tests for PNG export via matplotlib."""

from __future__ import annotations

import base64
from pathlib import Path

import pytest
from matplotlib.path import Path as MplPath

from desk_charts.core.models import ChartSpec, Viewport
from desk_charts.scene.builders import get_builder
from desk_charts.visuals.raster import SceneRasterizer, to_mpl_path

PNG_MAGIC = b"\x89PNG"


def _scene(spec: ChartSpec, hovered: int | None = None):
    return get_builder(spec.kind).build(spec, Viewport.for_kind(spec.kind), hovered)


class TestToMplPath:
    def test_line_and_curve_codes(self) -> None:
        path = to_mpl_path((("M", 0, 0), ("C", 1, 1, 2, 2, 3, 3), ("L", 4, 0), ("Z",)))
        assert list(path.codes) == [
            MplPath.MOVETO,
            MplPath.CURVE4,
            MplPath.CURVE4,
            MplPath.CURVE4,
            MplPath.LINETO,
            MplPath.CLOSEPOLY,
        ]

    def test_arc_sweep_direction(self) -> None:
        """Sweep 1 runs through increasing angles; sweep 0 the other way."""
        down = to_mpl_path((("M", 1, 0), ("A", 1, 1, 0, 0, 1, -1, 0)))
        assert down.vertices[:, 1].min() >= -1e-9
        assert down.vertices[:, 1].max() == pytest.approx(1.0)
        assert tuple(down.vertices[-1]) == pytest.approx((-1.0, 0.0))

        up = to_mpl_path((("M", 1, 0), ("A", 1, 1, 0, 0, 0, -1, 0)))
        assert up.vertices[:, 1].max() <= 1e-9
        assert tuple(up.vertices[-1]) == pytest.approx((-1.0, 0.0))

    def test_rejects_unknown_command(self) -> None:
        with pytest.raises(ValueError):
            to_mpl_path((("Q", 1, 2, 3, 4),))


class TestSceneRasterizer:
    def test_rasterize_to_dir_and_base64(self, tmp_path: Path, donut_spec: ChartSpec) -> None:
        rasterizer = SceneRasterizer(output_dir=tmp_path / "assets", dpi=50)
        result = rasterizer.rasterize(_scene(donut_spec, hovered=0), "donut")
        assert Path(result["path"]).exists()
        assert base64.b64decode(result["base64"]).startswith(PNG_MAGIC)

    def test_base64_only(self, stacked_spec: ChartSpec) -> None:
        result = SceneRasterizer(dpi=50).rasterize(_scene(stacked_spec, hovered=1))
        assert "path" not in result
        assert base64.b64decode(result["base64"]).startswith(PNG_MAGIC)

    def test_write_png(self, tmp_path: Path, weekday_spec: ChartSpec) -> None:
        target = SceneRasterizer(dpi=50).write_png(_scene(weekday_spec, 3), tmp_path / "line.png")
        assert target.read_bytes().startswith(PNG_MAGIC)

    def test_empty_donut(self, tmp_path: Path, empty_donut_spec: ChartSpec) -> None:
        target = SceneRasterizer(dpi=50).write_png(_scene(empty_donut_spec), tmp_path / "e.png")
        assert target.exists()
