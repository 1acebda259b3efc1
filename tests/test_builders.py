"""Tests for per-kind scene builders."""

from __future__ import annotations

import pytest

from desk_charts.core.enums import ChartKind, TextWeight
from desk_charts.core.errors import SpecValidationError, UnsupportedChartKindError
from desk_charts.core.models import ChartSpec, Series, Viewport
from desk_charts.scene.builders import (
    BarBuilder,
    DonutBuilder,
    LineAreaBuilder,
    StackedComboBuilder,
    get_builder,
)


def _vp(kind: ChartKind, width: float | None = None) -> Viewport:
    return Viewport.for_kind(kind, width)


class TestDispatch:
    @pytest.mark.parametrize(
        "kind, cls",
        [
            (ChartKind.LINE_AREA, LineAreaBuilder),
            (ChartKind.BAR, BarBuilder),
            (ChartKind.STACKED_COMBO, StackedComboBuilder),
            (ChartKind.DONUT, DonutBuilder),
        ],
    )
    def test_get_builder(self, kind: ChartKind, cls: type) -> None:
        assert isinstance(get_builder(kind), cls)
        assert isinstance(get_builder(kind.value), cls)

    def test_unknown_kind(self) -> None:
        with pytest.raises(UnsupportedChartKindError):
            get_builder("radar")

    def test_kind_mismatch(self, bar_spec: ChartSpec) -> None:
        with pytest.raises(SpecValidationError):
            LineAreaBuilder().build(bar_spec, _vp(ChartKind.LINE_AREA))


class TestLineAreaBuilder:
    def test_idempotent(self, weekday_spec: ChartSpec) -> None:
        """Same spec and viewport always yield the same scene."""
        builder = LineAreaBuilder()
        vp = _vp(ChartKind.LINE_AREA, 800)
        assert builder.build(weekday_spec, vp, 3) == builder.build(weekday_spec, vp, 3)

    def test_marks(self, weekday_spec: ChartSpec) -> None:
        scene = LineAreaBuilder().build(weekday_spec, _vp(ChartKind.LINE_AREA))
        assert len(scene.by_role("line")) == 1
        assert len(scene.by_role("area")) == 1
        assert len(scene.by_role("marker")) == 7
        assert len(scene.by_role("gridline")) == 5
        assert [t.text for t in scene.by_role("category-label")] == list(weekday_spec.categories)
        assert scene.tooltip is None
        assert scene.by_role("hover-guide") == []

    def test_hover_adds_guide_and_tooltip(self, weekday_spec: ChartSpec) -> None:
        scene = LineAreaBuilder().build(weekday_spec, _vp(ChartKind.LINE_AREA, 800), 1)
        guide = scene.by_role("hover-guide")[0]
        assert guide.x1 == pytest.approx(60 + 700 / 6)
        assert guide.dash == (4, 4)
        assert scene.by_role("category-label")[1].weight is TextWeight.BOLD
        assert scene.tooltip.placement.flipped is False

    def test_tooltip_flips_on_right_half(self, weekday_spec: ChartSpec) -> None:
        scene = LineAreaBuilder().build(weekday_spec, _vp(ChartKind.LINE_AREA, 800), 6)
        placement = scene.tooltip.placement
        assert placement.flipped is True
        assert placement.x + placement.width < 760

    def test_stale_hover_dropped(self, weekday_spec: ChartSpec) -> None:
        scene = LineAreaBuilder().build(weekday_spec, _vp(ChartKind.LINE_AREA), 40)
        assert scene.hovered_index is None

    def test_single_category(self) -> None:
        spec = ChartSpec(
            kind=ChartKind.LINE_AREA, categories=("only",), series=(Series("s", (4,)),)
        )
        scene = LineAreaBuilder().build(spec, _vp(ChartKind.LINE_AREA, 800))
        assert scene.by_role("marker")[0].cx == pytest.approx(410)


class TestBarBuilder:
    def test_hover_emphasis(self, bar_spec: ChartSpec) -> None:
        scene = BarBuilder().build(bar_spec, _vp(ChartKind.BAR), 1)
        bars = scene.by_role("bar")
        assert [b.opacity for b in bars] == [0.85, 1.0, 0.85]
        labels = scene.by_role("value-label")
        assert [t.text for t in labels] == ["18"]
        assert scene.tooltip is None

    def test_no_value_label_without_hover(self, bar_spec: ChartSpec) -> None:
        scene = BarBuilder().build(bar_spec, _vp(ChartKind.BAR))
        assert scene.by_role("value-label") == []
        assert len(scene.hit_regions) == 3


class TestStackedComboBuilder:
    def test_hover_dims_other_columns(self, stacked_spec: ChartSpec) -> None:
        scene = StackedComboBuilder().build(stacked_spec, _vp(ChartKind.STACKED_COMBO), 0)
        for seg in scene.by_role("segment"):
            assert seg.opacity == (1.0 if seg.index == 0 else 0.6)
        assert [t.text for t in scene.by_role("total-label")] == ["8"]
        assert [t.text for t in scene.by_role("overlay-label")] == ["8"]

    def test_tooltip_fixed_at_top_without_flip(self, stacked_spec: ChartSpec) -> None:
        vp = _vp(ChartKind.STACKED_COMBO, 500)
        scene = StackedComboBuilder().build(stacked_spec, vp, 2)
        placement = scene.tooltip.placement
        assert placement.flipped is False
        assert placement.y == vp.padding.top + 20
        assert placement.x + placement.width / 2 == pytest.approx(50 + 420 * 5 / 6)

    def test_overlay_line(self, stacked_spec: ChartSpec) -> None:
        scene = StackedComboBuilder().build(stacked_spec, _vp(ChartKind.STACKED_COMBO))
        (line,) = scene.by_role("overlay-line")
        assert len(line.points) == 3
        assert len(scene.by_role("overlay-marker")) == 3
        assert [e.label for e in scene.legend][-1] == "Target"


class TestDonutBuilder:
    def test_slices_and_center_label(self, donut_spec: ChartSpec) -> None:
        scene = DonutBuilder().build(donut_spec, _vp(ChartKind.DONUT))
        assert scene.view_box == (-2.5, -1.5, 5.0, 3.0)
        assert len(scene.by_role("slice")) == 4
        assert scene.by_role("total")[0].text == "100"
        assert scene.by_role("total-caption")[0].text == "TOTAL"
        assert scene.by_role("donut-hole")[0].r == 0.65
        assert len(scene.by_role("leader")) == 4

    def test_hovered_slice_scaled_about_centroid(self, donut_spec: ChartSpec) -> None:
        scene = DonutBuilder().build(donut_spec, _vp(ChartKind.DONUT), 2)
        slices = scene.by_role("slice")
        hovered = slices[2]
        assert hovered.transform.factor == 1.08
        assert hovered.brightness == 1.05
        assert [s.opacity for s in slices] == [0.4, 0.4, 1.0, 0.4]
        leader_values = scene.by_role("leader-value")
        assert [t.opacity for t in leader_values] == [0.2, 0.2, 1.0, 0.2]
        assert scene.tooltip is None

    def test_empty_state(self, empty_donut_spec: ChartSpec) -> None:
        scene = DonutBuilder().build(empty_donut_spec, _vp(ChartKind.DONUT))
        assert scene.empty
        assert scene.empty_message == "No data available"
        assert scene.by_role("slice") == []

    def test_single_series_only(self) -> None:
        spec = ChartSpec(
            kind=ChartKind.DONUT,
            categories=("a",),
            series=(Series("x", (1,)), Series("y", (2,))),
        )
        with pytest.raises(SpecValidationError):
            DonutBuilder().build(spec, _vp(ChartKind.DONUT))
