"""Tests for hover state, hit regions and tooltip layout."""

from __future__ import annotations

from desk_charts.core.enums import ChartKind
from desk_charts.core.models import ChartSpec, Viewport
from desk_charts.layout.interaction import (
    HitRegion,
    InteractionModel,
    hit_regions,
    place_tooltip,
    tooltip_content,
)


class TestInteractionModel:
    def test_enter_and_leave(self) -> None:
        model = InteractionModel()
        assert model.pointer_enter(2) is True
        assert model.hovered_index == 2
        assert model.is_hovered(2)
        assert model.pointer_leave() is True
        assert model.hovered_index is None

    def test_repeat_enter_is_not_a_change(self) -> None:
        model = InteractionModel()
        model.pointer_enter(1)
        assert model.pointer_enter(1) is False

    def test_out_of_range_enter_ignored(self) -> None:
        model = InteractionModel()
        assert model.pointer_enter(7, category_count=7) is False
        assert model.pointer_enter(-1) is False
        assert model.hovered_index is None

    def test_stale_leave_is_noop(self) -> None:
        """Leaving a category that is no longer hovered keeps the current hover."""
        model = InteractionModel()
        model.pointer_enter(1)
        model.pointer_enter(2)
        assert model.pointer_leave(1) is False
        assert model.hovered_index == 2

    def test_listeners_notified_synchronously(self) -> None:
        model = InteractionModel()
        seen: list[int | None] = []
        unsubscribe = model.subscribe(seen.append)
        assert model.subscriber_count == 1
        model.pointer_enter(3)
        model.pointer_enter(3)
        model.reset()
        assert seen == [3, None]
        unsubscribe()
        assert model.subscriber_count == 0
        model.pointer_enter(1)
        assert seen == [3, None]

    def test_pointer_move_resolves_regions(self) -> None:
        model = InteractionModel()
        regions = [HitRegion(0, 0, 0, 10, 10), HitRegion(1, 10, 0, 10, 10)]
        assert model.pointer_move(10, 5, regions) is True
        assert model.hovered_index == 1
        model.pointer_move(50, 5, regions)
        assert model.hovered_index is None


def test_hit_regions_span_inner_height() -> None:
    vp = Viewport.for_kind(ChartKind.BAR, 500)
    regions = hit_regions([100, 200], 50, vp)
    assert regions[0].x == 75
    assert regions[0].width == 50
    assert regions[1].y == vp.padding.top
    assert regions[1].height == vp.inner_height


class TestPlaceTooltip:
    def test_right_of_anchor_on_left_half(self) -> None:
        p = place_tooltip(100, 50, (80, 40), 800, edge_flip=True)
        assert (p.x, p.y, p.flipped) == (112, 30, False)

    def test_flips_past_midpoint(self) -> None:
        p = place_tooltip(500, 50, (80, 40), 800, edge_flip=True)
        assert p.flipped is True
        assert p.x == 500 - 80 - 12

    def test_no_flip_centres_on_anchor(self) -> None:
        p = place_tooltip(700, 60, (80, 40), 800, edge_flip=False)
        assert (p.x, p.y, p.flipped) == (660, 60, False)


class TestTooltipContent:
    def test_stacked_rows_top_first_skipping_zeros(self, stacked_spec: ChartSpec) -> None:
        content = tooltip_content(stacked_spec, 1, ["#a", "#b", "#c"], "#d")
        assert content.title == "Tue"
        assert [r.label for r in content.rows] == ["Admin", "Meetings", "Target"]
        assert [r.value_text for r in content.rows] == ["1h", "1h", "6h"]
        assert content.rows[-1].swatch == "line"
        assert content.rows[-1].color == "#d"

    def test_line_area_rows_per_series(self, weekday_spec: ChartSpec) -> None:
        content = tooltip_content(weekday_spec, 3, ["#a"])
        assert content.title == "Thu"
        assert [(r.label, r.value_text) for r in content.rows] == [("Sessions", "8")]

    def test_donut_has_no_tooltip(self, donut_spec: ChartSpec) -> None:
        assert tooltip_content(donut_spec, 0, ["#a"] * 4) is None

    def test_size_grows_with_text(self, weekday_spec: ChartSpec) -> None:
        short = tooltip_content(weekday_spec, 0, ["#a"]).size()
        assert short[0] >= 80
        assert short[1] == 2 * 18 + 24
