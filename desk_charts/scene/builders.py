"""Per-kind layout strategies turning a ChartSpec into a Scene.

Every builder shares the same ScaleEngine, gridline, hit region and tooltip
machinery; only the data marks differ. ``get_builder`` dispatches on
``ChartKind``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.enums import ChartKind, TextAnchor, TextWeight
from ..core.errors import SpecValidationError, UnsupportedChartKindError
from ..core.logging_config import get_logger
from ..core.models import KIND_PROFILES, ChartSpec, KindProfile, Viewport
from ..core.theme import Theme
from ..layout.arcs import HOVER_BRIGHTNESS, HOVER_SCALE, ArcSlicer, DonutLayout
from ..layout.curves import CurveSmoother
from ..layout.interaction import (
    STACKED_TOOLTIP_TOP_OFFSET,
    HitRegion,
    hit_regions,
    place_tooltip,
    tooltip_content,
)
from ..layout.legend import LegendRenderer
from ..layout.scale import ScaleEngine, domain_max, format_value
from ..layout.stacking import StackLayout
from .elements import (
    CircleElement,
    Element,
    LineElement,
    PathElement,
    PolylineElement,
    RectElement,
    ScaleAbout,
    Scene,
    TextElement,
    TooltipBox,
)

logger = get_logger(__name__)

DONUT_VIEW_BOX = (-2.5, -1.5, 5.0, 3.0)
NO_DATA_MESSAGE = "No data available"


class BaseChartBuilder(ABC):
    """Shared scaffolding for the category-axis chart kinds."""

    kind: ChartKind

    def __init__(self, theme: Theme | None = None):
        self.theme = theme or Theme()
        self.legend = LegendRenderer(self.theme)

    @property
    def profile(self) -> KindProfile:
        return KIND_PROFILES[self.kind]

    def _stack(self) -> StackLayout:
        return StackLayout(
            headroom=self.profile.headroom, max_bar_width=self.profile.max_bar_width
        )

    def scale_for(self, spec: ChartSpec, viewport: Viewport) -> ScaleEngine | None:
        """Value/category scale for this kind; None where the kind has no axes."""
        return None

    @abstractmethod
    def build(
        self, spec: ChartSpec, viewport: Viewport, hovered_index: int | None = None
    ) -> Scene:
        """Lay out one render pass.

        Args:
            spec: Chart data; its kind must match the builder's kind
            viewport: Pixel box for this pass
            hovered_index: Category (or slice) under the pointer, if any

        Returns:
            Scene with elements in painter's order
        """
        pass

    def _check(self, spec: ChartSpec, hovered_index: int | None) -> int | None:
        if spec.kind is not self.kind:
            raise SpecValidationError(
                f"{self.__class__.__name__} cannot build a {spec.kind.value} chart"
            )
        if hovered_index is not None and not 0 <= hovered_index < spec.category_count:
            logger.debug("Dropping stale hover index", extra={"index": hovered_index})
            return None
        return hovered_index

    def _frame(self, viewport: Viewport) -> list[Element]:
        return [
            RectElement(
                x=viewport.padding.left,
                y=viewport.padding.top,
                width=viewport.inner_width,
                height=viewport.inner_height,
                fill=self.theme.plot_background,
                rx=8,
                role="background",
            )
        ]

    def _grid(self, scale: ScaleEngine, dash: tuple[float, ...], label_gap: float) -> list[Element]:
        out: list[Element] = []
        for g in scale.gridlines():
            out.append(
                LineElement(
                    x1=g.x1,
                    y1=g.y,
                    x2=g.x2,
                    y2=g.y,
                    stroke=self.theme.grid_color,
                    dash=dash,
                    opacity=0.5,
                    role="gridline",
                )
            )
            out.append(
                TextElement(
                    x=g.x1 - label_gap,
                    y=g.y + 4,
                    text=g.label,
                    anchor=TextAnchor.END,
                    size=11,
                    fill=self.theme.axis_text,
                    role="grid-label",
                )
            )
        return out

    def _category_label(
        self, x: float, y: float, text: str, index: int, hovered_index: int | None, size: float
    ) -> TextElement:
        hovered = hovered_index == index
        return TextElement(
            x=x,
            y=y,
            text=text,
            size=size,
            weight=TextWeight.BOLD if hovered else TextWeight.MEDIUM,
            fill=self.theme.emphasis_text if hovered else self.theme.axis_text,
            role="category-label",
            index=index,
        )

    def _scene(
        self,
        spec: ChartSpec,
        viewport: Viewport,
        elements: list[Element],
        regions: list[HitRegion],
        hovered_index: int | None,
        anchor: tuple[float, float] | None,
        line_color: str | None = None,
    ) -> Scene:
        tooltip = None
        if hovered_index is not None and anchor is not None:
            content = tooltip_content(
                spec, hovered_index, self.legend.series_colors(spec), line_color
            )
            if content is not None:
                placement = place_tooltip(
                    anchor[0],
                    anchor[1],
                    content.size(),
                    viewport.width,
                    edge_flip=self.profile.tooltip_edge_flip,
                )
                tooltip = TooltipBox(content=content, placement=placement)
        return Scene(
            kind=spec.kind,
            width=viewport.width,
            height=viewport.height,
            view_box=(0.0, 0.0, viewport.width, viewport.height),
            elements=tuple(elements),
            hit_regions=tuple(regions),
            legend=tuple(self.legend.entries(spec, hovered_index)),
            hovered_index=hovered_index,
            tooltip=tooltip,
            title=spec.title,
            subtitle=spec.subtitle,
        )


class LineAreaBuilder(BaseChartBuilder):
    kind = ChartKind.LINE_AREA

    def __init__(self, theme: Theme | None = None, smoother: CurveSmoother | None = None):
        super().__init__(theme)
        self.smoother = smoother or CurveSmoother()

    def scale_for(self, spec: ChartSpec, viewport: Viewport) -> ScaleEngine:
        return ScaleEngine(
            viewport=viewport,
            category_count=spec.category_count,
            domain_max=domain_max([s.values for s in spec.series], self.profile.headroom),
        )

    def build(
        self, spec: ChartSpec, viewport: Viewport, hovered_index: int | None = None
    ) -> Scene:
        hovered_index = self._check(spec, hovered_index)
        scale = self.scale_for(spec, viewport)
        colors = self.legend.series_colors(spec)
        points = [
            [(scale.x(i), scale.y(v)) for i, v in enumerate(s.values)] for s in spec.series
        ]

        elements = self._frame(viewport) + self._grid(scale, dash=(6, 4), label_gap=15)
        # Later series are painted first so the primary series stays on top
        order = list(reversed(range(len(spec.series))))
        for s_idx in order:
            elements.append(
                PathElement(
                    commands=tuple(self.smoother.area(points[s_idx], viewport.baseline)),
                    fill=colors[s_idx],
                    fill_opacity=0.15,
                    role="area",
                    index=s_idx,
                )
            )
        for s_idx in order:
            elements.append(
                PathElement(
                    commands=tuple(self.smoother.line(points[s_idx])),
                    stroke=colors[s_idx],
                    stroke_width=3.5,
                    role="line",
                    index=s_idx,
                )
            )
        for i in range(spec.category_count):
            hovered = hovered_index == i
            for s_idx, pts in enumerate(points):
                elements.append(
                    CircleElement(
                        cx=pts[i][0],
                        cy=pts[i][1],
                        r=6 if hovered else 4,
                        fill="#FFFFFF",
                        stroke=colors[s_idx],
                        stroke_width=3 if hovered else 2.5,
                        role="marker",
                        index=i,
                    )
                )
        if hovered_index is not None:
            x = scale.x(hovered_index)
            elements.append(
                LineElement(
                    x1=x,
                    y1=viewport.padding.top,
                    x2=x,
                    y2=viewport.baseline,
                    stroke="#94A3B8",
                    dash=(4, 4),
                    role="hover-guide",
                    index=hovered_index,
                )
            )
            for s_idx, pts in enumerate(points):
                elements.append(
                    CircleElement(
                        cx=pts[hovered_index][0],
                        cy=pts[hovered_index][1],
                        r=6,
                        fill=colors[s_idx],
                        stroke="#FFFFFF",
                        stroke_width=2,
                        role="hover-marker",
                        index=hovered_index,
                    )
                )
        for i, label in enumerate(spec.categories):
            elements.append(
                self._category_label(
                    scale.x(i), viewport.height - 10, label, i, hovered_index, size=12
                )
            )

        centers = [scale.x(i) for i in range(spec.category_count)]
        regions = hit_regions(centers, scale.slot_width, viewport)
        anchor = points[0][hovered_index] if hovered_index is not None else None
        return self._scene(spec, viewport, elements, regions, hovered_index, anchor)


class BarBuilder(BaseChartBuilder):
    kind = ChartKind.BAR

    def scale_for(self, spec: ChartSpec, viewport: Viewport) -> ScaleEngine:
        return self._stack().bars(spec, viewport).scale

    def build(
        self, spec: ChartSpec, viewport: Viewport, hovered_index: int | None = None
    ) -> Scene:
        hovered_index = self._check(spec, hovered_index)
        layout = self._stack().bars(spec, viewport)
        scale = layout.scale
        color = self.legend.series_colors(spec)[0]

        elements = self._frame(viewport) + self._grid(scale, dash=(5, 5), label_gap=12)
        for bar in layout.bars:
            hovered = hovered_index == bar.index
            elements.append(
                RectElement(
                    x=bar.x,
                    y=bar.y,
                    width=bar.width,
                    height=bar.height,
                    fill=color,
                    opacity=1.0 if hovered else 0.85,
                    rx=6,
                    role="bar",
                    index=bar.index,
                )
            )
            if hovered:
                elements.append(
                    TextElement(
                        x=bar.center_x,
                        y=bar.y - 10,
                        text=bar.value_label,
                        size=12,
                        weight=TextWeight.BOLD,
                        fill=self.theme.emphasis_text,
                        role="value-label",
                        index=bar.index,
                    )
                )
            elements.append(
                self._category_label(
                    bar.center_x, viewport.height - 10, bar.label, bar.index, hovered_index, size=10
                )
            )

        centers = [bar.center_x for bar in layout.bars]
        regions = hit_regions(centers, scale.slot_width, viewport)
        # The hovered value label above the bar stands in for a tooltip
        return self._scene(spec, viewport, elements, regions, hovered_index, None)


class StackedComboBuilder(BaseChartBuilder):
    kind = ChartKind.STACKED_COMBO

    def scale_for(self, spec: ChartSpec, viewport: Viewport) -> ScaleEngine:
        return self._stack().scale_for(spec, viewport)

    def build(
        self, spec: ChartSpec, viewport: Viewport, hovered_index: int | None = None
    ) -> Scene:
        hovered_index = self._check(spec, hovered_index)
        layout = self._stack().layout(spec, viewport)
        scale = layout.scale
        colors = self.legend.series_colors(spec)
        line_color = self.legend.line_color(spec)

        elements = self._frame(viewport) + self._grid(scale, dash=(5, 5), label_gap=12)
        for column in layout.columns:
            hovered = hovered_index == column.index
            dimmed = hovered_index is not None and not hovered
            for seg in column.segments:
                elements.append(
                    RectElement(
                        x=seg.x,
                        y=seg.y,
                        width=seg.width,
                        height=seg.height,
                        fill=colors[seg.series_index],
                        opacity=0.6 if dimmed else 1.0,
                        rx=4,
                        role="segment",
                        index=column.index,
                    )
                )
            elements.append(
                self._category_label(
                    column.center_x, viewport.height - 25, column.label, column.index,
                    hovered_index, size=11,
                )
            )
            if hovered:
                elements.append(
                    TextElement(
                        x=column.center_x,
                        y=column.top - 10,
                        text=column.total_label,
                        size=11,
                        weight=TextWeight.BOLD,
                        fill=self.theme.emphasis_text,
                        role="total-label",
                        index=column.index,
                    )
                )

        if layout.overlay and line_color is not None:
            elements.append(
                PolylineElement(
                    points=tuple((p.x, p.y) for p in layout.overlay),
                    stroke=line_color,
                    stroke_width=3,
                    opacity=0.8,
                    role="overlay-line",
                )
            )
            for p in layout.overlay:
                elements.append(
                    CircleElement(
                        cx=p.x,
                        cy=p.y,
                        r=4,
                        fill="#FFFFFF",
                        stroke=line_color,
                        stroke_width=2,
                        role="overlay-marker",
                        index=p.index,
                    )
                )
                if hovered_index == p.index:
                    elements.append(
                        TextElement(
                            x=p.x,
                            y=p.y - 10,
                            text=format_value(p.value),
                            size=10,
                            weight=TextWeight.BOLD,
                            fill=self.theme.emphasis_text,
                            role="overlay-label",
                            index=p.index,
                        )
                    )

        centers = [c.center_x for c in layout.columns]
        regions = hit_regions(centers, scale.slot_width, viewport)
        anchor = None
        if hovered_index is not None:
            anchor = (
                scale.band_center(hovered_index),
                viewport.padding.top + STACKED_TOOLTIP_TOP_OFFSET,
            )
        return self._scene(
            spec, viewport, elements, regions, hovered_index, anchor, line_color=line_color
        )


class DonutBuilder(BaseChartBuilder):
    kind = ChartKind.DONUT

    def __init__(self, theme: Theme | None = None, slicer: ArcSlicer | None = None):
        super().__init__(theme)
        self.slicer = slicer or ArcSlicer()

    def slices_for(self, spec: ChartSpec) -> DonutLayout:
        if len(spec.series) != 1:
            raise SpecValidationError(
                f"Donut charts take exactly one series, got {len(spec.series)}"
            )
        return self.slicer.slice(spec.series[0].values, spec.categories)

    def build(
        self, spec: ChartSpec, viewport: Viewport, hovered_index: int | None = None
    ) -> Scene:
        hovered_index = self._check(spec, hovered_index)
        donut = self.slices_for(spec)
        if donut.empty:
            return Scene(
                kind=spec.kind,
                width=viewport.width,
                height=viewport.height,
                view_box=DONUT_VIEW_BOX,
                elements=(
                    CircleElement(
                        cx=0,
                        cy=0,
                        r=0.8,
                        fill="none",
                        stroke="#F1F5F9",
                        stroke_width=0.08,
                        role="empty-ring",
                    ),
                    TextElement(
                        x=0,
                        y=1.2,
                        text=NO_DATA_MESSAGE,
                        size=0.14,
                        fill="#94A3B8",
                        role="empty-label",
                    ),
                ),
                legend=tuple(self.legend.entries(spec)),
                title=spec.title,
                subtitle=spec.subtitle,
                empty_message=NO_DATA_MESSAGE,
            )

        colors = self.legend.series_colors(spec)
        elements: list[Element] = []
        for s in donut.slices:
            hovered = hovered_index == s.index
            dimmed = hovered_index is not None and not hovered
            elements.append(
                PathElement(
                    commands=s.commands,
                    fill=colors[s.index],
                    stroke="#FFFFFF",
                    stroke_width=0.02,
                    opacity=0.4 if dimmed else 1.0,
                    transform=ScaleAbout(*s.centroid, HOVER_SCALE) if hovered else None,
                    brightness=HOVER_BRIGHTNESS if hovered else 1.0,
                    role="slice",
                    index=s.index,
                )
            )
        elements.append(
            CircleElement(cx=0, cy=0, r=donut.hole_radius, fill="#FFFFFF", role="donut-hole")
        )
        for s in donut.slices:
            if s.leader is None:
                continue
            leader = s.leader
            opacity = 0.2 if hovered_index is not None and hovered_index != s.index else 1.0
            elements.extend(
                [
                    PolylineElement(
                        points=leader.points,
                        stroke=colors[s.index],
                        stroke_width=0.005,
                        opacity=opacity,
                        role="leader",
                        index=s.index,
                    ),
                    CircleElement(
                        cx=leader.points[0][0],
                        cy=leader.points[0][1],
                        r=0.02,
                        fill=colors[s.index],
                        opacity=opacity,
                        role="leader-dot",
                        index=s.index,
                    ),
                    TextElement(
                        x=leader.text_x,
                        y=leader.value_y,
                        text=leader.value_text,
                        anchor=leader.anchor,
                        size=0.12,
                        weight=TextWeight.BOLD,
                        fill="#334155",
                        opacity=opacity,
                        role="leader-value",
                        index=s.index,
                    ),
                    TextElement(
                        x=leader.text_x,
                        y=leader.label_y,
                        text=leader.label_text,
                        anchor=leader.anchor,
                        size=0.1,
                        fill=self.theme.axis_text,
                        opacity=opacity,
                        role="leader-label",
                        index=s.index,
                    ),
                ]
            )
        elements.extend(
            [
                TextElement(
                    x=0,
                    y=-0.05,
                    text=donut.total_label,
                    size=0.25,
                    weight=TextWeight.BOLD,
                    fill=self.theme.emphasis_text,
                    role="total",
                ),
                TextElement(
                    x=0, y=0.15, text="TOTAL", size=0.1, fill="#94A3B8", role="total-caption"
                ),
            ]
        )
        return Scene(
            kind=spec.kind,
            width=viewport.width,
            height=viewport.height,
            view_box=DONUT_VIEW_BOX,
            elements=tuple(elements),
            legend=tuple(self.legend.entries(spec, hovered_index)),
            hovered_index=hovered_index,
            title=spec.title,
            subtitle=spec.subtitle,
        )


BUILDERS: dict[ChartKind, type[BaseChartBuilder]] = {
    ChartKind.LINE_AREA: LineAreaBuilder,
    ChartKind.BAR: BarBuilder,
    ChartKind.STACKED_COMBO: StackedComboBuilder,
    ChartKind.DONUT: DonutBuilder,
}


def get_builder(kind: ChartKind | str, theme: Theme | None = None) -> BaseChartBuilder:
    try:
        builder_cls = BUILDERS[ChartKind(kind)]
    except (KeyError, ValueError) as e:
        raise UnsupportedChartKindError(f"No chart builder for kind: {kind!r}") from e
    return builder_cls(theme)
