"""Hover state, category hit regions and tooltip layout.

One ``InteractionModel`` may be shared by several views (e.g. a stacked bar
surface and its overlay line) so that they all track a single hovered
category index. Listeners are called synchronously whenever the index
changes.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..core.enums import ChartKind
from ..core.logging_config import get_logger
from ..core.models import ChartSpec, Viewport
from .scale import format_value

logger = get_logger(__name__)

TOOLTIP_OFFSET = 12.0
STACKED_TOOLTIP_TOP_OFFSET = 20.0
TOOLTIP_CHAR_WIDTH = 6.5
TOOLTIP_LINE_HEIGHT = 18.0
TOOLTIP_PADDING = 12.0
TOOLTIP_MIN_WIDTH = 80.0

HoverListener = Callable[[int | None], None]


@dataclass
class HoverState:
    hovered_index: int | None = None


@dataclass(frozen=True)
class HitRegion:
    index: int
    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        # Half-open on the right so neighbouring regions never both match
        return self.x <= px < self.x + self.width and self.y <= py <= self.y + self.height


def hit_regions(centers: Sequence[float], slot_width: float, viewport: Viewport) -> list[HitRegion]:
    """One invisible full-height region per category, centred on its x."""
    return [
        HitRegion(
            index=i,
            x=cx - slot_width / 2,
            y=viewport.padding.top,
            width=slot_width,
            height=viewport.inner_height,
        )
        for i, cx in enumerate(centers)
    ]


@dataclass(frozen=True)
class TooltipRow:
    label: str
    value_text: str
    color: str
    swatch: str = "dot"  # "dot" | "line"


@dataclass(frozen=True)
class TooltipContent:
    title: str
    rows: tuple[TooltipRow, ...]

    def size(self) -> tuple[float, float]:
        """Estimated pixel (width, height) for placement decisions."""
        lines = [self.title] + [f"{r.label}: {r.value_text}" for r in self.rows]
        longest = max(len(line) for line in lines)
        width = max(TOOLTIP_MIN_WIDTH, longest * TOOLTIP_CHAR_WIDTH + 2 * TOOLTIP_PADDING)
        height = len(lines) * TOOLTIP_LINE_HEIGHT + 2 * TOOLTIP_PADDING
        return width, height


@dataclass(frozen=True)
class TooltipPlacement:
    x: float
    y: float
    width: float
    height: float
    flipped: bool = False


def place_tooltip(
    anchor_x: float,
    anchor_y: float,
    size: tuple[float, float],
    chart_width: float,
    *,
    edge_flip: bool,
    offset: float = TOOLTIP_OFFSET,
) -> TooltipPlacement:
    """Place a tooltip box next to an anchor point.

    With ``edge_flip`` the box sits to the right of the anchor, and moves to
    its left once the anchor passes the horizontal midpoint of the chart.
    Without it the box is centred horizontally on the anchor with its top
    edge at ``anchor_y``.
    """
    width, height = size
    if not edge_flip:
        return TooltipPlacement(x=anchor_x - width / 2, y=anchor_y, width=width, height=height)
    flipped = anchor_x > chart_width / 2
    x = anchor_x - width - offset if flipped else anchor_x + offset
    return TooltipPlacement(
        x=x, y=anchor_y - height / 2, width=width, height=height, flipped=flipped
    )


def tooltip_content(
    spec: ChartSpec,
    index: int,
    colors: Sequence[str],
    line_color: str | None = None,
) -> TooltipContent | None:
    """Tooltip rows for a hovered category; donuts have none."""
    if spec.kind is ChartKind.DONUT:
        return None
    unit = spec.unit
    title = spec.categories[index]
    if spec.kind is ChartKind.STACKED_COMBO:
        rows: list[TooltipRow] = []
        # Top of the stack first
        for s_idx in reversed(range(len(spec.series))):
            value = spec.series[s_idx].values[index]
            if value == 0:
                continue
            rows.append(
                TooltipRow(
                    label=spec.series[s_idx].label,
                    value_text=f"{format_value(value)}{unit}",
                    color=colors[s_idx],
                )
            )
        if spec.line is not None:
            rows.append(
                TooltipRow(
                    label=spec.line.label,
                    value_text=f"{format_value(spec.line.values[index])}{unit}",
                    color=line_color or colors[-1],
                    swatch="line",
                )
            )
        return TooltipContent(title=title, rows=tuple(rows))
    return TooltipContent(
        title=title,
        rows=tuple(
            TooltipRow(
                label=s.label,
                value_text=f"{format_value(s.values[index])}{unit}",
                color=colors[i],
            )
            for i, s in enumerate(spec.series)
        ),
    )


class InteractionModel:
    """Owns the hovered category index for one or more linked views."""

    def __init__(self) -> None:
        self._state = HoverState()
        self._listeners: list[HoverListener] = []

    @property
    def hovered_index(self) -> int | None:
        return self._state.hovered_index

    def is_hovered(self, index: int) -> bool:
        return self._state.hovered_index == index

    def subscribe(self, listener: HoverListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    def pointer_enter(self, index: int, category_count: int | None = None) -> bool:
        """Hover a category. Returns True when the hovered index changed."""
        if index < 0 or (category_count is not None and index >= category_count):
            logger.debug(
                "Ignoring hover outside the category axis",
                extra={"index": index, "category_count": category_count},
            )
            return False
        return self._set(index)

    def pointer_leave(self, index: int | None = None) -> bool:
        """Clear hover; a leave for a category that is not hovered is a no-op."""
        if index is not None and index != self._state.hovered_index:
            return False
        return self._set(None)

    def pointer_move(self, x: float, y: float, regions: Sequence[HitRegion]) -> bool:
        """Resolve a raw pointer position against hit regions."""
        for region in regions:
            if region.contains(x, y):
                return self._set(region.index)
        return self._set(None)

    def reset(self) -> None:
        self._set(None)

    def _set(self, index: int | None) -> bool:
        if index == self._state.hovered_index:
            return False
        self._state.hovered_index = index
        for listener in list(self._listeners):
            listener(index)
        return True
