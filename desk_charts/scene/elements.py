"""Scene description produced by a render pass.

A scene is a flat, ordered list of drawing primitives (painter's order)
plus the interaction metadata a host needs: hit regions, the hovered index,
tooltip box and legend entries. It carries no behaviour beyond lookups and
is safe to compare for equality across render passes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from ..core.enums import ChartKind, TextAnchor, TextWeight
from ..layout.interaction import HitRegion, TooltipContent, TooltipPlacement
from ..layout.legend import LegendEntry
from ..layout.paths import PathCommand, format_path


@dataclass(frozen=True)
class ScaleAbout:
    """Uniform scale by ``factor`` around the point (cx, cy)."""

    cx: float
    cy: float
    factor: float


@dataclass(frozen=True)
class PathElement:
    tag: ClassVar[str] = "path"

    commands: tuple[PathCommand, ...]
    fill: str = "none"
    stroke: str | None = None
    stroke_width: float = 0.0
    opacity: float = 1.0
    fill_opacity: float = 1.0
    transform: ScaleAbout | None = None
    brightness: float = 1.0
    role: str = ""
    index: int | None = None

    @property
    def d(self) -> str:
        return format_path(list(self.commands))


@dataclass(frozen=True)
class RectElement:
    tag: ClassVar[str] = "rect"

    x: float
    y: float
    width: float
    height: float
    fill: str
    opacity: float = 1.0
    rx: float = 0.0
    role: str = ""
    index: int | None = None


@dataclass(frozen=True)
class CircleElement:
    tag: ClassVar[str] = "circle"

    cx: float
    cy: float
    r: float
    fill: str
    stroke: str | None = None
    stroke_width: float = 0.0
    opacity: float = 1.0
    role: str = ""
    index: int | None = None


@dataclass(frozen=True)
class LineElement:
    tag: ClassVar[str] = "line"

    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float = 1.0
    dash: tuple[float, ...] | None = None
    opacity: float = 1.0
    role: str = ""
    index: int | None = None


@dataclass(frozen=True)
class PolylineElement:
    tag: ClassVar[str] = "polyline"

    points: tuple[tuple[float, float], ...]
    stroke: str
    stroke_width: float = 1.0
    opacity: float = 1.0
    role: str = ""
    index: int | None = None


@dataclass(frozen=True)
class TextElement:
    tag: ClassVar[str] = "text"

    x: float
    y: float
    text: str
    anchor: TextAnchor = TextAnchor.MIDDLE
    size: float = 11.0
    weight: TextWeight = TextWeight.MEDIUM
    fill: str = "#64748B"
    opacity: float = 1.0
    role: str = ""
    index: int | None = None


Element = Union[
    PathElement, RectElement, CircleElement, LineElement, PolylineElement, TextElement
]


@dataclass(frozen=True)
class TooltipBox:
    content: TooltipContent
    placement: TooltipPlacement


@dataclass(frozen=True)
class Scene:
    kind: ChartKind
    width: float
    height: float
    view_box: tuple[float, float, float, float]
    elements: tuple[Element, ...]
    hit_regions: tuple[HitRegion, ...] = ()
    legend: tuple[LegendEntry, ...] = ()
    hovered_index: int | None = None
    tooltip: TooltipBox | None = None
    title: str | None = None
    subtitle: str | None = None
    empty_message: str | None = None

    @property
    def empty(self) -> bool:
        return self.empty_message is not None

    def by_role(self, role: str) -> list[Element]:
        return [el for el in self.elements if el.role == role]
