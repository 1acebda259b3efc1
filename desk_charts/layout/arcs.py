"""Donut / pie wedge geometry in unit space.

Slices are laid out clockwise starting at 12 o'clock. Angles stored on each
slice are the raw cumulative fractions times 2*pi (first slice starts at 0);
the 12 o'clock rotation is applied only when converting angles to points.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..core.enums import TextAnchor
from ..core.logging_config import get_logger
from .curves import Point
from .paths import PathCommand
from .scale import format_value, round_half_up

logger = get_logger(__name__)

TAU = 2 * math.pi
START_ROTATION = -math.pi / 2
DONUT_HOLE_RADIUS = 0.65
HOVER_SCALE = 1.08
HOVER_BRIGHTNESS = 1.05
LABEL_MIN_FRACTION = 0.03
LEADER_INNER_RADIUS = 0.85
LEADER_ELBOW_RADIUS = 1.2
LEADER_RUN = 0.2
LEADER_TEXT_GAP = 0.05


@dataclass(frozen=True)
class LeaderLabel:
    points: tuple[Point, Point, Point]
    anchor: TextAnchor
    text_x: float
    value_y: float
    label_y: float
    value_text: str
    label_text: str


@dataclass(frozen=True)
class ArcSlice:
    index: int
    label: str
    value: float
    fraction: float
    start_angle: float
    end_angle: float
    large_arc: int
    commands: tuple[PathCommand, ...]
    centroid: Point
    leader: LeaderLabel | None = None


@dataclass(frozen=True)
class DonutLayout:
    total: float
    slices: tuple[ArcSlice, ...]
    hole_radius: float
    total_label: str
    radius: float = 1.0
    rotation: float = START_ROTATION

    @property
    def empty(self) -> bool:
        """True when every value is zero; nothing can be sliced or hovered."""
        return not self.slices

    def slice_at(self, x: float, y: float) -> int | None:
        """Index of the slice under a unit-space point, or None.

        The donut hole and everything outside the ring hit nothing.
        """
        distance = math.hypot(x, y)
        if not self.slices or distance < self.hole_radius or distance > self.radius:
            return None
        angle = (math.atan2(y, x) - self.rotation) % TAU
        for s in self.slices:
            if s.start_angle <= angle < s.end_angle:
                return s.index
        # Rounding can leave the last sliver just short of a full turn
        return self.slices[-1].index


class ArcSlicer:
    """Convert a value sequence into contiguous wedges around a unit circle."""

    def __init__(
        self,
        radius: float = 1.0,
        hole_radius: float = DONUT_HOLE_RADIUS,
        rotation: float = START_ROTATION,
        value_formatter: Callable[[float], str] | None = None,
    ):
        self.radius = radius
        self.hole_radius = hole_radius
        self.rotation = rotation
        self.value_formatter = value_formatter or (lambda v: format_value(v, thousands=True))

    def point_at(self, angle: float, radius: float | None = None) -> Point:
        r = self.radius if radius is None else radius
        theta = angle + self.rotation
        return (math.cos(theta) * r, math.sin(theta) * r)

    def slice(self, values: Sequence[float], labels: Sequence[str] | None = None) -> DonutLayout:
        total = float(sum(values))
        if total <= 0:
            logger.debug("Donut has no data", extra={"count": len(values)})
            return DonutLayout(
                total=0.0,
                slices=(),
                hole_radius=self.hole_radius,
                total_label=self.value_formatter(0),
                radius=self.radius,
                rotation=self.rotation,
            )

        slices: list[ArcSlice] = []
        cumulative = 0.0
        for i, value in enumerate(values):
            fraction = value / total
            start_angle = cumulative * TAU
            cumulative += fraction
            end_angle = cumulative * TAU
            label = labels[i] if labels is not None and i < len(labels) else f"Slice {i + 1}"
            slices.append(
                ArcSlice(
                    index=i,
                    label=label,
                    value=value,
                    fraction=fraction,
                    start_angle=start_angle,
                    end_angle=end_angle,
                    large_arc=1 if fraction > 0.5 else 0,
                    commands=tuple(self._wedge(start_angle, end_angle, fraction)),
                    centroid=self._centroid(start_angle, end_angle),
                    leader=self._leader(value, fraction, start_angle, end_angle, label),
                )
            )
        return DonutLayout(
            total=total,
            slices=tuple(slices),
            hole_radius=self.hole_radius,
            total_label=self.value_formatter(total),
            radius=self.radius,
            rotation=self.rotation,
        )

    def _wedge(self, start: float, end: float, fraction: float) -> list[PathCommand]:
        r = self.radius
        sx, sy = self.point_at(start)
        ex, ey = self.point_at(end)
        commands: list[PathCommand] = [("M", 0.0, 0.0), ("L", sx, sy)]
        if math.isclose(fraction, 1.0):
            # Coincident arc endpoints draw nothing, so a full ring is two halves
            mx, my = self.point_at((start + end) / 2)
            commands.append(("A", r, r, 0, 0, 1, mx, my))
            commands.append(("A", r, r, 0, 0, 1, ex, ey))
        else:
            commands.append(("A", r, r, 0, 1 if fraction > 0.5 else 0, 1, ex, ey))
        commands.extend([("L", 0.0, 0.0), ("Z",)])
        return commands

    def _centroid(self, start: float, end: float) -> Point:
        sweep = end - start
        if sweep <= 0:
            distance = 2 * self.radius / 3
        else:
            distance = 4 * self.radius * math.sin(sweep / 2) / (3 * sweep)
        return self.point_at((start + end) / 2, radius=distance)

    def _leader(
        self, value: float, fraction: float, start: float, end: float, label: str
    ) -> LeaderLabel | None:
        if fraction < LABEL_MIN_FRACTION:
            return None
        mid = (start + end) / 2
        x1, y1 = self.point_at(mid, radius=LEADER_INNER_RADIUS)
        x2, y2 = self.point_at(mid, radius=LEADER_ELBOW_RADIUS)
        right_side = math.cos(mid + self.rotation) >= 0
        x3 = x2 + (LEADER_RUN if right_side else -LEADER_RUN)
        anchor = TextAnchor.START if right_side else TextAnchor.END
        pct = int(round_half_up(fraction * 100))
        return LeaderLabel(
            points=((x1, y1), (x2, y2), (x3, y2)),
            anchor=anchor,
            text_x=x3 + (LEADER_TEXT_GAP if right_side else -LEADER_TEXT_GAP),
            value_y=y2 - 0.05,
            label_y=y2 + 0.08,
            value_text=f"{self.value_formatter(value)} ({pct}%)",
            label_text=label,
        )
