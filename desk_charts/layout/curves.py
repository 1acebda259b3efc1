"""Smooth cubic-bezier curves through an ordered point sequence.

Control points follow a Catmull-Rom style tangent: at each point the
tangent runs parallel to the chord from its previous to its next neighbour
(a missing neighbour at either end is replaced by the point itself), and
the control arm is ``smoothing`` times that chord's length. Each segment
uses the forward arm of its start point and the reversed arm of its end
point, so collinear input yields control points on the same line.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from .paths import PathCommand

Point = tuple[float, float]

SMOOTHING = 0.2


def control_point(
    current: Point,
    previous: Point | None,
    following: Point | None,
    *,
    reverse: bool = False,
    smoothing: float = SMOOTHING,
) -> Point:
    p = previous or current
    n = following or current
    dx = n[0] - p[0]
    dy = n[1] - p[1]
    angle = math.atan2(dy, dx) + (math.pi if reverse else 0.0)
    length = math.hypot(dx, dy) * smoothing
    return (current[0] + math.cos(angle) * length, current[1] + math.sin(angle) * length)


@dataclass(frozen=True)
class BezierSegment:
    start_control: Point
    end_control: Point
    end: Point

    def command(self) -> PathCommand:
        return ("C", *self.start_control, *self.end_control, *self.end)


class CurveSmoother:
    """Build smoothed line and area paths."""

    def __init__(self, smoothing: float = SMOOTHING):
        self.smoothing = smoothing

    def segments(self, points: Sequence[Point]) -> list[BezierSegment]:
        pts = [(float(x), float(y)) for x, y in points]
        out: list[BezierSegment] = []
        for i in range(1, len(pts)):
            start = control_point(
                pts[i - 1],
                pts[i - 2] if i >= 2 else None,
                pts[i],
                smoothing=self.smoothing,
            )
            end = control_point(
                pts[i],
                pts[i - 1],
                pts[i + 1] if i + 1 < len(pts) else None,
                reverse=True,
                smoothing=self.smoothing,
            )
            out.append(BezierSegment(start_control=start, end_control=end, end=pts[i]))
        return out

    def line(self, points: Sequence[Point]) -> list[PathCommand]:
        if not points:
            return []
        first = points[0]
        commands: list[PathCommand] = [("M", float(first[0]), float(first[1]))]
        commands.extend(seg.command() for seg in self.segments(points))
        return commands

    def area(self, points: Sequence[Point], baseline: float) -> list[PathCommand]:
        """Smoothed line closed down to ``baseline`` to form a fill region."""
        commands = self.line(points)
        if not commands:
            return []
        first_x = float(points[0][0])
        last_x = float(points[-1][0])
        commands.extend(
            [
                ("L", last_x, float(baseline)),
                ("L", first_x, float(baseline)),
                ("Z",),
            ]
        )
        return commands
