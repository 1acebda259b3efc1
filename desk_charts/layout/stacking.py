"""Banded bar geometry: stacked columns with an optional overlay line, and
the single-series bar chart that shares the same banding rules."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..core.errors import SpecValidationError
from ..core.models import ChartSpec, Viewport
from .scale import ScaleEngine, domain_max, format_value, round_half_up

STACK_HEADROOM = 1.15


@dataclass(frozen=True)
class StackSegment:
    series_index: int
    category_index: int
    value: float
    x: float
    y: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class StackColumn:
    index: int
    label: str
    total: float
    segments: tuple[StackSegment, ...]
    top: float
    bar_left: float
    center_x: float

    @property
    def total_label(self) -> str:
        return format_value(round_half_up(self.total, 1))


@dataclass(frozen=True)
class OverlayPoint:
    index: int
    value: float
    x: float
    y: float


@dataclass(frozen=True)
class StackedLayout:
    scale: ScaleEngine
    columns: tuple[StackColumn, ...]
    overlay: tuple[OverlayPoint, ...] = ()


@dataclass(frozen=True)
class BarRect:
    index: int
    label: str
    value: float
    x: float
    y: float
    width: float
    height: float
    center_x: float

    @property
    def value_label(self) -> str:
        return format_value(self.value)


@dataclass(frozen=True)
class BarLayout:
    scale: ScaleEngine
    bars: tuple[BarRect, ...]


def _value_matrix(spec: ChartSpec) -> np.ndarray:
    return np.vstack([np.asarray(s.values, dtype=float) for s in spec.series])


class StackLayout:
    """Lay out stacked columns bottom-up in fixed series order."""

    def __init__(self, headroom: float = STACK_HEADROOM, max_bar_width: float = 60.0):
        self.headroom = headroom
        self.max_bar_width = max_bar_width

    def domain_max(self, spec: ChartSpec) -> float:
        """Shared scale for bars and overlay: max(stack total, line value) x headroom."""
        totals = _value_matrix(spec).sum(axis=0)
        candidates = [totals]
        if spec.line is not None:
            candidates.append(np.asarray(spec.line.values, dtype=float))
        return domain_max(candidates, self.headroom)

    def scale_for(self, spec: ChartSpec, viewport: Viewport) -> ScaleEngine:
        return ScaleEngine(
            viewport=viewport,
            category_count=spec.category_count,
            domain_max=self.domain_max(spec),
            max_bar_width=self.max_bar_width,
        )

    def layout(self, spec: ChartSpec, viewport: Viewport) -> StackedLayout:
        scale = self.scale_for(spec, viewport)
        matrix = _value_matrix(spec)
        columns: list[StackColumn] = []
        for i, label in enumerate(spec.categories):
            left = scale.bar_left(i)
            running_baseline = viewport.baseline
            segments: list[StackSegment] = []
            for s_idx in range(matrix.shape[0]):
                value = float(matrix[s_idx, i])
                if value <= 0:
                    continue
                height = scale.value_height(value)
                segments.append(
                    StackSegment(
                        series_index=s_idx,
                        category_index=i,
                        value=value,
                        x=left,
                        y=running_baseline - height,
                        width=scale.bar_width,
                        height=height,
                    )
                )
                running_baseline -= height
            columns.append(
                StackColumn(
                    index=i,
                    label=label,
                    total=float(matrix[:, i].sum()),
                    segments=tuple(segments),
                    top=running_baseline,
                    bar_left=left,
                    center_x=scale.band_center(i),
                )
            )

        overlay: tuple[OverlayPoint, ...] = ()
        if spec.line is not None:
            overlay = tuple(
                OverlayPoint(index=i, value=v, x=scale.band_center(i), y=scale.y(v))
                for i, v in enumerate(spec.line.values)
            )
        return StackedLayout(scale=scale, columns=tuple(columns), overlay=overlay)

    def bars(self, spec: ChartSpec, viewport: Viewport) -> BarLayout:
        """Single-series bars using the same banding, without stacking."""
        if len(spec.series) != 1:
            raise SpecValidationError(
                f"Bar charts take exactly one series, got {len(spec.series)}"
            )
        values = spec.series[0].values
        scale = ScaleEngine(
            viewport=viewport,
            category_count=spec.category_count,
            domain_max=domain_max([values], self.headroom),
            max_bar_width=self.max_bar_width,
        )
        bars = []
        for i, (label, value) in enumerate(zip(spec.categories, values, strict=True)):
            height = scale.value_height(value)
            bars.append(
                BarRect(
                    index=i,
                    label=label,
                    value=value,
                    x=scale.bar_left(i),
                    y=viewport.baseline - height,
                    width=scale.bar_width,
                    height=height,
                    center_x=scale.band_center(i),
                )
            )
        return BarLayout(scale=scale, bars=tuple(bars))
