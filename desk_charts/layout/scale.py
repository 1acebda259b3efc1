"""Value and category scaling shared by every chart kind.

Pixel space has its origin at the top-left corner, so larger values map to
smaller ``y``. Two horizontal axis flavours exist:

- continuous (line/area): categories sit on the inner edges, first at
  ``padding.left`` and last at ``padding.left + inner_width``
- banded (bar/stacked): the inner width is cut into equal slots and each
  category is centred in its slot
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from ..core.errors import SpecValidationError
from ..core.models import Viewport

GRID_FRACTIONS: tuple[float, ...] = (0.0, 0.25, 0.5, 0.75, 1.0)
BAR_SLOT_RATIO = 0.6


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves away from zero for positive values (not banker's rounding)."""
    factor = 10.0**ndigits
    return math.floor(value * factor + 0.5) / factor


def format_value(value: float, *, thousands: bool = False) -> str:
    """Format a chart value for labels: integers without decimals, else up to 2."""
    if float(value).is_integer():
        return f"{int(value):,}" if thousands else str(int(value))
    text = f"{value:,.2f}" if thousands else f"{value:.2f}"
    return text.rstrip("0").rstrip(".")


def domain_max(series_list: Iterable[Sequence[float]], headroom: float) -> float:
    """Largest value across all series (at least 1) times the headroom factor."""
    peaks = [float(np.max(np.asarray(s, dtype=float))) for s in series_list if len(s)]
    return max(max(peaks, default=0.0), 1.0) * headroom


@dataclass(frozen=True)
class Gridline:
    fraction: float
    value: float
    y: float
    x1: float
    x2: float
    label: str


@dataclass(frozen=True)
class ScaleEngine:
    viewport: Viewport
    category_count: int
    domain_max: float
    max_bar_width: float = 60.0

    def __post_init__(self) -> None:
        if self.category_count < 1:
            raise SpecValidationError("Scale needs at least one category")
        if not self.domain_max > 0:
            raise SpecValidationError(f"Domain max must be positive, got {self.domain_max}")

    # ---------------- Continuous axis -----------------------------------
    def x(self, index: int) -> float:
        vp = self.viewport
        if self.category_count == 1:
            # A lone category has no span to spread over; centre it
            return vp.padding.left + vp.inner_width / 2
        return vp.padding.left + index / (self.category_count - 1) * vp.inner_width

    # ---------------- Banded axis ---------------------------------------
    @property
    def slot_width(self) -> float:
        return self.viewport.inner_width / self.category_count

    @property
    def bar_width(self) -> float:
        return min(self.slot_width * BAR_SLOT_RATIO, self.max_bar_width)

    def slot_left(self, index: int) -> float:
        return self.viewport.padding.left + index * self.slot_width

    def bar_left(self, index: int) -> float:
        return self.slot_left(index) + (self.slot_width - self.bar_width) / 2

    def band_center(self, index: int) -> float:
        return self.slot_left(index) + self.slot_width / 2

    # ---------------- Value axis ----------------------------------------
    def value_height(self, value: float) -> float:
        return value / self.domain_max * self.viewport.inner_height

    def y(self, value: float) -> float:
        vp = self.viewport
        return vp.padding.top + vp.inner_height - self.value_height(value)

    def gridlines(self) -> list[Gridline]:
        vp = self.viewport
        lines = []
        for fraction in GRID_FRACTIONS:
            value = fraction * self.domain_max
            lines.append(
                Gridline(
                    fraction=fraction,
                    value=value,
                    y=self.y(value),
                    x1=vp.padding.left,
                    x2=vp.right,
                    label=str(int(round_half_up(value))),
                )
            )
        return lines
