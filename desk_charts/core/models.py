from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from numbers import Real

from .enums import ChartKind
from .errors import SpecValidationError
from .logging_config import get_logger

logger = get_logger(__name__)


dataclass_kwargs = {"slots": True}


def _coerce_value(raw: object, label: str, index: int) -> float:
    # Missing values count as zero; negatives are clamped for layout
    if raw is None:
        return 0.0
    if isinstance(raw, bool) or not isinstance(raw, Real):
        raise SpecValidationError(
            f"Series '{label}' has a non-numeric value at index {index}: {raw!r}"
        )
    value = float(raw)
    if math.isnan(value):
        return 0.0
    if math.isinf(value):
        raise SpecValidationError(
            f"Series '{label}' has an infinite value at index {index}"
        )
    return max(0.0, value)


@dataclass(frozen=True, **dataclass_kwargs)
class Series:
    """One named numeric sequence aligned to the category axis.

    Values are normalized on construction: ``None`` and NaN become 0 and
    negative numbers are clamped to 0. ``color`` is optional; the theme
    palette fills it in by series position when absent.
    """

    label: str
    values: tuple[float, ...]
    color: str | None = None

    def __post_init__(self) -> None:
        coerced = tuple(
            _coerce_value(v, self.label, i) for i, v in enumerate(self.values)
        )
        object.__setattr__(self, "values", coerced)

    def padded(self, length: int) -> Series:
        if len(self.values) > length:
            raise SpecValidationError(
                f"Series '{self.label}' has {len(self.values)} values "
                f"but the category axis has {length}"
            )
        if len(self.values) == length:
            return self
        logger.debug(
            "Padding short series with zeros",
            extra={"series": self.label, "have": len(self.values), "want": length},
        )
        return replace(self, values=self.values + (0.0,) * (length - len(self.values)))


@dataclass(frozen=True, **dataclass_kwargs)
class ChartSpec:
    """Everything a render pass needs besides the viewport."""

    kind: ChartKind
    categories: tuple[str, ...]
    series: tuple[Series, ...]
    line: Series | None = None
    title: str | None = None
    subtitle: str | None = None
    unit: str = ""

    def __post_init__(self) -> None:
        try:
            kind = ChartKind(self.kind)
        except ValueError as e:
            raise SpecValidationError(f"Unknown chart kind: {self.kind!r}") from e
        object.__setattr__(self, "kind", kind)
        categories = tuple(str(c) for c in self.categories)
        if not categories:
            raise SpecValidationError("Category axis must contain at least one label")
        if not self.series:
            raise SpecValidationError("Chart spec needs at least one series")
        n = len(categories)
        object.__setattr__(self, "categories", categories)
        object.__setattr__(self, "series", tuple(s.padded(n) for s in self.series))
        if self.line is not None:
            object.__setattr__(self, "line", self.line.padded(n))

    @property
    def category_count(self) -> int:
        return len(self.categories)


@dataclass(frozen=True, **dataclass_kwargs)
class Padding:
    top: float
    right: float
    bottom: float
    left: float


@dataclass(frozen=True, **dataclass_kwargs)
class KindProfile:
    height: float
    nominal_width: float
    padding: Padding
    headroom: float
    max_bar_width: float = 60.0
    tooltip_edge_flip: bool = True


KIND_PROFILES: dict[ChartKind, KindProfile] = {
    ChartKind.LINE_AREA: KindProfile(
        height=350,
        nominal_width=800,
        padding=Padding(top=40, right=40, bottom=50, left=60),
        headroom=1.10,
    ),
    ChartKind.BAR: KindProfile(
        height=300,
        nominal_width=500,
        padding=Padding(top=30, right=20, bottom=40, left=50),
        headroom=1.15,
        tooltip_edge_flip=False,
    ),
    ChartKind.STACKED_COMBO: KindProfile(
        height=400,
        nominal_width=500,
        padding=Padding(top=40, right=30, bottom=60, left=50),
        headroom=1.15,
        tooltip_edge_flip=False,
    ),
    # Donut geometry lives in unit space; the pixel box only sizes the frame
    ChartKind.DONUT: KindProfile(
        height=300,
        nominal_width=500,
        padding=Padding(top=0, right=0, bottom=0, left=0),
        headroom=1.0,
    ),
}


@dataclass(frozen=True, **dataclass_kwargs)
class Viewport:
    width: float
    height: float
    padding: Padding = field(default_factory=lambda: Padding(0, 0, 0, 0))

    @property
    def inner_width(self) -> float:
        return max(0.0, self.width - self.padding.left - self.padding.right)

    @property
    def inner_height(self) -> float:
        return max(0.0, self.height - self.padding.top - self.padding.bottom)

    @property
    def baseline(self) -> float:
        """Pixel y of the value axis origin."""
        return self.padding.top + self.inner_height

    @property
    def right(self) -> float:
        return self.padding.left + self.inner_width

    @classmethod
    def for_kind(
        cls,
        kind: ChartKind,
        width: float | None = None,
        *,
        nominal_width: float | None = None,
    ) -> Viewport:
        """Build the viewport for a chart kind from a host-measured width.

        A missing, zero, negative or non-finite width falls back to the
        kind's nominal width (or ``nominal_width`` when given) so geometry
        stays finite until a real measurement arrives.
        """
        profile = KIND_PROFILES[ChartKind(kind)]
        fallback = nominal_width or profile.nominal_width
        if width is None or not math.isfinite(width) or width <= 0:
            logger.debug(
                "Using nominal width",
                extra={"kind": ChartKind(kind).value, "reported": width, "width": fallback},
            )
            width = fallback
        return cls(width=float(width), height=float(profile.height), padding=profile.padding)

