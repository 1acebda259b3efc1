from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ChartKind
from ..core.models import ChartSpec
from ..core.theme import Theme


@dataclass(frozen=True)
class LegendEntry:
    index: int
    label: str
    color: str
    swatch: str = "dot"  # "dot" | "line"
    highlighted: bool = False


class LegendRenderer:
    """Color swatch + label entries for a chart's series (or donut slices)."""

    def __init__(self, theme: Theme | None = None):
        self.theme = theme or Theme()

    def series_colors(self, spec: ChartSpec) -> list[str]:
        if spec.kind is ChartKind.DONUT:
            # Donut colors follow slices, not series
            return [self.theme.color_for(i) for i in range(spec.category_count)]
        return [s.color or self.theme.color_for(i) for i, s in enumerate(spec.series)]

    def line_color(self, spec: ChartSpec) -> str | None:
        if spec.line is None:
            return None
        return spec.line.color or self.theme.color_for(len(spec.series))

    def entries(self, spec: ChartSpec, hovered_index: int | None = None) -> list[LegendEntry]:
        colors = self.series_colors(spec)
        if spec.kind is ChartKind.DONUT:
            return [
                LegendEntry(
                    index=i,
                    label=label,
                    color=colors[i],
                    highlighted=hovered_index == i,
                )
                for i, label in enumerate(spec.categories)
            ]
        entries = [
            LegendEntry(index=i, label=s.label, color=colors[i])
            for i, s in enumerate(spec.series)
        ]
        line_color = self.line_color(spec)
        if spec.line is not None and line_color is not None:
            entries.append(
                LegendEntry(
                    index=len(entries),
                    label=spec.line.label,
                    color=line_color,
                    swatch="line",
                )
            )
        return entries
