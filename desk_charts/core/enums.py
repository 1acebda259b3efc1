from __future__ import annotations

from enum import Enum


class ChartKind(str, Enum):
    LINE_AREA = "line_area"
    BAR = "bar"
    DONUT = "donut"
    STACKED_COMBO = "stacked_combo"


class TextWeight(str, Enum):
    NORMAL = "normal"
    MEDIUM = "medium"
    BOLD = "bold"


class TextAnchor(str, Enum):
    START = "start"
    MIDDLE = "middle"
    END = "end"
