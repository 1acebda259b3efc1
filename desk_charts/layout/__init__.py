"""Chart geometry: scaling, curve smoothing, arcs, stacking, interaction and legends.

Everything here is a pure function of its inputs except ``InteractionModel``,
which owns the hovered category index.
"""

from __future__ import annotations

from .arcs import ArcSlicer, DonutLayout
from .curves import CurveSmoother
from .interaction import InteractionModel
from .legend import LegendRenderer
from .scale import ScaleEngine, domain_max
from .stacking import StackLayout

__all__ = [
    "ArcSlicer",
    "CurveSmoother",
    "DonutLayout",
    "InteractionModel",
    "LegendRenderer",
    "ScaleEngine",
    "StackLayout",
    "domain_max",
]
