"""Scene building: per-kind builders, scene elements and the stateful view."""

from .builders import BUILDERS, get_builder
from .elements import Scene
from .view import ChartView

__all__ = ["BUILDERS", "ChartView", "Scene", "get_builder"]
