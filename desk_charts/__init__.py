"""DeskCharts: interactive 2D chart layout with SVG and PNG export."""

from __future__ import annotations

__version__ = "0.1.0"
