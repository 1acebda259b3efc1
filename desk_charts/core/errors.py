"""Exception hierarchy for chart layout and export."""

from __future__ import annotations


class ChartError(Exception):
    """Base exception for chart rendering errors."""
    pass


class SpecValidationError(ChartError):
    """Chart spec input failed validation."""
    pass


class UnsupportedChartKindError(ChartError):
    """No layout strategy is registered for the requested chart kind."""
    pass


class ExportError(ChartError):
    """Writing a rendered scene (SVG or PNG) failed."""
    pass
