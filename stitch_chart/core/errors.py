"""Exceptions raised by the chart pipeline.

All of them subclass ValueError so callers that only care about bad input
can catch that.
"""


class ChartError(ValueError):
    """Base class for pipeline precondition failures."""


class EmptyPaletteError(ChartError):
    """Raised when pixels must be mapped but there are no colours to map to."""


class MalformedGridError(ChartError):
    """Raised for empty, zero-width or non-rectangular grids, or unknown ids."""


class ConfigError(ChartError):
    """Raised for invalid static configuration (yarn table, env settings)."""
