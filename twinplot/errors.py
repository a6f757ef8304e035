from __future__ import annotations


class ChartError(Exception):
    """Base class for every error raised while rendering a chart."""


class ChartConfigError(ChartError, ValueError):
    pass


class RangeError(ChartError, ValueError):
    def __init__(self, axis: str, message: str) -> None:
        super().__init__(message)
        self.axis = axis


class LayoutError(ChartError):
    pass


class SurfaceError(ChartError):
    pass
