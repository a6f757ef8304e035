from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Protocol, Sequence, runtime_checkable

import numpy as np

from twinplot import draw
from twinplot.adapters import coerce_1d_numeric, normalize_xy
from twinplot.axis import YAxisKind
from twinplot.errors import ChartConfigError
from twinplot.formatters import ValueFormatter
from twinplot.geometry import Box
from twinplot.ranges import Range
from twinplot.renderer import Renderer
from twinplot.style import Style


@runtime_checkable
class Series(Protocol):
    name: str
    style: Style
    y_axis: YAxisKind

    def validate(self) -> None:
        ...

    def render(self, r: Renderer, canvas_box: Box, xrange: Range, yrange: Range, defaults: Style) -> None:
        ...


@runtime_checkable
class ValueProvider(Protocol):
    def __len__(self) -> int:
        ...

    def get_value(self, index: int) -> tuple[float, float]:
        ...


@runtime_checkable
class BoundedValueProvider(Protocol):
    def __len__(self) -> int:
        ...

    def get_bounded_value(self, index: int) -> tuple[float, float, float]:
        ...


@runtime_checkable
class ValueFormatterProvider(Protocol):
    def get_value_formatters(self) -> tuple[ValueFormatter | None, ValueFormatter | None]:
        ...


@runtime_checkable
class FootprintProvider(Protocol):
    """Series contributing positioned labels whose footprint the layout must reserve."""

    def measure(self, r: Renderer, canvas_box: Box, xrange: Range, yrange: Range, defaults: Style) -> Box | None:
        ...


def is_shown(series: Any) -> bool:
    return series.style.is_shown()


@dataclass
class _XYSeries:
    x_values: Any = None
    y_values: Any = None
    name: str = ""
    style: Style = field(default_factory=Style)
    y_axis: YAxisKind = "primary"
    x_value_formatter: ValueFormatter | None = None
    y_value_formatter: ValueFormatter | None = None

    def __post_init__(self) -> None:
        self.x_values, self.y_values = normalize_xy(y=self.y_values, x=self.x_values)

    @classmethod
    def from_frame(cls, data: Any, *, y: str | None = None, x: str | None = None, **kwargs: Any):
        """Build from pandas DataFrame columns; `y` may be omitted for single-column frames."""
        x_arr, y_arr = normalize_xy(y=y, x=x, data=data)
        return cls(x_values=x_arr, y_values=y_arr, **kwargs)

    def __len__(self) -> int:
        return int(self.x_values.size)

    def get_value(self, index: int) -> tuple[float, float]:
        return float(self.x_values[index]), float(self.y_values[index])

    def get_value_formatters(self) -> tuple[ValueFormatter | None, ValueFormatter | None]:
        return self.x_value_formatter, self.y_value_formatter

    def validate(self) -> None:
        if self.x_values.shape != self.y_values.shape:
            raise ChartConfigError(f"series {self.name!r}: x and y lengths differ ({self.x_values.size} != {self.y_values.size})")
        if not np.any(np.isfinite(self.x_values) & np.isfinite(self.y_values)):
            raise ChartConfigError(f"series {self.name!r}: contains no finite points")


@dataclass
class ContinuousSeries(_XYSeries):
    """Line series; set `style.fill_color` to shade under the line and `style.dot_width` for point markers."""

    def render(self, r: Renderer, canvas_box: Box, xrange: Range, yrange: Range, defaults: Style) -> None:
        draw.line_series(r, canvas_box, xrange, yrange, self.style.inherit_from(defaults), self)


@dataclass
class BarSeries(_XYSeries):
    bar_width: float = 0.8

    def __post_init__(self) -> None:
        if self.bar_width <= 0:
            raise ValueError("bar width must be > 0")
        super().__post_init__()

    def render(self, r: Renderer, canvas_box: Box, xrange: Range, yrange: Range, defaults: Style) -> None:
        bar_defaults = replace(defaults, fill_color=defaults.stroke_color)
        draw.bars(r, canvas_box, xrange, yrange, self.style.inherit_from(bar_defaults), self, self.bar_width)


BAND_FILL_ALPHA = 80


@dataclass
class BandSeries:
    """Filled band between per-point lower and upper bounds."""

    x_values: Any = None
    y_low: Any = None
    y_high: Any = None
    name: str = ""
    style: Style = field(default_factory=Style)
    y_axis: YAxisKind = "primary"

    def __post_init__(self) -> None:
        self.x_values, self.y_low = normalize_xy(y=self.y_low, x=self.x_values)
        self.y_high = coerce_1d_numeric(self.y_high, label="y_high")

    def __len__(self) -> int:
        return int(self.x_values.size)

    def get_bounded_value(self, index: int) -> tuple[float, float, float]:
        return float(self.x_values[index]), float(self.y_low[index]), float(self.y_high[index])

    def validate(self) -> None:
        if self.y_low.shape != self.y_high.shape or self.x_values.shape != self.y_low.shape:
            raise ChartConfigError(
                f"series {self.name!r}: x, low and high lengths differ "
                f"({self.x_values.size}, {self.y_low.size}, {self.y_high.size})"
            )

    def render(self, r: Renderer, canvas_box: Box, xrange: Range, yrange: Range, defaults: Style) -> None:
        fill = defaults.get_stroke_color()
        band_defaults = replace(defaults, fill_color=(fill[0], fill[1], fill[2], BAND_FILL_ALPHA))
        draw.bounded_series(r, canvas_box, xrange, yrange, self.style.inherit_from(band_defaults), self)


def value_formatters(series: Sequence[Any]) -> tuple[ValueFormatter | None, ValueFormatter | None, ValueFormatter | None]:
    """(x, primary y, secondary y) formatters taken from series; later series win."""
    xf = yf = yfa = None
    for s in series:
        if not isinstance(s, ValueFormatterProvider):
            continue
        sx, sy = s.get_value_formatters()
        if s.y_axis == "primary":
            xf, yf = sx, sy
        elif s.y_axis == "secondary":
            xf, yfa = sx, sy
    return xf, yf, yfa
