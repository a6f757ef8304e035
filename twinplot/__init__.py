from twinplot.annotation import Annotation, AnnotationSeries
from twinplot.api import render_png
from twinplot.axis import XAxis, YAxis
from twinplot.chart import Chart, Element
from twinplot.errors import ChartConfigError, ChartError, LayoutError, RangeError, SurfaceError
from twinplot.fonts import ChartFont, get_default_font
from twinplot.formatters import (
    default_value_formatter,
    float_value_formatter,
    int_value_formatter,
    percent_value_formatter,
    time_value_formatter,
)
from twinplot.geometry import Box
from twinplot.legend import legend
from twinplot.ranges import Range
from twinplot.renderer import Renderer, RendererProvider
from twinplot.series import BandSeries, BarSeries, ContinuousSeries
from twinplot.style import Padding, Style
from twinplot.ticks import Tick

__all__ = [
    "Annotation",
    "AnnotationSeries",
    "BandSeries",
    "BarSeries",
    "Box",
    "Chart",
    "ChartConfigError",
    "ChartError",
    "ChartFont",
    "ContinuousSeries",
    "Element",
    "LayoutError",
    "Padding",
    "Range",
    "RangeError",
    "Renderer",
    "RendererProvider",
    "Style",
    "SurfaceError",
    "Tick",
    "XAxis",
    "YAxis",
    "default_value_formatter",
    "float_value_formatter",
    "get_default_font",
    "int_value_formatter",
    "legend",
    "percent_value_formatter",
    "render_png",
    "time_value_formatter",
]
