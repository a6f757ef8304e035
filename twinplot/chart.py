from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import BinaryIO, Callable, Sequence

from twinplot import draw
from twinplot.axis import XAxis, YAxis
from twinplot.defaults import (
    DEFAULT_AXIS_COLOR,
    DEFAULT_AXIS_FONT_SIZE,
    DEFAULT_AXIS_LINE_WIDTH,
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_BACKGROUND_PADDING,
    DEFAULT_BACKGROUND_STROKE_COLOR,
    DEFAULT_BACKGROUND_STROKE_WIDTH,
    DEFAULT_CANVAS_COLOR,
    DEFAULT_CANVAS_STROKE_COLOR,
    DEFAULT_CANVAS_STROKE_WIDTH,
    DEFAULT_CHART_HEIGHT,
    DEFAULT_CHART_WIDTH,
    DEFAULT_DPI,
    DEFAULT_FONT_SIZE,
    DEFAULT_SERIES_LINE_WIDTH,
    DEFAULT_TEXT_COLOR,
    DEFAULT_TITLE_FONT_SIZE,
    DEFAULT_TITLE_TOP,
)
from twinplot.errors import ChartConfigError, RangeError
from twinplot.fonts import ChartFont, get_default_font
from twinplot.geometry import Box
from twinplot.layout import Layout, LayoutSolver, axis_active
from twinplot.raster import raster_renderer_provider
from twinplot.renderer import Renderer, RendererProvider
from twinplot.resolve import check_ranges, get_value_formatters, resolve_ranges
from twinplot.series import Series, is_shown
from twinplot.style import Style, get_default_color


Element = Callable[[Renderer, Box, Style], None]


@dataclass
class Chart:
    """Chart configuration; `render` never mutates it.

    `width`, `height` and `dpi` of 0 select the defaults. The primary Y axis is
    drawn on the right of the canvas, the secondary one on the left.
    """

    series: Sequence[Series] = ()
    title: str = ""
    title_style: Style = field(default_factory=Style)
    width: int = 0
    height: int = 0
    dpi: float = 0.0
    font: ChartFont | None = None
    background: Style = field(default_factory=Style)
    canvas: Style = field(default_factory=Style)
    x_axis: XAxis = field(default_factory=XAxis)
    y_axis: YAxis = field(default_factory=YAxis)
    y_axis_secondary: YAxis = field(default_factory=lambda: YAxis(kind="secondary"))
    elements: Sequence[Element] = ()

    def get_width(self) -> int:
        return DEFAULT_CHART_WIDTH if self.width == 0 else self.width

    def get_height(self) -> int:
        return DEFAULT_CHART_HEIGHT if self.height == 0 else self.height

    def get_dpi(self, default: float = DEFAULT_DPI) -> float:
        return default if self.dpi == 0 else self.dpi

    def get_font(self) -> ChartFont:
        return self.font if self.font is not None else get_default_font()

    def box(self) -> Box:
        """Chart bounds inset by the background padding."""
        padding = self.background.get_padding()
        return Box(
            top=padding.get_top(DEFAULT_BACKGROUND_PADDING),
            left=padding.get_left(DEFAULT_BACKGROUND_PADDING),
            right=self.get_width() - padding.get_right(DEFAULT_BACKGROUND_PADDING),
            bottom=self.get_height() - padding.get_bottom(DEFAULT_BACKGROUND_PADDING),
        )

    def validate_series(self) -> None:
        if not self.series:
            raise ChartConfigError("please provide at least one series")
        for s in self.series:
            s.validate()

    def style_defaults_background(self) -> Style:
        return Style(
            fill_color=DEFAULT_BACKGROUND_COLOR,
            stroke_color=DEFAULT_BACKGROUND_STROKE_COLOR,
            stroke_width=DEFAULT_BACKGROUND_STROKE_WIDTH,
        )

    def style_defaults_canvas(self) -> Style:
        return Style(
            fill_color=DEFAULT_CANVAS_COLOR,
            stroke_color=DEFAULT_CANVAS_STROKE_COLOR,
            stroke_width=DEFAULT_CANVAS_STROKE_WIDTH,
        )

    def style_defaults_series(self, index: int) -> Style:
        return Style(
            stroke_color=get_default_color(index),
            stroke_width=DEFAULT_SERIES_LINE_WIDTH,
            font=self.get_font(),
            font_size=DEFAULT_FONT_SIZE,
        )

    def style_defaults_axes(self) -> Style:
        return Style(
            font=self.get_font(),
            font_color=DEFAULT_AXIS_COLOR,
            font_size=DEFAULT_AXIS_FONT_SIZE,
            stroke_color=DEFAULT_AXIS_COLOR,
            stroke_width=DEFAULT_AXIS_LINE_WIDTH,
        )

    def style_defaults_elements(self) -> Style:
        return Style(font=self.get_font())

    def render(self, sink: BinaryIO, provider: RendererProvider = raster_renderer_provider) -> None:
        """Render the chart and write the encoded image to `sink`.

        Raises ChartConfigError before any drawing when there are no series or a
        series fails validation. On RangeError the background alone has already
        been written to `sink`.
        """
        self.validate_series()
        c = replace(self, y_axis_secondary=replace(self.y_axis_secondary, kind="secondary"))

        r = provider(c.get_width(), c.get_height())
        r.set_dpi(c.get_dpi())
        c._draw_background(r)

        xr, yr, yra = resolve_ranges(c.series, c.x_axis, c.y_axis, c.y_axis_secondary)
        solver = LayoutSolver(
            r,
            c.box(),
            c.x_axis,
            c.y_axis,
            c.y_axis_secondary,
            c.style_defaults_axes(),
            get_value_formatters(c.series, c.x_axis, c.y_axis, c.y_axis_secondary),
        )
        canvas_box = c.box()
        solver.set_range_domains(canvas_box, xr, yr, yra)
        try:
            check_ranges(c.series, c.y_axis, c.y_axis_secondary, xr, yr, yra)
        except RangeError:
            r.save(sink)
            raise

        layout = solver.solve(canvas_box, xr, yr, yra, c.series, c.style_defaults_series)

        c._draw_canvas(r, layout.canvas_box)
        c._draw_axes(r, layout)
        for index, s in enumerate(c.series):
            c._draw_series(r, layout, s, index)
        c._draw_title(r)
        for element in c.elements:
            element(r, layout.canvas_box, c.style_defaults_elements())

        r.save(sink)

    def _draw_background(self, r: Renderer) -> None:
        bounds = Box(right=self.get_width(), bottom=self.get_height())
        draw.box(r, bounds, self.background.inherit_from(self.style_defaults_background()))

    def _draw_canvas(self, r: Renderer, canvas_box: Box) -> None:
        draw.box(r, canvas_box, self.canvas.inherit_from(self.style_defaults_canvas()))

    def _draw_axes(self, r: Renderer, layout: Layout) -> None:
        defaults = self.style_defaults_axes()
        if axis_active(self.x_axis, layout.x_range):
            self.x_axis.render(r, layout.canvas_box, layout.x_range, defaults, layout.ticks.x)
        if axis_active(self.y_axis, layout.y_range):
            self.y_axis.render(r, layout.canvas_box, layout.y_range, defaults, layout.ticks.y)
        if axis_active(self.y_axis_secondary, layout.y_range_secondary):
            self.y_axis_secondary.render(
                r, layout.canvas_box, layout.y_range_secondary, defaults, layout.ticks.y_secondary
            )

    def _draw_series(self, r: Renderer, layout: Layout, s: Series, index: int) -> None:
        if not is_shown(s):
            return
        ra = layout.y_range if s.y_axis == "primary" else layout.y_range_secondary
        s.render(r, layout.canvas_box, layout.x_range, ra, self.style_defaults_series(index))

    def _draw_title(self, r: Renderer) -> None:
        if not self.title or not self.title_style.show:
            return
        style = self.title_style.inherit_from(
            Style(font=self.get_font(), font_color=DEFAULT_TEXT_COLOR, font_size=DEFAULT_TITLE_FONT_SIZE)
        )
        tb = draw.measure_text(r, self.title, style)
        x = (self.get_width() >> 1) - (tb.width >> 1)
        y = style.get_padding().get_top(DEFAULT_TITLE_TOP) + tb.height
        draw.text(r, self.title, x, y, style)
