from __future__ import annotations

from typing import TYPE_CHECKING

from twinplot import draw
from twinplot.defaults import (
    DEFAULT_LEGEND_FILL_COLOR,
    DEFAULT_LEGEND_FONT_SIZE,
    DEFAULT_LEGEND_PADDING,
    DEFAULT_LEGEND_SWATCH_WIDTH,
    DEFAULT_TEXT_COLOR,
)
from twinplot.geometry import Box
from twinplot.renderer import Renderer
from twinplot.series import FootprintProvider, is_shown
from twinplot.style import Style

if TYPE_CHECKING:
    from twinplot.chart import Chart, Element


def legend(chart: "Chart", style: Style | None = None) -> "Element":
    """Overlay element listing every named, shown series in the top-left corner of the canvas."""
    legend_style = style if style is not None else Style()

    def render(r: Renderer, canvas_box: Box, defaults: Style) -> None:
        entries: list[tuple[str, Style]] = []
        for index, s in enumerate(chart.series):
            if s.name and is_shown(s) and not isinstance(s, FootprintProvider):
                entries.append((s.name, s.style.inherit_from(chart.style_defaults_series(index))))
        if not entries:
            return

        base = legend_style.inherit_from(
            defaults.inherit_from(
                Style(
                    font_size=DEFAULT_LEGEND_FONT_SIZE,
                    font_color=DEFAULT_TEXT_COLOR,
                    fill_color=DEFAULT_LEGEND_FILL_COLOR,
                    stroke_color=DEFAULT_TEXT_COLOR,
                    stroke_width=0.0,
                )
            )
        )
        pad = DEFAULT_LEGEND_PADDING
        sizes = [draw.measure_text(r, name, base) for name, _ in entries]
        line_height = max(tb.height for tb in sizes)
        text_width = max(tb.width for tb in sizes)

        left = canvas_box.left + pad
        top = canvas_box.top + pad
        frame = Box(
            top=top,
            left=left,
            right=left + pad + DEFAULT_LEGEND_SWATCH_WIDTH + pad + text_width + pad,
            bottom=top + pad + len(entries) * (line_height + pad),
        )
        draw.box(r, frame, base)

        y = frame.top + pad
        for (name, series_style), tb in zip(entries, sizes):
            mid = y + (line_height >> 1)
            swatch_color = series_style.get_stroke_color(series_style.get_fill_color())
            r.set_stroke_color(swatch_color)
            r.set_stroke_width(max(2.0, series_style.get_stroke_width()))
            r.move_to(frame.left + pad, mid)
            r.line_to(frame.left + pad + DEFAULT_LEGEND_SWATCH_WIDTH, mid)
            r.stroke()
            draw.text(r, name, frame.left + pad + DEFAULT_LEGEND_SWATCH_WIDTH + pad, y + line_height, base)
            y += line_height + pad

    return render
