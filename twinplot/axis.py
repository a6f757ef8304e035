from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Sequence

from twinplot import draw
from twinplot.defaults import (
    DEFAULT_GRID_LINE_WIDTH,
    DEFAULT_GRID_MAJOR_COLOR,
    DEFAULT_GRID_MINOR_COLOR,
    DEFAULT_HORIZONTAL_TICK_WIDTH,
    DEFAULT_VERTICAL_TICK_HEIGHT,
    DEFAULT_X_AXIS_MARGIN,
    DEFAULT_Y_AXIS_MARGIN,
)
from twinplot.formatters import ValueFormatter
from twinplot.geometry import Box
from twinplot.ranges import Range
from twinplot.renderer import Renderer
from twinplot.style import Style
from twinplot.ticks import Tick, generate_continuous_ticks


YAxisKind = Literal["primary", "secondary"]

GRID_MAJOR_DEFAULTS = Style(stroke_color=DEFAULT_GRID_MAJOR_COLOR, stroke_width=DEFAULT_GRID_LINE_WIDTH)
GRID_MINOR_DEFAULTS = Style(stroke_color=DEFAULT_GRID_MINOR_COLOR, stroke_width=DEFAULT_GRID_LINE_WIDTH)


@dataclass
class _Axis:
    name: str = ""
    name_style: Style = field(default_factory=Style)
    style: Style = field(default_factory=Style)
    tick_style: Style = field(default_factory=Style)
    range: Range | None = None
    ticks: Sequence[Tick] | None = None
    value_formatter: ValueFormatter | None = None
    grid_major_style: Style = field(default_factory=Style)
    grid_minor_style: Style = field(default_factory=Style)

    def is_shown(self) -> bool:
        return bool(self.style.show)

    def has_explicit_ticks(self) -> bool:
        return bool(self.ticks)

    def shows_name(self) -> bool:
        return bool(self.name_style.show) and bool(self.name)

    def _tick_style(self, defaults: Style) -> Style:
        return self.tick_style.inherit_from(self.style.inherit_from(defaults))

    def _vertical(self) -> bool:
        raise NotImplementedError

    def get_ticks(self, r: Renderer, ra: Range, defaults: Style, vf: ValueFormatter | None = None) -> list[Tick]:
        if self.ticks:
            return list(self.ticks)
        return generate_continuous_ticks(r, ra, vertical=self._vertical(), style=self._tick_style(defaults), formatter=vf)

    def grid_lines(self, ticks: Sequence[Tick]) -> list[tuple[float, bool]]:
        """(value, is_minor) pairs: majors at interior ticks, minors halfway between ticks."""
        lines: list[tuple[float, bool]] = []
        if len(ticks) < 2:
            return lines
        for index, tick in enumerate(ticks):
            if index > 0:
                lines.append(((ticks[index - 1].value + tick.value) / 2.0, True))
            if 0 < index < len(ticks) - 1:
                lines.append((tick.value, False))
        return lines

    def _grid_styles(self) -> tuple[Style | None, Style | None]:
        major = self.grid_major_style.inherit_from(GRID_MAJOR_DEFAULTS) if self.grid_major_style.show else None
        minor = self.grid_minor_style.inherit_from(GRID_MINOR_DEFAULTS) if self.grid_minor_style.show else None
        return major, minor


@dataclass
class XAxis(_Axis):
    def _vertical(self) -> bool:
        return False

    def measure(self, r: Renderer, canvas_box: Box, ra: Range, defaults: Style, ticks: Sequence[Tick]) -> Box:
        tick_style = self._tick_style(defaults)
        left, right, bottom = canvas_box.left, canvas_box.right, canvas_box.bottom
        for tick in ticks:
            tb = draw.measure_text(r, tick.label, tick_style)
            tx = canvas_box.left + ra.translate(tick.value)
            left = min(left, tx - (tb.width >> 1))
            right = max(right, tx + (tb.width >> 1))
            bottom = max(bottom, canvas_box.bottom + DEFAULT_X_AXIS_MARGIN + tb.height)
        if self.shows_name():
            tb = draw.measure_text(r, self.name, self.name_style.inherit_from(defaults))
            bottom += DEFAULT_X_AXIS_MARGIN + tb.height
        return Box(top=canvas_box.bottom, left=left, right=right, bottom=bottom)

    def render(self, r: Renderer, canvas_box: Box, ra: Range, defaults: Style, ticks: Sequence[Tick]) -> None:
        tick_style = self._tick_style(defaults)
        tick_style.write_stroke_to_renderer(r)
        r.move_to(canvas_box.left, canvas_box.bottom)
        r.line_to(canvas_box.right, canvas_box.bottom)
        r.stroke()

        max_text_height = 0
        for tick in ticks:
            tx = canvas_box.left + ra.translate(tick.value)
            tick_style.write_stroke_to_renderer(r)
            r.move_to(tx, canvas_box.bottom)
            r.line_to(tx, canvas_box.bottom + DEFAULT_VERTICAL_TICK_HEIGHT)
            r.stroke()

            tb = draw.measure_text(r, tick.label, tick_style)
            draw.text(r, tick.label, tx - (tb.width >> 1), canvas_box.bottom + DEFAULT_X_AXIS_MARGIN + tb.height, tick_style)
            max_text_height = max(max_text_height, tb.height)

        if self.shows_name():
            name_style = self.name_style.inherit_from(defaults)
            tb = draw.measure_text(r, self.name, name_style)
            tx = canvas_box.right - ((canvas_box.width >> 1) + (tb.width >> 1))
            ty = canvas_box.bottom + DEFAULT_X_AXIS_MARGIN + max_text_height + DEFAULT_X_AXIS_MARGIN + tb.height
            draw.text(r, self.name, tx, ty, name_style)

        major, minor = self._grid_styles()
        for value, is_minor in self.grid_lines(ticks):
            style = minor if is_minor else major
            if style is None:
                continue
            x = canvas_box.left + ra.translate(value)
            style.write_stroke_to_renderer(r)
            r.move_to(x, canvas_box.bottom)
            r.line_to(x, canvas_box.top)
            r.stroke()


@dataclass
class YAxis(_Axis):
    """Primary Y axes sit on the right edge of the canvas, secondary ones on the left."""

    kind: YAxisKind = "primary"

    def _vertical(self) -> bool:
        return True

    def _name_style(self, defaults: Style) -> Style:
        return self.name_style.inherit_from(defaults)

    def _measure_name(self, r: Renderer, defaults: Style) -> Box:
        r.set_text_rotation(90)
        try:
            return draw.measure_text(r, self.name, self._name_style(defaults))
        finally:
            r.clear_text_rotation()

    def measure(self, r: Renderer, canvas_box: Box, ra: Range, defaults: Style, ticks: Sequence[Tick]) -> Box:
        tick_style = self._tick_style(defaults)
        sw = int(tick_style.get_stroke_width())
        if self.kind == "primary":
            tx = canvas_box.right + sw + DEFAULT_Y_AXIS_MARGIN
        else:
            tx = canvas_box.left - DEFAULT_Y_AXIS_MARGIN

        left, right = canvas_box.left, canvas_box.right
        top, bottom = canvas_box.top, canvas_box.bottom
        for tick in ticks:
            ly = canvas_box.bottom - ra.translate(tick.value)
            tb = draw.measure_text(r, tick.label, tick_style)
            half_height = tb.height >> 1
            if self.kind == "primary":
                right = max(right, tx + tb.width)
            else:
                left = min(left, tx - tb.width)
            top = min(top, ly - half_height)
            bottom = max(bottom, ly + half_height)

        if self.shows_name():
            nb = self._measure_name(r, defaults)
            if self.kind == "primary":
                right += DEFAULT_Y_AXIS_MARGIN + nb.width
            else:
                left -= DEFAULT_Y_AXIS_MARGIN + nb.width
        return Box(top=top, left=left, right=right, bottom=bottom)

    def render(self, r: Renderer, canvas_box: Box, ra: Range, defaults: Style, ticks: Sequence[Tick]) -> None:
        tick_style = self._tick_style(defaults)
        tick_style.write_stroke_to_renderer(r)
        sw = int(tick_style.get_stroke_width())
        if self.kind == "primary":
            lx = canvas_box.right + sw
            tx = lx + DEFAULT_Y_AXIS_MARGIN
        else:
            lx = canvas_box.left
            tx = lx - DEFAULT_Y_AXIS_MARGIN

        r.move_to(lx, canvas_box.bottom)
        r.line_to(lx, canvas_box.top)
        r.stroke()

        max_text_width = 0
        for tick in ticks:
            ly = canvas_box.bottom - ra.translate(tick.value)
            tb = draw.measure_text(r, tick.label, tick_style)
            max_text_width = max(max_text_width, tb.width)
            text_x = tx if self.kind == "primary" else tx - tb.width

            tick_style.write_stroke_to_renderer(r)
            r.move_to(lx, ly)
            if self.kind == "primary":
                r.line_to(lx + DEFAULT_HORIZONTAL_TICK_WIDTH, ly)
            else:
                r.line_to(lx - DEFAULT_HORIZONTAL_TICK_WIDTH, ly)
            r.stroke()
            draw.text(r, tick.label, text_x, ly + (tb.height >> 1), tick_style)

        if self.shows_name():
            nb = self._measure_name(r, defaults)
            if self.kind == "primary":
                nx = canvas_box.right + sw + DEFAULT_Y_AXIS_MARGIN + max_text_width + DEFAULT_Y_AXIS_MARGIN
            else:
                nx = canvas_box.left - (DEFAULT_Y_AXIS_MARGIN + max_text_width + DEFAULT_Y_AXIS_MARGIN + nb.width)
            ny = canvas_box.top + (canvas_box.height >> 1) + (nb.height >> 1)
            r.set_text_rotation(90)
            try:
                draw.text(r, self.name, nx, ny, self._name_style(defaults))
            finally:
                r.clear_text_rotation()

        major, minor = self._grid_styles()
        for value, is_minor in self.grid_lines(ticks):
            style = minor if is_minor else major
            if style is None:
                continue
            y = canvas_box.bottom - ra.translate(value)
            style.write_stroke_to_renderer(r)
            r.move_to(canvas_box.left, y)
            r.line_to(canvas_box.right, y)
            r.stroke()
