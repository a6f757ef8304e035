from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Sequence

from twinplot.axis import XAxis, YAxis
from twinplot.errors import LayoutError
from twinplot.formatters import ValueFormatter
from twinplot.geometry import Box
from twinplot.ranges import Range
from twinplot.renderer import Renderer
from twinplot.series import FootprintProvider, is_shown
from twinplot.style import Style
from twinplot.ticks import Tick


LOGGER = logging.getLogger(__name__)

# Label sets are treated as settled after this many measure passes.
AXIS_SETTLE_PASSES = 2


@dataclass
class AxesTicks:
    x: list[Tick] = field(default_factory=list)
    y: list[Tick] = field(default_factory=list)
    y_secondary: list[Tick] = field(default_factory=list)


@dataclass
class Layout:
    canvas_box: Box
    x_range: Range
    y_range: Range
    y_range_secondary: Range
    ticks: AxesTicks


def axis_active(axis: XAxis | YAxis, ra: Range) -> bool:
    return axis.is_shown() and not ra.is_zero()


def _check_box(canvas_box: Box, stage: str) -> Box:
    if canvas_box.width <= 0 or canvas_box.height <= 0:
        raise LayoutError(
            f"canvas box collapsed after {stage} ({canvas_box.width}x{canvas_box.height}); labels do not fit the chart"
        )
    return canvas_box


class LayoutSolver:
    """Fits the canvas box between the chart bounds and the labels drawn around it.

    Ranges passed in are private to one render and have their domains updated in place.
    """

    def __init__(
        self,
        r: Renderer,
        bounds: Box,
        x_axis: XAxis,
        y_axis: YAxis,
        y_axis_secondary: YAxis,
        axis_defaults: Style,
        formatters: tuple[ValueFormatter | None, ValueFormatter | None, ValueFormatter | None] = (None, None, None),
    ) -> None:
        self.r = r
        self.bounds = bounds
        self.x_axis = x_axis
        self.y_axis = y_axis
        self.y_axis_secondary = y_axis_secondary
        self.axis_defaults = axis_defaults
        self.formatters = formatters

    def has_axes(self) -> bool:
        return self.x_axis.is_shown() or self.y_axis.is_shown() or self.y_axis_secondary.is_shown()

    def set_range_domains(self, canvas_box: Box, xr: Range, yr: Range, yra: Range) -> None:
        xr.set_domain(canvas_box.width)
        yr.set_domain(canvas_box.height)
        yra.set_domain(canvas_box.height)

    def axes_ticks(self, xr: Range, yr: Range, yra: Range) -> AxesTicks:
        xf, yf, yfa = self.formatters
        ticks = AxesTicks()
        if axis_active(self.x_axis, xr):
            ticks.x = self.x_axis.get_ticks(self.r, xr, self.axis_defaults, xf)
        if axis_active(self.y_axis, yr):
            ticks.y = self.y_axis.get_ticks(self.r, yr, self.axis_defaults, yf)
        if axis_active(self.y_axis_secondary, yra):
            ticks.y_secondary = self.y_axis_secondary.get_ticks(self.r, yra, self.axis_defaults, yfa)
        return ticks

    def adjust_for_axes(self, canvas_box: Box, xr: Range, yr: Range, yra: Range, ticks: AxesTicks) -> Box:
        outer = canvas_box.clone()
        if axis_active(self.x_axis, xr):
            outer = outer.grow(self.x_axis.measure(self.r, canvas_box, xr, self.axis_defaults, ticks.x))
        if axis_active(self.y_axis, yr):
            outer = outer.grow(self.y_axis.measure(self.r, canvas_box, yr, self.axis_defaults, ticks.y))
        if axis_active(self.y_axis_secondary, yra):
            outer = outer.grow(
                self.y_axis_secondary.measure(self.r, canvas_box, yra, self.axis_defaults, ticks.y_secondary)
            )
        return _check_box(canvas_box.outer_constrain(self.bounds, outer), "axis measurement")

    def settle(self, canvas_box: Box, xr: Range, yr: Range, yra: Range) -> tuple[Box, AxesTicks]:
        """One measure, grow, constrain and re-resolve pass."""
        ticks = self.axes_ticks(xr, yr, yra)
        canvas_box = self.adjust_for_axes(canvas_box, xr, yr, yra, ticks)
        self.set_range_domains(canvas_box, xr, yr, yra)
        return canvas_box, ticks

    def adjust_for_annotations(
        self,
        canvas_box: Box,
        xr: Range,
        yr: Range,
        yra: Range,
        series: Sequence[Any],
        series_defaults: Callable[[int], Style],
    ) -> Box:
        outer = canvas_box.clone()
        for index, s in enumerate(series):
            if not isinstance(s, FootprintProvider) or not is_shown(s):
                continue
            ra = yr if s.y_axis == "primary" else yra
            footprint = s.measure(self.r, canvas_box, xr, ra, series_defaults(index))
            if footprint is not None:
                outer = outer.grow(footprint)
        return _check_box(canvas_box.outer_constrain(self.bounds, outer), "annotation measurement")

    def solve(
        self,
        canvas_box: Box,
        xr: Range,
        yr: Range,
        yra: Range,
        series: Sequence[Any],
        series_defaults: Callable[[int], Style],
    ) -> Layout:
        canvas_box = _check_box(canvas_box, "background padding")
        self.set_range_domains(canvas_box, xr, yr, yra)
        ticks = AxesTicks()
        if self.has_axes():
            for index in range(AXIS_SETTLE_PASSES):
                canvas_box, ticks = self.settle(canvas_box, xr, yr, yra)
                LOGGER.debug("axis pass %d: canvas box %s", index + 1, canvas_box)

        if any(isinstance(s, FootprintProvider) and is_shown(s) for s in series):
            canvas_box = self.adjust_for_annotations(canvas_box, xr, yr, yra, series, series_defaults)
            self.set_range_domains(canvas_box, xr, yr, yra)
            ticks = self.axes_ticks(xr, yr, yra)
            LOGGER.debug("annotation pass: canvas box %s", canvas_box)

        return Layout(canvas_box=canvas_box, x_range=xr, y_range=yr, y_range_secondary=yra, ticks=ticks)
