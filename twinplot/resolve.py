from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any, Sequence

from twinplot.axis import XAxis, YAxis
from twinplot.errors import RangeError
from twinplot.formatters import ValueFormatter
from twinplot.ranges import Range
from twinplot.scales import round_down, round_to_for_delta, round_up
from twinplot.series import BoundedValueProvider, ValueProvider, is_shown, value_formatters
from twinplot.ticks import Tick, tick_bounds


@dataclass
class Extent:
    """Running min/max; starts at the sentinel extremes and ignores non-finite values."""

    lo: float = math.inf
    hi: float = -math.inf

    def fold(self, *values: float) -> None:
        for v in values:
            if math.isfinite(v):
                self.lo = min(self.lo, v)
                self.hi = max(self.hi, v)


def fold_extents(series: Sequence[Any]) -> tuple[Extent, Extent, Extent]:
    """(x, primary y, secondary y) extents over every shown series."""
    x, y, ya = Extent(), Extent(), Extent()
    for s in series:
        if not is_shown(s):
            continue
        target = y if s.y_axis == "primary" else ya
        if isinstance(s, BoundedValueProvider):
            for index in range(len(s)):
                vx, vy1, vy2 = s.get_bounded_value(index)
                x.fold(vx)
                target.fold(vy1, vy2)
        elif isinstance(s, ValueProvider):
            for index in range(len(s)):
                vx, vy = s.get_value(index)
                x.fold(vx)
                target.fold(vy)
    return x, y, ya


def has_secondary_series(series: Sequence[Any]) -> bool:
    return any(is_shown(s) and s.y_axis == "secondary" for s in series)


def has_primary_series(series: Sequence[Any]) -> bool:
    return any(is_shown(s) and s.y_axis == "primary" for s in series)


def _has_explicit_config(axis: Any) -> bool:
    return bool(axis.ticks) or axis.range is not None


def uses_primary_y(series: Sequence[Any], y_axis: YAxis) -> bool:
    """The primary Y axis takes part unless every shown series targets the secondary one."""
    return has_primary_series(series) or _has_explicit_config(y_axis) or not has_secondary_series(series)


def uses_secondary_y(series: Sequence[Any], y_axis_secondary: YAxis) -> bool:
    """The secondary Y axis takes part when a shown series targets it or it is configured explicitly."""
    return has_secondary_series(series) or _has_explicit_config(y_axis_secondary)


def _from_ticks(ticks: Sequence[Tick], template: Range | None) -> Range:
    lo, hi = tick_bounds(ticks)
    ra = template.copy() if template is not None else Range()
    ra.set_min(lo)
    ra.set_max(hi)
    return ra


def _resolve_axis(explicit: Range | None, ticks: Sequence[Tick] | None, extent: Extent | None, *, nice: bool) -> Range:
    if ticks:
        return _from_ticks(ticks, explicit)
    ra = explicit.copy() if explicit is not None else Range()
    if not ra.is_zero() or extent is None:
        return ra

    fill_min, fill_max = ra.min is None, ra.max is None
    if fill_min:
        ra.min = extent.lo
    if fill_max:
        ra.max = extent.hi
    if nice:
        round_to = round_to_for_delta(ra.delta)
        if fill_min:
            ra.min = round_down(ra.min, round_to)
        if fill_max:
            ra.max = round_up(ra.max, round_to)
    return ra


def resolve_ranges(
    series: Sequence[Any],
    x_axis: XAxis,
    y_axis: YAxis,
    y_axis_secondary: YAxis,
) -> tuple[Range, Range, Range]:
    """Resolve (x, primary y, secondary y) ranges.

    Per axis, explicit ticks win over an explicit range, which wins over the
    folded series extent. Only Y ranges computed from data are nice-rounded.
    A secondary range nothing targets is left unresolved.
    """
    x, y, ya = fold_extents(series)
    xr = _resolve_axis(x_axis.range, x_axis.ticks, x, nice=False)
    yr = _resolve_axis(y_axis.range, y_axis.ticks, y if uses_primary_y(series, y_axis) else None, nice=True)
    yra = _resolve_axis(
        y_axis_secondary.range,
        y_axis_secondary.ticks,
        ya if has_secondary_series(series) else None,
        nice=True,
    )
    return xr, yr, yra


def _check(ra: Range, axis: str) -> None:
    delta = ra.delta
    if ra.is_zero() or not math.isfinite(delta) or delta == 0:
        raise RangeError(axis, f"invalid {axis} range delta (zero, infinite or NaN): {ra}")


def check_ranges(
    series: Sequence[Any],
    y_axis: YAxis,
    y_axis_secondary: YAxis,
    xr: Range,
    yr: Range,
    yra: Range,
) -> None:
    _check(xr, "x")
    if uses_primary_y(series, y_axis):
        _check(yr, "y")
    if uses_secondary_y(series, y_axis_secondary):
        _check(yra, "y-secondary")


def get_value_formatters(
    series: Sequence[Any],
    x_axis: XAxis,
    y_axis: YAxis,
    y_axis_secondary: YAxis,
) -> tuple[ValueFormatter | None, ValueFormatter | None, ValueFormatter | None]:
    xf, yf, yfa = value_formatters(series)
    if x_axis.value_formatter is not None:
        xf = x_axis.value_formatter
    if y_axis.value_formatter is not None:
        yf = y_axis.value_formatter
    if y_axis_secondary.value_formatter is not None:
        yfa = y_axis_secondary.value_formatter
    return xf, yf, yfa
