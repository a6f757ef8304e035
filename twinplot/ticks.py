from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from twinplot.defaults import (
    DEFAULT_MINIMUM_TICK_HORIZONTAL_SPACING,
    DEFAULT_MINIMUM_TICK_VERTICAL_SPACING,
    DEFAULT_TICK_COUNT_SANITY_CHECK,
)
from twinplot.formatters import ValueFormatter, default_value_formatter
from twinplot.ranges import Range
from twinplot.renderer import Renderer
from twinplot.scales import generate_nice_ticks
from twinplot.style import Style


MIN_TICK_LABEL_GAP = 2


@dataclass(frozen=True)
class Tick:
    value: float
    label: str


def tick_bounds(ticks: Sequence[Tick]) -> tuple[float, float]:
    values = [t.value for t in ticks]
    return min(values), max(values)


def generate_continuous_ticks(
    r: Renderer,
    ra: Range,
    *,
    vertical: bool,
    style: Style,
    formatter: ValueFormatter | None = None,
) -> list[Tick]:
    """Evenly spaced ticks across `ra`, dropping any whose label would collide with its neighbour.

    Candidate density comes from the width (or height) of the minimum label plus
    the minimum spacing; both range endpoints are always kept.
    """
    vf = formatter if formatter is not None else default_value_formatter
    vmin, vmax = float(ra.min), float(ra.max)
    style.write_text_to_renderer(r)

    min_label = vf(vmin)
    if vmin == vmax:
        return [Tick(value=vmin, label=min_label)]

    label_box = r.measure_text(min_label)
    if vertical:
        tick_size = label_box.height + DEFAULT_MINIMUM_TICK_VERTICAL_SPACING
    else:
        tick_size = label_box.width + DEFAULT_MINIMUM_TICK_HORIZONTAL_SPACING
    target = int(ra.domain // max(1, tick_size))
    target = max(2, min(target, DEFAULT_TICK_COUNT_SANITY_CHECK))

    delta = vmax - vmin
    lo, hi = min(vmin, vmax), max(vmin, vmax)
    interior = [float(v) for v in generate_nice_ticks(vmin, vmax, target) if lo < v < hi]
    interior.sort(key=lambda v: (v - vmin) / delta)

    def extent(value: float, label: str) -> tuple[float, float]:
        box = r.measure_text(label)
        size = box.height if vertical else box.width
        pos = ra.translate(value)
        return (pos - size / 2.0, pos + size / 2.0)

    def overlaps(a: tuple[float, float], b: tuple[float, float]) -> bool:
        return max(a[0], b[0]) < min(a[1], b[1]) + MIN_TICK_LABEL_GAP

    kept = [Tick(value=vmin, label=min_label)]
    extents = [extent(vmin, min_label)]
    for value in interior:
        label = vf(value)
        ext = extent(value, label)
        if overlaps(extents[-1], ext):
            continue
        kept.append(Tick(value=value, label=label))
        extents.append(ext)

    max_label = vf(vmax)
    max_extent = extent(vmax, max_label)
    while len(kept) > 1 and overlaps(extents[-1], max_extent):
        kept.pop()
        extents.pop()
    kept.append(Tick(value=vmax, label=max_label))
    return kept
