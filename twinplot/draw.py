from __future__ import annotations

import math
from typing import TYPE_CHECKING

from twinplot.defaults import DEFAULT_ANNOTATION_DELTA_WIDTH, DEFAULT_ANNOTATION_PADDING
from twinplot.geometry import Box
from twinplot.ranges import Range
from twinplot.renderer import Renderer
from twinplot.style import Style

if TYPE_CHECKING:
    from twinplot.series import BoundedValueProvider, ValueProvider


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def box(r: Renderer, b: Box, style: Style) -> None:
    style.write_fill_to_renderer(r)
    style.write_stroke_to_renderer(r)
    r.move_to(b.left, b.top)
    r.line_to(b.right, b.top)
    r.line_to(b.right, b.bottom)
    r.line_to(b.left, b.bottom)
    r.close()
    r.fill_stroke()


def measure_text(r: Renderer, text: str, style: Style) -> Box:
    style.write_text_to_renderer(r)
    return r.measure_text(text)


def text(r: Renderer, body: str, x: int, y: int, style: Style) -> None:
    style.write_text_to_renderer(r)
    r.text(body, x, y)


def line_series(r: Renderer, canvas_box: Box, xrange: Range, yrange: Range, style: Style, vs: "ValueProvider") -> None:
    """Stroke the series, optionally filling down to zero and dotting each point.

    Non-finite points split the series into separately drawn runs.
    """
    runs: list[list[tuple[int, int]]] = []
    current: list[tuple[int, int]] = []
    for index in range(len(vs)):
        vx, vy = vs.get_value(index)
        if not _finite(vx, vy):
            if current:
                runs.append(current)
                current = []
            continue
        current.append((canvas_box.left + xrange.translate(vx), canvas_box.bottom - yrange.translate(vy)))
    if current:
        runs.append(current)
    if not runs:
        return

    if style.should_draw_fill():
        zero = max(yrange.min, min(yrange.max, 0.0)) if yrange.min is not None and yrange.max is not None else 0.0
        baseline = canvas_box.bottom - yrange.translate(zero)
        style.write_fill_to_renderer(r)
        for run in runs:
            if len(run) < 2:
                continue
            r.move_to(*run[0])
            for x, y in run[1:]:
                r.line_to(x, y)
            r.line_to(run[-1][0], baseline)
            r.line_to(run[0][0], baseline)
            r.close()
            r.fill()

    if style.should_draw_stroke():
        style.write_stroke_to_renderer(r)
        for run in runs:
            if len(run) < 2:
                continue
            r.move_to(*run[0])
            for x, y in run[1:]:
                r.line_to(x, y)
            r.stroke()

    if style.should_draw_dot():
        radius = style.get_dot_width()
        style.write_dot_to_renderer(r)
        for run in runs:
            for x, y in run:
                r.circle(radius, x, y)
                r.fill_stroke()


def bounded_series(
    r: Renderer,
    canvas_box: Box,
    xrange: Range,
    yrange: Range,
    style: Style,
    bvs: "BoundedValueProvider",
) -> None:
    """Fill the band between the low and high bounds: along the lows, back along the highs."""
    points: list[tuple[int, int, int]] = []
    for index in range(len(bvs)):
        vx, vy1, vy2 = bvs.get_bounded_value(index)
        if not _finite(vx, vy1, vy2):
            continue
        x = canvas_box.left + xrange.translate(vx)
        points.append((x, canvas_box.bottom - yrange.translate(vy1), canvas_box.bottom - yrange.translate(vy2)))
    if len(points) < 2:
        return

    style.write_fill_to_renderer(r)
    style.write_stroke_to_renderer(r)
    r.move_to(points[0][0], points[0][1])
    for x, y_low, _ in points[1:]:
        r.line_to(x, y_low)
    for x, _, y_high in reversed(points):
        r.line_to(x, y_high)
    r.close()
    r.fill_stroke()


def bars(
    r: Renderer,
    canvas_box: Box,
    xrange: Range,
    yrange: Range,
    style: Style,
    vs: "ValueProvider",
    bar_width: float,
) -> None:
    """Bars rise from zero clamped into the y range; `bar_width` is a fraction of the point spacing."""
    points: list[tuple[float, float]] = []
    for index in range(len(vs)):
        vx, vy = vs.get_value(index)
        if _finite(vx, vy):
            points.append((vx, vy))
    if not points:
        return

    xs = sorted({vx for vx, _ in points})
    if len(xs) > 1:
        spacing = min(xrange.translate(b) - xrange.translate(a) for a, b in zip(xs, xs[1:]))
        spacing = abs(spacing)
    else:
        spacing = canvas_box.width
    half = max(1, int(spacing * bar_width) >> 1)

    zero = max(yrange.min, min(yrange.max, 0.0))
    baseline = canvas_box.bottom - yrange.translate(zero)
    style.write_fill_to_renderer(r)
    style.write_stroke_to_renderer(r)
    for vx, vy in points:
        x = canvas_box.left + xrange.translate(vx)
        y = canvas_box.bottom - yrange.translate(vy)
        left = max(canvas_box.left, x - half)
        right = min(canvas_box.right, x + half)
        r.move_to(left, baseline)
        r.line_to(left, y)
        r.line_to(right, y)
        r.line_to(right, baseline)
        r.close()
        r.fill_stroke()


def measure_annotation(r: Renderer, style: Style, lx: int, ly: int, label: str) -> Box:
    text_box = measure_text(r, label, style)
    half_text_height = text_box.height >> 1
    padding = style.get_padding()
    pt = padding.get_top(DEFAULT_ANNOTATION_PADDING)
    pl = padding.get_left(DEFAULT_ANNOTATION_PADDING)
    pr = padding.get_right(DEFAULT_ANNOTATION_PADDING)
    pb = padding.get_bottom(DEFAULT_ANNOTATION_PADDING)
    stroke_width = int(style.get_stroke_width())
    return Box(
        top=ly - (pt + half_text_height),
        left=lx,
        right=lx + pl + pr + text_box.width + DEFAULT_ANNOTATION_DELTA_WIDTH + stroke_width,
        bottom=ly + (pb + half_text_height),
    )


def annotation(r: Renderer, style: Style, lx: int, ly: int, label: str) -> None:
    """Callout: an arrow tip at (lx, ly) opening into a padded label box to its right."""
    text_box = measure_text(r, label, style)
    text_width = text_box.width
    half_text_height = text_box.height >> 1
    padding = style.get_padding()
    pt = padding.get_top(DEFAULT_ANNOTATION_PADDING)
    pl = padding.get_left(DEFAULT_ANNOTATION_PADDING)
    pr = padding.get_right(DEFAULT_ANNOTATION_PADDING)
    pb = padding.get_bottom(DEFAULT_ANNOTATION_PADDING)

    body_left = lx + DEFAULT_ANNOTATION_DELTA_WIDTH
    body_right = body_left + pl + pr + text_width
    top = ly - (pt + half_text_height)
    bottom = ly + (pb + half_text_height)

    style.write_fill_to_renderer(r)
    style.write_stroke_to_renderer(r)
    r.move_to(lx, ly)
    r.line_to(body_left, top)
    r.line_to(body_right, top)
    r.line_to(body_right, bottom)
    r.line_to(body_left, bottom)
    r.line_to(lx, ly)
    r.close()
    r.fill_stroke()

    text(r, label, body_left + pl, ly + half_text_height, style)
