from __future__ import annotations

from typing import Iterator, Sequence

import numpy as np

from twinplot.raster.canvas import RGBA, blend_mask


def draw_polyline(dst: np.ndarray, points: Sequence[tuple[int, int]], color: RGBA, width: int = 1) -> None:
    """Stroke an open path with a square brush of `width` pixels.

    Coverage of all segments is collected first and blended once, so joints
    and overlapping segments do not darken translucent strokes.
    """
    if len(points) < 2:
        return
    mask = np.zeros(dst.shape[:2], dtype=bool)
    radius = max(0, width // 2)
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        for x, y in _segment_pixels(int(x0), int(y0), int(x1), int(y1)):
            _stamp(mask, x, y, radius)
    blend_mask(dst, mask, color)


def _segment_pixels(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    # Bresenham, both endpoints included
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _stamp(mask: np.ndarray, x: int, y: int, radius: int) -> None:
    ya, yb = max(0, y - radius), min(mask.shape[0], y + radius + 1)
    xa, xb = max(0, x - radius), min(mask.shape[1], x + radius + 1)
    if ya < yb and xa < xb:
        mask[ya:yb, xa:xb] = True
