from __future__ import annotations

import math

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0]:
        return
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    if xa > xb:
        return
    segment = dst[y, xa : xb + 1]
    a = color[3] / 255.0
    inv = 1.0 - a
    segment[:, :3] = (np.asarray(color[0:3], dtype=np.float32) * a + segment[:, :3].astype(np.float32) * inv).astype(np.uint8)
    segment[:, 3] = 255


def blend_mask(dst: np.ndarray, mask: np.ndarray, color: RGBA) -> None:
    """Blend `color` once into every pixel where the boolean `mask` is set."""
    if not mask.any():
        return
    a = color[3] / 255.0
    covered = dst[mask]
    covered[:, :3] = (np.asarray(color[0:3], dtype=np.float32) * a + covered[:, :3].astype(np.float32) * (1.0 - a)).astype(np.uint8)
    covered[:, 3] = 255
    dst[mask] = covered


def fill_polygon(dst: np.ndarray, xs: list[int], ys: list[int], color: RGBA) -> None:
    """Even-odd scanline fill sampled at pixel centers."""
    n = len(xs)
    if n < 3:
        return
    y_start = max(0, min(ys))
    y_end = min(dst.shape[0] - 1, max(ys))
    for yy in range(y_start, y_end + 1):
        sample_y = yy + 0.5
        crossings: list[float] = []
        for i in range(n):
            xa, ya = xs[i], ys[i]
            xb, yb = xs[(i + 1) % n], ys[(i + 1) % n]
            if (ya <= sample_y) == (yb <= sample_y):
                continue
            crossings.append(xa + (sample_y - ya) * (xb - xa) / (yb - ya))
        crossings.sort()
        for left, right in zip(crossings[0::2], crossings[1::2]):
            x0 = int(math.ceil(left - 0.5))
            x1 = int(math.floor(right - 0.5))
            if x1 >= x0:
                draw_hline(dst, x0, x1, yy, color)
