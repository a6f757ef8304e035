from __future__ import annotations

import numpy as np

from twinplot.raster.canvas import RGBA, draw_hline


def draw_disc(dst: np.ndarray, x: int, y: int, radius: float, color: RGBA) -> None:
    r = max(0, int(round(radius)))
    for dy in range(-r, r + 1):
        half = int((r * r - dy * dy) ** 0.5)
        draw_hline(dst, x - half, x + half, y + dy, color)


def draw_ring(dst: np.ndarray, x: int, y: int, radius: float, color: RGBA) -> None:
    r = max(0, int(round(radius)))
    inner = r - 1
    for dy in range(-r, r + 1):
        outer_half = int((r * r - dy * dy) ** 0.5)
        if inner < 0 or abs(dy) > inner:
            draw_hline(dst, x - outer_half, x + outer_half, y + dy, color)
            continue
        inner_half = int((inner * inner - dy * dy) ** 0.5)
        if inner_half >= outer_half:
            continue
        draw_hline(dst, x - outer_half, x - inner_half - 1, y + dy, color)
        draw_hline(dst, x + inner_half + 1, x + outer_half, y + dy, color)
