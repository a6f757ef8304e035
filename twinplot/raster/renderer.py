from __future__ import annotations

from typing import BinaryIO

import numpy as np
from PIL import Image

from twinplot.defaults import DEFAULT_DPI, DEFAULT_FONT_SIZE
from twinplot.errors import SurfaceError
from twinplot.fonts import ChartFont, PillowFont, get_default_font
from twinplot.geometry import Box
from twinplot.raster.canvas import RGBA, fill_polygon, new_canvas
from twinplot.raster.draw_lines import draw_polyline
from twinplot.raster.draw_markers import draw_disc, draw_ring
from twinplot.raster.draw_text import draw_text, text_size


class RasterRenderer:
    """RGBA numpy surface serialized to PNG through Pillow."""

    def __init__(self, width: int, height: int, dpi: float = DEFAULT_DPI) -> None:
        if width <= 0 or height <= 0:
            raise SurfaceError(f"invalid surface size {width}x{height}: width and height must be > 0")
        self.width = int(width)
        self.height = int(height)
        self._canvas = new_canvas(self.width, self.height, color=(0, 0, 0, 0))
        self._dpi = float(dpi)
        self._paths: list[list[tuple[int, int]]] = []
        self._circles: list[tuple[float, int, int]] = []
        self.reset_style()

    def reset_style(self) -> None:
        self._stroke_color: RGBA = (0, 0, 0, 0)
        self._fill_color: RGBA = (0, 0, 0, 0)
        self._stroke_width = 0.0
        self._font: ChartFont | None = None
        self._font_size = DEFAULT_FONT_SIZE
        self._font_color: RGBA = (0, 0, 0, 255)
        self._text_rotation = 0

    def get_dpi(self) -> float:
        return self._dpi

    def set_dpi(self, dpi: float) -> None:
        if dpi <= 0:
            raise SurfaceError("dpi must be > 0")
        self._dpi = float(dpi)

    def set_stroke_color(self, color: RGBA) -> None:
        self._stroke_color = color

    def set_fill_color(self, color: RGBA) -> None:
        self._fill_color = color

    def set_stroke_width(self, width: float) -> None:
        self._stroke_width = float(width)

    def move_to(self, x: int, y: int) -> None:
        self._paths.append([(int(x), int(y))])

    def line_to(self, x: int, y: int) -> None:
        if not self._paths:
            self._paths.append([])
        self._paths[-1].append((int(x), int(y)))

    def close(self) -> None:
        if self._paths and len(self._paths[-1]) > 1:
            self._paths[-1].append(self._paths[-1][0])

    def circle(self, radius: float, x: int, y: int) -> None:
        self._circles.append((float(radius), int(x), int(y)))

    def stroke(self) -> None:
        self._stroke_paths()
        self._clear_path()

    def fill(self) -> None:
        self._fill_paths()
        self._clear_path()

    def fill_stroke(self) -> None:
        self._fill_paths()
        self._stroke_paths()
        self._clear_path()

    def set_font(self, font: ChartFont) -> None:
        self._font = font

    def set_font_size(self, size: float) -> None:
        self._font_size = float(size)

    def set_font_color(self, color: RGBA) -> None:
        self._font_color = color

    def set_text_rotation(self, degrees: int) -> None:
        self._text_rotation = int(degrees)

    def clear_text_rotation(self) -> None:
        self._text_rotation = 0

    def text(self, body: str, x: int, y: int) -> None:
        font = self._pillow_font()
        _, h = text_size(body, font, rotate_deg=self._text_rotation)
        draw_text(self._canvas, int(x), int(y) - h, body, self._font_color, font, rotate_deg=self._text_rotation)

    def measure_text(self, body: str) -> Box:
        w, h = text_size(body, self._pillow_font(), rotate_deg=self._text_rotation)
        return Box(top=0, left=0, right=w, bottom=h)

    def save(self, sink: BinaryIO) -> None:
        Image.fromarray(np.ascontiguousarray(self._canvas)).save(sink, format="PNG")

    def to_rgba(self) -> np.ndarray:
        return self._canvas.copy()

    def _pillow_font(self) -> PillowFont:
        font = self._font if self._font is not None else get_default_font()
        return font.load(self._font_size * self._dpi / 72.0)

    def _stroke_paths(self) -> None:
        width = int(round(self._stroke_width))
        if width <= 0 or self._stroke_color[3] == 0:
            return
        for path in self._paths:
            draw_polyline(self._canvas, path, self._stroke_color, width=width)
        for radius, x, y in self._circles:
            draw_ring(self._canvas, x, y, radius, self._stroke_color)

    def _fill_paths(self) -> None:
        if self._fill_color[3] == 0:
            return
        for path in self._paths:
            fill_polygon(self._canvas, [p[0] for p in path], [p[1] for p in path], self._fill_color)
        for radius, x, y in self._circles:
            draw_disc(self._canvas, x, y, radius, self._fill_color)

    def _clear_path(self) -> None:
        self._paths = []
        self._circles = []


def raster_renderer_provider(width: int, height: int) -> RasterRenderer:
    return RasterRenderer(width, height)
