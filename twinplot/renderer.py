from __future__ import annotations

from typing import BinaryIO, Callable, Protocol

from twinplot.fonts import ChartFont
from twinplot.geometry import Box
from twinplot.style import RGBA


class Renderer(Protocol):
    """Drawing surface the chart paints onto.

    Paths are built with `move_to`/`line_to` and consumed by `stroke`, `fill`
    or `fill_stroke`. Text is positioned by its left edge and baseline.
    """

    def reset_style(self) -> None:
        ...

    def get_dpi(self) -> float:
        ...

    def set_dpi(self, dpi: float) -> None:
        ...

    def set_stroke_color(self, color: RGBA) -> None:
        ...

    def set_fill_color(self, color: RGBA) -> None:
        ...

    def set_stroke_width(self, width: float) -> None:
        ...

    def move_to(self, x: int, y: int) -> None:
        ...

    def line_to(self, x: int, y: int) -> None:
        ...

    def close(self) -> None:
        ...

    def stroke(self) -> None:
        ...

    def fill(self) -> None:
        ...

    def fill_stroke(self) -> None:
        ...

    def circle(self, radius: float, x: int, y: int) -> None:
        ...

    def set_font(self, font: ChartFont) -> None:
        ...

    def set_font_size(self, size: float) -> None:
        ...

    def set_font_color(self, color: RGBA) -> None:
        ...

    def set_text_rotation(self, degrees: int) -> None:
        ...

    def clear_text_rotation(self) -> None:
        ...

    def text(self, body: str, x: int, y: int) -> None:
        ...

    def measure_text(self, body: str) -> Box:
        ...

    def save(self, sink: BinaryIO) -> None:
        ...


RendererProvider = Callable[[int, int], Renderer]
