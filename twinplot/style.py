from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, TypeVar

from twinplot.defaults import DEFAULT_SERIES_COLORS

if TYPE_CHECKING:
    from twinplot.fonts import ChartFont
    from twinplot.renderer import Renderer


RGBA = tuple[int, int, int, int]
T = TypeVar("T")


def merge(override: T | None, fallback: T | None) -> T | None:
    """Return `override` unless it is unset, in which case `fallback` wins."""

    return fallback if override is None else override


def get_default_color(index: int) -> RGBA:
    return DEFAULT_SERIES_COLORS[index % len(DEFAULT_SERIES_COLORS)]


def _visible(color: RGBA | None) -> bool:
    return color is not None and color[3] > 0


@dataclass(frozen=True)
class Padding:
    top: int | None = None
    left: int | None = None
    right: int | None = None
    bottom: int | None = None

    @classmethod
    def uniform(cls, value: int) -> "Padding":
        return cls(top=value, left=value, right=value, bottom=value)

    def is_zero(self) -> bool:
        return self.top is None and self.left is None and self.right is None and self.bottom is None

    def get_top(self, default: int = 0) -> int:
        return int(merge(self.top, default))

    def get_left(self, default: int = 0) -> int:
        return int(merge(self.left, default))

    def get_right(self, default: int = 0) -> int:
        return int(merge(self.right, default))

    def get_bottom(self, default: int = 0) -> int:
        return int(merge(self.bottom, default))

    def inherit_from(self, defaults: "Padding | None") -> "Padding":
        if defaults is None:
            return self
        return Padding(
            top=merge(self.top, defaults.top),
            left=merge(self.left, defaults.left),
            right=merge(self.right, defaults.right),
            bottom=merge(self.bottom, defaults.bottom),
        )


@dataclass(frozen=True)
class Style:
    """Optional visual attributes; `None` means "use the default for this role"."""

    show: bool | None = None
    padding: Padding | None = None
    stroke_width: float | None = None
    stroke_color: RGBA | None = None
    fill_color: RGBA | None = None
    dot_width: float | None = None
    dot_color: RGBA | None = None
    font: "ChartFont | None" = None
    font_size: float | None = None
    font_color: RGBA | None = None

    def is_zero(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def is_shown(self) -> bool:
        return self.is_zero() or bool(self.show)

    def inherit_from(self, defaults: "Style | None") -> "Style":
        if defaults is None:
            return self
        padding = self.padding.inherit_from(defaults.padding) if self.padding is not None else defaults.padding
        return Style(
            show=merge(self.show, defaults.show),
            padding=padding,
            stroke_width=merge(self.stroke_width, defaults.stroke_width),
            stroke_color=merge(self.stroke_color, defaults.stroke_color),
            fill_color=merge(self.fill_color, defaults.fill_color),
            dot_width=merge(self.dot_width, defaults.dot_width),
            dot_color=merge(self.dot_color, defaults.dot_color),
            font=merge(self.font, defaults.font),
            font_size=merge(self.font_size, defaults.font_size),
            font_color=merge(self.font_color, defaults.font_color),
        )

    def get_padding(self) -> Padding:
        return self.padding if self.padding is not None else Padding()

    def get_stroke_width(self, default: float = 0.0) -> float:
        return float(merge(self.stroke_width, default))

    def get_stroke_color(self, default: RGBA = (0, 0, 0, 0)) -> RGBA:
        return merge(self.stroke_color, default)

    def get_fill_color(self, default: RGBA = (0, 0, 0, 0)) -> RGBA:
        return merge(self.fill_color, default)

    def get_dot_width(self, default: float = 0.0) -> float:
        return float(merge(self.dot_width, default))

    def get_dot_color(self, default: RGBA = (0, 0, 0, 0)) -> RGBA:
        return merge(self.dot_color, default)

    def get_font_size(self, default: float = 0.0) -> float:
        return float(merge(self.font_size, default))

    def get_font_color(self, default: RGBA = (0, 0, 0, 0)) -> RGBA:
        return merge(self.font_color, default)

    def should_draw_stroke(self) -> bool:
        return _visible(self.stroke_color) and self.get_stroke_width() > 0

    def should_draw_fill(self) -> bool:
        return _visible(self.fill_color)

    def should_draw_dot(self) -> bool:
        return (_visible(self.dot_color) or _visible(self.stroke_color)) and self.get_dot_width() > 0

    def write_stroke_to_renderer(self, r: "Renderer") -> None:
        r.set_stroke_color(self.get_stroke_color())
        r.set_stroke_width(self.get_stroke_width())

    def write_fill_to_renderer(self, r: "Renderer") -> None:
        r.set_fill_color(self.get_fill_color())

    def write_dot_to_renderer(self, r: "Renderer") -> None:
        color = self.get_dot_color(self.get_stroke_color())
        r.set_fill_color(color)
        r.set_stroke_color(color)
        r.set_stroke_width(self.get_stroke_width())

    def write_text_to_renderer(self, r: "Renderer") -> None:
        if self.font is not None:
            r.set_font(self.font)
        r.set_font_size(self.get_font_size())
        r.set_font_color(self.get_font_color())

    def write_to_renderer(self, r: "Renderer") -> None:
        self.write_stroke_to_renderer(r)
        self.write_fill_to_renderer(r)
        self.write_text_to_renderer(r)
