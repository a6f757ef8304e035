from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from twinplot import draw
from twinplot.axis import YAxisKind
from twinplot.defaults import (
    DEFAULT_ANNOTATION_FILL_COLOR,
    DEFAULT_ANNOTATION_FONT_SIZE,
    DEFAULT_ANNOTATION_PADDING,
    DEFAULT_TEXT_COLOR,
)
from twinplot.errors import ChartConfigError
from twinplot.geometry import Box
from twinplot.ranges import Range
from twinplot.renderer import Renderer
from twinplot.style import Padding, Style


@dataclass(frozen=True)
class Annotation:
    x: float
    y: float
    label: str
    style: Style = field(default_factory=Style)


@dataclass
class AnnotationSeries:
    """Callout labels pinned to data coordinates.

    Annotations do not contribute to range resolution; the layout reserves room
    for their labels through `measure`.
    """

    annotations: Sequence[Annotation] = ()
    name: str = ""
    style: Style = field(default_factory=Style)
    y_axis: YAxisKind = "primary"

    def validate(self) -> None:
        if not self.annotations:
            raise ChartConfigError(f"annotation series {self.name!r} has no annotations")
        for a in self.annotations:
            if not a.label:
                raise ChartConfigError(f"annotation series {self.name!r}: annotation at ({a.x}, {a.y}) has an empty label")

    def _defaults(self, defaults: Style) -> Style:
        return Style(
            font=defaults.font,
            font_color=DEFAULT_TEXT_COLOR,
            font_size=DEFAULT_ANNOTATION_FONT_SIZE,
            fill_color=DEFAULT_ANNOTATION_FILL_COLOR,
            stroke_color=defaults.stroke_color,
            stroke_width=defaults.stroke_width,
            padding=Padding.uniform(DEFAULT_ANNOTATION_PADDING),
        )

    def _visible(self) -> list[Annotation]:
        return [a for a in self.annotations if a.style.is_shown()]

    def measure(self, r: Renderer, canvas_box: Box, xrange: Range, yrange: Range, defaults: Style) -> Box | None:
        """Box enclosing every visible callout, or None when nothing is shown."""
        if not self.style.is_shown():
            return None
        base = self.style.inherit_from(self._defaults(defaults))
        footprint: Box | None = None
        for a in self._visible():
            lx = canvas_box.left + xrange.translate(a.x)
            ly = canvas_box.bottom - yrange.translate(a.y)
            ab = draw.measure_annotation(r, a.style.inherit_from(base), lx, ly, a.label)
            footprint = ab if footprint is None else footprint.grow(ab)
        return footprint

    def render(self, r: Renderer, canvas_box: Box, xrange: Range, yrange: Range, defaults: Style) -> None:
        if not self.style.is_shown():
            return
        base = self.style.inherit_from(self._defaults(defaults))
        for a in self._visible():
            lx = canvas_box.left + xrange.translate(a.x)
            ly = canvas_box.bottom - yrange.translate(a.y)
            draw.annotation(r, a.style.inherit_from(base), lx, ly, a.label)
