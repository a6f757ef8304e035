from __future__ import annotations

import unittest

from twinplot.geometry import Box
from twinplot.ranges import Range
from twinplot.style import Padding, Style, get_default_color, merge
from twinplot.defaults import DEFAULT_SERIES_COLORS


class BoxTests(unittest.TestCase):
    def test_width_height_and_center(self) -> None:
        b = Box(top=10, left=20, right=120, bottom=60)
        self.assertEqual(b.width, 100)
        self.assertEqual(b.height, 50)
        self.assertEqual(b.center(), (70, 35))

    def test_grow_encloses_both_boxes(self) -> None:
        a = Box(top=10, left=10, right=50, bottom=50)
        b = Box(top=0, left=30, right=80, bottom=40)
        self.assertEqual(a.grow(b), Box(top=0, left=10, right=80, bottom=50))

    def test_outer_constrain_shrinks_by_spill(self) -> None:
        bounds = Box(top=5, left=5, right=95, bottom=95)
        other = Box(top=0, left=2, right=100, bottom=95)
        self.assertEqual(bounds.outer_constrain(bounds, other), Box(top=10, left=8, right=90, bottom=95))

    def test_outer_constrain_is_noop_when_inside(self) -> None:
        bounds = Box(top=0, left=0, right=100, bottom=100)
        canvas = Box(top=10, left=10, right=90, bottom=90)
        self.assertEqual(canvas.outer_constrain(bounds, Box(top=5, left=5, right=95, bottom=95)), canvas)

    def test_shift(self) -> None:
        self.assertEqual(Box(top=1, left=2, right=3, bottom=4).shift(10, 20), Box(top=21, left=12, right=13, bottom=24))


class RangeTests(unittest.TestCase):
    def test_unresolved_until_both_bounds_set(self) -> None:
        ra = Range()
        self.assertTrue(ra.is_zero())
        ra.set_min(0)
        self.assertTrue(ra.is_zero())
        self.assertEqual(ra.delta, 0.0)
        ra.set_max(10)
        self.assertFalse(ra.is_zero())
        self.assertEqual(ra.delta, 10.0)

    def test_translate_maps_onto_domain(self) -> None:
        ra = Range(min=0.0, max=10.0, domain=100)
        self.assertEqual(ra.translate(0.0), 0)
        self.assertEqual(ra.translate(5.0), 50)
        self.assertEqual(ra.translate(10.0), 100)

    def test_translate_descending_flips(self) -> None:
        ra = Range(min=0.0, max=10.0, domain=100, descending=True)
        self.assertEqual(ra.translate(2.5), 75)
        self.assertEqual(ra.translate(10.0), 0)

    def test_translate_unresolved_raises(self) -> None:
        with self.assertRaises(ValueError):
            Range(max=1.0).translate(0.5)

    def test_copy_is_independent(self) -> None:
        ra = Range(min=1.0, max=2.0)
        cp = ra.copy()
        cp.set_domain(50)
        self.assertEqual(ra.domain, 0)


class StyleTests(unittest.TestCase):
    def test_merge_prefers_override(self) -> None:
        self.assertEqual(merge(3, 5), 3)
        self.assertEqual(merge(None, 5), 5)
        self.assertEqual(merge(0, 5), 0)

    def test_inherit_from_fills_unset_fields_only(self) -> None:
        style = Style(stroke_width=3.0, padding=Padding(top=1))
        defaults = Style(stroke_width=1.0, stroke_color=(1, 2, 3, 255), padding=Padding.uniform(7))
        merged = style.inherit_from(defaults)
        self.assertEqual(merged.stroke_width, 3.0)
        self.assertEqual(merged.stroke_color, (1, 2, 3, 255))
        self.assertEqual(merged.padding, Padding(top=1, left=7, right=7, bottom=7))

    def test_zero_style_is_shown_but_explicit_hide_is_not(self) -> None:
        self.assertTrue(Style().is_zero())
        self.assertTrue(Style().is_shown())
        self.assertFalse(Style(show=False).is_shown())
        self.assertFalse(Style(stroke_width=2.0).is_shown())
        self.assertTrue(Style(show=True, stroke_width=2.0).is_shown())

    def test_should_draw_requires_visible_color(self) -> None:
        self.assertFalse(Style(stroke_width=1.0).should_draw_stroke())
        self.assertFalse(Style(stroke_width=1.0, stroke_color=(1, 1, 1, 0)).should_draw_stroke())
        self.assertTrue(Style(stroke_width=1.0, stroke_color=(1, 1, 1, 255)).should_draw_stroke())
        self.assertFalse(Style(fill_color=None).should_draw_fill())

    def test_default_palette_wraps(self) -> None:
        n = len(DEFAULT_SERIES_COLORS)
        self.assertEqual(get_default_color(0), get_default_color(n))


if __name__ == "__main__":
    unittest.main()
