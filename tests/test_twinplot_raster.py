from __future__ import annotations

from io import BytesIO
import logging
from pathlib import Path
import unittest
from unittest import mock

import numpy as np
from PIL import Image

from twinplot import fonts
from twinplot.errors import SurfaceError
from twinplot.fonts import BUNDLED_FONT_FAMILY, ChartFont
from twinplot.raster import (
    RasterRenderer,
    draw_disc,
    draw_polyline,
    draw_ring,
    draw_text,
    fill_polygon,
    new_canvas,
    text_size,
)


RED = (255, 0, 0, 255)
BUNDLED = ChartFont(family=BUNDLED_FONT_FAMILY)


class RasterPrimitiveTests(unittest.TestCase):
    def test_polyline_hits_endpoints(self) -> None:
        canvas = new_canvas(20, 20, color=(0, 0, 0, 0))
        draw_polyline(canvas, [(2, 3), (17, 12)], RED)
        self.assertEqual(tuple(canvas[3, 2]), RED)
        self.assertEqual(tuple(canvas[12, 17]), RED)

    def test_translucent_polyline_blends_joints_once(self) -> None:
        canvas = new_canvas(10, 10, color=(0, 0, 0, 255))
        draw_polyline(canvas, [(0, 5), (5, 5), (5, 0)], (255, 0, 0, 128))
        self.assertEqual(tuple(canvas[5, 5]), tuple(canvas[5, 2]))
        self.assertEqual(tuple(canvas[2, 5]), tuple(canvas[5, 2]))
        self.assertAlmostEqual(int(canvas[5, 2, 0]), 128, delta=1)

    def test_wide_polyline_clips_at_canvas_edge(self) -> None:
        canvas = new_canvas(10, 10, color=(0, 0, 0, 0))
        draw_polyline(canvas, [(0, 0), (9, 0)], RED, width=3)
        self.assertTrue((canvas[0:2, :, 3] == 255).all())
        self.assertEqual(int(canvas[2, :, 3].sum()), 0)

    def test_polygon_fill_is_half_open(self) -> None:
        canvas = new_canvas(10, 10, color=(0, 0, 0, 0))
        fill_polygon(canvas, [2, 6, 6, 2], [2, 2, 5, 5], RED)
        filled = canvas[:, :, 3] > 0
        self.assertEqual(int(filled.sum()), 4 * 3)
        self.assertTrue(filled[2, 2])
        self.assertFalse(filled[5, 6])

    def test_ring_leaves_center_empty(self) -> None:
        canvas = new_canvas(20, 20, color=(0, 0, 0, 0))
        draw_ring(canvas, 10, 10, 5.0, RED)
        self.assertEqual(int(canvas[10, 10, 3]), 0)
        self.assertEqual(tuple(canvas[10, 15]), RED)

    def test_disc_fills_center(self) -> None:
        canvas = new_canvas(20, 20, color=(0, 0, 0, 0))
        draw_disc(canvas, 10, 10, 3.0, RED)
        self.assertEqual(tuple(canvas[10, 10]), RED)
        self.assertEqual(int(canvas[10, 14, 3]), 0)

    def test_text_is_antialiased_and_rotation_swaps_size(self) -> None:
        font = BUNDLED.load(24)
        canvas = new_canvas(200, 60, color=(0, 0, 0, 0))
        draw_text(canvas, 5, 5, "Throughput", (255, 255, 255, 255), font)
        chan = canvas[:, :, 3]
        self.assertTrue(np.any((chan > 0) & (chan < 255)))
        self.assertEqual(int(canvas[59, 199, 3]), 0)
        w0, h0 = text_size("value", font)
        w1, h1 = text_size("value", font, rotate_deg=90)
        self.assertEqual((w0, h0), (h1, w1))


class RasterRendererTests(unittest.TestCase):
    def test_invalid_dimensions_and_dpi(self) -> None:
        with self.assertRaises(SurfaceError):
            RasterRenderer(0, 10)
        r = RasterRenderer(10, 10)
        with self.assertRaises(SurfaceError):
            r.set_dpi(0)

    def test_fill_stroke_path(self) -> None:
        r = RasterRenderer(10, 10)
        r.set_fill_color(RED)
        r.set_stroke_color((0, 0, 255, 255))
        r.set_stroke_width(1.0)
        r.move_to(0, 0)
        r.line_to(10, 0)
        r.line_to(10, 10)
        r.line_to(0, 10)
        r.close()
        r.fill_stroke()
        rgba = r.to_rgba()
        self.assertEqual(tuple(rgba[5, 5]), RED)
        self.assertEqual(tuple(rgba[0, 5]), (0, 0, 255, 255))

    def test_transparent_stroke_draws_nothing(self) -> None:
        r = RasterRenderer(10, 10)
        r.set_stroke_width(1.0)
        r.move_to(0, 5)
        r.line_to(9, 5)
        r.stroke()
        self.assertFalse(np.any(r.to_rgba()[:, :, 3]))

    def test_font_size_scales_with_dpi(self) -> None:
        r = RasterRenderer(100, 100, dpi=72.0)
        r.set_font(BUNDLED)
        r.set_font_size(20.0)
        small = r.measure_text("Mg")
        r.set_dpi(144.0)
        large = r.measure_text("Mg")
        self.assertGreater(large.height, small.height)

    def test_text_baseline_positioning(self) -> None:
        r = RasterRenderer(120, 40)
        r.set_font(BUNDLED)
        r.set_font_size(12.0)
        r.set_font_color((255, 255, 255, 255))
        r.text("HI", 10, 30)
        alpha = r.to_rgba()[:, :, 3]
        rows = np.flatnonzero(alpha.any(axis=1))
        self.assertLessEqual(int(rows.max()), 30)

    def test_save_writes_png(self) -> None:
        r = RasterRenderer(16, 8)
        sink = BytesIO()
        r.save(sink)
        with Image.open(BytesIO(sink.getvalue())) as img:
            self.assertEqual(img.size, (16, 8))
            self.assertEqual(img.mode, "RGBA")


class FontTests(unittest.TestCase):
    def test_from_file_requires_existing_file(self) -> None:
        with self.assertRaises(ValueError):
            ChartFont.from_file("/nonexistent/font.ttf")

    def test_default_font_falls_back_with_warning(self) -> None:
        cache = fonts._DefaultFontCache()
        with mock.patch("twinplot.fonts.resolve_font_path", return_value=None):
            with self.assertLogs("twinplot.fonts", level=logging.WARNING):
                font = cache.get()
        self.assertEqual(font, ChartFont(family=BUNDLED_FONT_FAMILY))
        self.assertIs(cache.get(), font)

    def test_default_font_resolved_once(self) -> None:
        cache = fonts._DefaultFontCache()
        with mock.patch("twinplot.fonts.resolve_font_path", return_value=Path("/fonts/Test.ttf")) as resolve:
            first = cache.get()
            second = cache.get()
        self.assertIs(first, second)
        self.assertEqual(resolve.call_count, 1)
        self.assertEqual(first.family, "Test")
        cache.reset()
        with mock.patch("twinplot.fonts.resolve_font_path", return_value=None):
            self.assertEqual(cache.get().family, BUNDLED_FONT_FAMILY)

    def test_unloadable_font_file_uses_bundled_font(self) -> None:
        font = ChartFont(family="broken", path=Path("/nonexistent/broken.ttf"))
        with self.assertLogs("twinplot.fonts", level=logging.WARNING):
            loaded = font.load(13.0)
        self.assertIsNotNone(loaded)


if __name__ == "__main__":
    unittest.main()
