from __future__ import annotations

from io import BytesIO
import unittest

import numpy as np
from PIL import Image

from recording_renderer import RecordingProvider, RecordingRenderer

from twinplot import (
    Annotation,
    AnnotationSeries,
    BandSeries,
    BarSeries,
    Chart,
    ChartConfigError,
    ChartFont,
    ContinuousSeries,
    LayoutError,
    Range,
    RangeError,
    Style,
    SurfaceError,
    Tick,
    XAxis,
    YAxis,
    legend,
    render_png,
)
from twinplot.defaults import DEFAULT_BACKGROUND_COLOR, DEFAULT_CANVAS_COLOR, DEFAULT_SERIES_COLORS
from twinplot.geometry import Box


TEST_FONT = ChartFont(family="recording")
SHOWN = Style(show=True)


class _FailingSink:
    def write(self, data: bytes) -> int:
        raise OSError("disk full")


def _index(calls, predicate) -> int:
    for i, call in enumerate(calls):
        if predicate(call):
            return i
    raise AssertionError("call not found")


class ChartConfigurationTests(unittest.TestCase):
    def test_defaults_and_box(self) -> None:
        chart = Chart()
        self.assertEqual(chart.get_width(), 1024)
        self.assertEqual(chart.get_height(), 400)
        self.assertEqual(chart.get_dpi(), 92.0)
        self.assertEqual(chart.box(), Box(top=5, left=5, right=1019, bottom=395))

    def test_font_falls_back_to_process_default(self) -> None:
        self.assertIs(Chart(font=TEST_FONT).get_font(), TEST_FONT)


class RenderPipelineTests(unittest.TestCase):
    def _chart(self, **kwargs) -> Chart:
        kwargs.setdefault("font", TEST_FONT)
        kwargs.setdefault("width", 400)
        kwargs.setdefault("height", 300)
        return Chart(**kwargs)

    def test_no_series_is_config_error_without_output(self) -> None:
        provider = RecordingProvider()
        sink = BytesIO()
        with self.assertRaises(ChartConfigError):
            self._chart().render(sink, provider)
        self.assertIsNone(provider.last)
        self.assertEqual(sink.getvalue(), b"")

    def test_invalid_series_is_config_error_without_output(self) -> None:
        s = ContinuousSeries(x_values=[0, 1, 2], y_values=[1, 2, 3])
        s.y_values = np.array([1.0, 2.0])
        provider = RecordingProvider()
        with self.assertRaises(ChartConfigError):
            self._chart(series=[s]).render(BytesIO(), provider)
        self.assertIsNone(provider.last)

    def test_range_error_after_background_written(self) -> None:
        provider = RecordingProvider()
        sink = BytesIO()
        chart = self._chart(series=[ContinuousSeries(x_values=[0, 1, 2], y_values=[5, 5, 5])])
        with self.assertRaises(RangeError) as ctx:
            chart.render(sink, provider)
        self.assertEqual(ctx.exception.axis, "y")
        self.assertEqual(provider.last.saved, 1)
        self.assertNotEqual(sink.getvalue(), b"")
        fills = [c for c in provider.last.calls if c[0] == "set_fill_color"]
        self.assertEqual(fills, [("set_fill_color", DEFAULT_BACKGROUND_COLOR)])

    def test_draw_order(self) -> None:
        provider = RecordingProvider()

        def overlay(r, canvas_box, defaults):
            r.text("overlay", canvas_box.left, canvas_box.top)

        chart = self._chart(
            title="Load",
            title_style=SHOWN,
            x_axis=XAxis(style=SHOWN, ticks=[Tick(0.0, "x-lo"), Tick(10.0, "x-hi")]),
            y_axis=YAxis(style=SHOWN),
            series=[ContinuousSeries(x_values=[0, 5, 10], y_values=[1, 9, 4])],
            elements=[overlay],
        )
        chart.render(BytesIO(), provider)
        calls = provider.last.calls

        background = _index(calls, lambda c: c == ("set_fill_color", DEFAULT_BACKGROUND_COLOR))
        canvas = _index(calls, lambda c: c == ("set_fill_color", DEFAULT_CANVAS_COLOR))
        axis_label = _index(calls, lambda c: c[0] == "text" and c[1] == "x-lo")
        series = _index(calls, lambda c: c == ("set_stroke_color", DEFAULT_SERIES_COLORS[0]))
        title = _index(calls, lambda c: c[0] == "text" and c[1] == "Load")
        element = _index(calls, lambda c: c[0] == "text" and c[1] == "overlay")
        self.assertLess(background, canvas)
        self.assertLess(canvas, axis_label)
        self.assertLess(axis_label, series)
        self.assertLess(series, title)
        self.assertLess(title, element)
        self.assertEqual(calls[-1][0], "text")
        self.assertEqual(provider.last.saved, 1)

    def test_title_centered_below_top_padding(self) -> None:
        provider = RecordingProvider()
        chart = self._chart(
            title="Title",
            title_style=SHOWN,
            series=[ContinuousSeries(x_values=[0, 1], y_values=[0, 10])],
        )
        chart.render(BytesIO(), provider)
        self.assertIn(("Title", 200 - 15, 10 + 10), provider.last.texts)

    def test_title_hidden_unless_shown(self) -> None:
        provider = RecordingProvider()
        self._chart(title="Title", series=[ContinuousSeries(x_values=[0, 1], y_values=[0, 10])]).render(
            BytesIO(), provider
        )
        self.assertNotIn("Title", [t[0] for t in provider.last.texts])

    def test_dpi_applied_to_surface(self) -> None:
        provider = RecordingProvider()
        self._chart(dpi=144.0, series=[ContinuousSeries(x_values=[0, 1], y_values=[0, 10])]).render(
            BytesIO(), provider
        )
        self.assertEqual(provider.last.get_dpi(), 144.0)

    def test_secondary_only_series_renders(self) -> None:
        provider = RecordingProvider()
        chart = self._chart(
            y_axis=YAxis(style=SHOWN),
            y_axis_secondary=YAxis(style=SHOWN, kind="primary"),
            series=[ContinuousSeries(x_values=[0, 1, 2], y_values=[10, 20, 35], y_axis="secondary")],
        )
        chart.render(BytesIO(), provider)
        self.assertEqual(provider.last.saved, 1)
        self.assertEqual(chart.y_axis_secondary.kind, "primary")
        # Secondary labels sit left of the canvas.
        labels = [t for t in provider.last.texts if t[0] == "35"]
        self.assertTrue(labels)
        self.assertLess(labels[0][1], 200)

    def test_caller_ranges_untouched(self) -> None:
        explicit = Range(min=0.0, max=50.0)
        chart = self._chart(
            y_axis=YAxis(range=explicit),
            series=[ContinuousSeries(x_values=[0, 1], y_values=[0, 10])],
        )
        chart.render(BytesIO(), RecordingProvider())
        self.assertEqual(explicit.domain, 0)

    def test_degenerate_explicit_secondary_axis_is_range_error(self) -> None:
        for y_axis_secondary in (
            YAxis(kind="secondary", style=SHOWN, range=Range(min=5.0, max=5.0)),
            YAxis(kind="secondary", style=SHOWN, ticks=[Tick(5.0, "5")]),
        ):
            provider = RecordingProvider()
            chart = self._chart(
                y_axis_secondary=y_axis_secondary,
                series=[ContinuousSeries(x_values=[0, 1], y_values=[0, 100])],
            )
            with self.assertRaises(RangeError) as ctx:
                chart.render(BytesIO(), provider)
            self.assertEqual(ctx.exception.axis, "y-secondary")
            self.assertEqual(provider.last.saved, 1)

    def test_collapsed_canvas_is_layout_error(self) -> None:
        provider = RecordingProvider()
        chart = self._chart(width=8, height=8, series=[ContinuousSeries(x_values=[0, 1], y_values=[0, 100])])
        with self.assertRaises(LayoutError):
            chart.render(BytesIO(), provider)
        self.assertEqual(provider.last.saved, 0)

    def test_serialization_failure_propagates(self) -> None:
        chart = self._chart(series=[ContinuousSeries(x_values=[0, 1], y_values=[0, 10])])
        with self.assertRaises(OSError):
            chart.render(_FailingSink(), RecordingProvider())

    def test_every_series_kind_renders_with_legend(self) -> None:
        provider = RecordingProvider()
        chart = self._chart(
            series=[
                ContinuousSeries(x_values=[0, 1, 2], y_values=[1, 4, 2], name="line"),
                BarSeries(x_values=[0, 1, 2], y_values=[2, 3, 1], name="bars"),
                BandSeries(x_values=[0, 1, 2], y_low=[0, 1, 0], y_high=[3, 5, 4], name="band"),
                AnnotationSeries(annotations=[Annotation(x=1.0, y=4.0, label="max")], name="notes"),
            ],
        )
        chart.elements = [legend(chart)]
        chart.render(BytesIO(), provider)
        bodies = [t[0] for t in provider.last.texts]
        for name in ("line", "bars", "band", "max"):
            self.assertIn(name, bodies)
        self.assertNotIn("notes", bodies)


class RasterEndToEndTests(unittest.TestCase):
    def _chart(self) -> Chart:
        return Chart(
            width=320,
            height=200,
            title="Throughput",
            title_style=SHOWN,
            x_axis=XAxis(style=SHOWN, name="time", name_style=SHOWN),
            y_axis=YAxis(style=SHOWN, grid_major_style=SHOWN),
            y_axis_secondary=YAxis(style=SHOWN),
            series=[
                ContinuousSeries(x_values=[0, 1, 2, 3], y_values=[10, 40, 25, 60], style=Style(show=True, dot_width=2.0)),
                ContinuousSeries(x_values=[0, 1, 2, 3], y_values=[0.1, 0.3, 0.2, 0.5], y_axis="secondary"),
            ],
        )

    def test_render_is_deterministic_png(self) -> None:
        first = render_png(self._chart())
        second = render_png(self._chart())
        self.assertTrue(first.startswith(b"\x89PNG"))
        self.assertEqual(first, second)
        with Image.open(BytesIO(first)) as img:
            self.assertEqual(img.size, (320, 200))

    def test_invalid_surface_size(self) -> None:
        with self.assertRaises(SurfaceError):
            render_png(Chart(width=-1, series=[ContinuousSeries(x_values=[0, 1], y_values=[0, 1])]))


if __name__ == "__main__":
    unittest.main()
