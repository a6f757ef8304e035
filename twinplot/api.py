from __future__ import annotations

from io import BytesIO

from twinplot.chart import Chart
from twinplot.raster import raster_renderer_provider
from twinplot.renderer import RendererProvider


def render_png(chart: Chart, provider: RendererProvider | None = None) -> bytes:
    sink = BytesIO()
    chart.render(sink, provider if provider is not None else raster_renderer_provider)
    return sink.getvalue()
