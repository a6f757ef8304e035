from .canvas import blend_mask, draw_hline, fill_polygon, new_canvas
from .draw_lines import draw_polyline
from .draw_markers import draw_disc, draw_ring
from .draw_text import draw_text, text_size
from .renderer import RasterRenderer, raster_renderer_provider

__all__ = [
    "RasterRenderer",
    "blend_mask",
    "draw_disc",
    "draw_hline",
    "draw_polyline",
    "draw_ring",
    "draw_text",
    "fill_polygon",
    "new_canvas",
    "raster_renderer_provider",
    "text_size",
]
