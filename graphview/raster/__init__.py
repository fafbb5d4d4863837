from .canvas import blend_coverage, draw_hline, draw_vline, fill_rect, new_canvas, stroke_rect
from .draw_lines import draw_line
from .draw_text import draw_text, text_size
from .raster_canvas import RasterCanvas

__all__ = [
    "RasterCanvas",
    "blend_coverage",
    "draw_hline",
    "draw_line",
    "draw_text",
    "draw_vline",
    "fill_rect",
    "new_canvas",
    "stroke_rect",
    "text_size",
]
