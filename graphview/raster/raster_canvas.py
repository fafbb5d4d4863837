from __future__ import annotations

import numpy as np

from graphview.canvas import TextAlign
from graphview.raster.canvas import fill_rect, new_canvas, stroke_rect
from graphview.raster.draw_lines import draw_line
from graphview.raster.draw_text import DEFAULT_FONT_FAMILY, draw_text, text_size
from graphview.styles import RGBA


class RasterCanvas:
    """In-memory RGBA canvas backed by a numpy array of shape (H, W, 4)."""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        background: RGBA = (0, 0, 0, 255),
        font_family: str = DEFAULT_FONT_FAMILY,
    ) -> None:
        self._rgba = new_canvas(width, height, color=background)
        self._font_family = font_family

    @property
    def width(self) -> int:
        return int(self._rgba.shape[1])

    @property
    def height(self) -> int:
        return int(self._rgba.shape[0])

    def clear(self, color: RGBA) -> None:
        self._rgba[:, :] = np.asarray(color, dtype=np.uint8)

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, color: RGBA, width: int = 1) -> None:
        if not np.all(np.isfinite([x0, y0, x1, y1])):
            return
        draw_line(
            self._rgba,
            int(round(x0)),
            int(round(y0)),
            int(round(x1)),
            int(round(y1)),
            color=color,
            width=max(1, int(width)),
        )

    def draw_rect(self, x0: float, y0: float, x1: float, y1: float, color: RGBA, *, fill: bool = True) -> None:
        if not np.all(np.isfinite([x0, y0, x1, y1])):
            return
        coords = (int(round(x0)), int(round(y0)), int(round(x1)), int(round(y1)))
        if fill:
            fill_rect(self._rgba, *coords, color)
        else:
            stroke_rect(self._rgba, *coords, color)

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        color: RGBA,
        *,
        font_size_px: float,
        align: TextAlign = "left",
        rotate_deg: int = 0,
    ) -> None:
        if not text:
            return
        w, _ = self.text_size(text, font_size_px=font_size_px, rotate_deg=rotate_deg)
        left = float(x)
        if align == "center":
            left -= w / 2.0
        elif align == "right":
            left -= w
        draw_text(
            self._rgba,
            int(round(left)),
            int(round(y)),
            text,
            color,
            font_family=self._font_family,
            font_size_px=font_size_px,
            rotate_deg=rotate_deg,
        )

    def text_size(self, text: str, *, font_size_px: float, rotate_deg: int = 0) -> tuple[int, int]:
        return text_size(text, font_family=self._font_family, font_size_px=font_size_px, rotate_deg=rotate_deg)

    def to_rgba(self) -> np.ndarray:
        return self._rgba.copy()
