from __future__ import annotations

import numpy as np

from graphview.raster.canvas import blend_coverage
from graphview.scales import PixelRect, clip_segment
from graphview.styles import RGBA


def draw_line(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int = 1) -> None:
    """Draw a Bresenham line stamped with a square brush of `width` pixels.

    The covered pixels are collected into one mask first, so overlapping brush
    stamps do not blend a translucent color twice.
    """
    r = max(0, width // 2)
    h, w = dst.shape[:2]
    clipped = clip_segment(x0, y0, x1, y1, PixelRect(left=-r - 1, top=-r - 1, width=w + 2 * r + 2, height=h + 2 * r + 2))
    if clipped is None:
        return
    x0, y0, x1, y1 = (int(round(v)) for v in clipped)

    left, top = min(x0, x1) - r, min(y0, y1) - r
    mask = np.zeros((abs(y1 - y0) + 2 * r + 1, abs(x1 - x0) + 2 * r + 1), dtype=np.float32)
    for x, y in _bresenham(x0, y0, x1, y1):
        mask[y - top - r : y - top + r + 1, x - left - r : x - left + r + 1] = 1.0
    blend_coverage(dst, left, top, mask, color)


def _bresenham(x0: int, y0: int, x1: int, y1: int) -> list[tuple[int, int]]:
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    points = [(x0, y0)]
    while (x0, y0) != (x1, y1):
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
        points.append((x0, y0))
    return points
