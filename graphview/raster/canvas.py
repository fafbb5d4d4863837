from __future__ import annotations

import numpy as np

from graphview.styles import RGBA


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def blend_coverage(dst: np.ndarray, x: int, y: int, coverage: np.ndarray, color: RGBA) -> None:
    """Composite `color` over `dst` with per-pixel `coverage` in [0, 1], the
    coverage array's top-left corner placed at (x, y). Out-of-canvas parts are
    dropped."""
    h, w = coverage.shape
    x0, y0 = max(0, x), max(0, y)
    x1, y1 = min(dst.shape[1], x + w), min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return
    src_a = coverage[y0 - y : y1 - y, x0 - x : x1 - x] * (color[3] / 255.0)
    if not np.any(src_a > 0):
        return
    patch = dst[y0:y1, x0:x1]
    dst_a = patch[:, :, 3].astype(np.float32) / 255.0
    out_a = src_a + dst_a * (1.0 - src_a)
    src_rgb = np.asarray(color[:3], dtype=np.float32)
    num = src_rgb * src_a[:, :, None] + patch[:, :, :3].astype(np.float32) * (dst_a * (1.0 - src_a))[:, :, None]
    safe_a = np.where(out_a > 1e-6, out_a, 1.0)
    patch[:, :, :3] = np.clip(np.rint(num / safe_a[:, :, None]), 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(np.rint(out_a * 255.0), 0, 255).astype(np.uint8)


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Fill the rectangle spanned by both corners, inclusive."""
    left, right = max(0, min(x0, x1)), min(dst.shape[1] - 1, max(x0, x1))
    top, bottom = max(0, min(y0, y1)), min(dst.shape[0] - 1, max(y0, y1))
    if right < left or bottom < top:
        return
    blend_coverage(dst, left, top, np.ones((bottom - top + 1, right - left + 1), dtype=np.float32), color)

def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    fill_rect(dst, x0, y, x1, y, color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    fill_rect(dst, x, y0, x, y1, color)


def stroke_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    left, right = sorted((x0, x1))
    top, bottom = sorted((y0, y1))
    draw_hline(dst, left, right, top, color)
    draw_hline(dst, left, right, bottom, color)
    if bottom - top > 1:
        draw_vline(dst, left, top + 1, bottom - 1, color)
        draw_vline(dst, right, top + 1, bottom - 1, color)
