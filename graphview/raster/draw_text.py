from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Iterator

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from graphview.raster.canvas import blend_coverage
from graphview.styles import DEFAULT_FONT_SIZE_PX, RGBA


DEFAULT_FONT_FAMILY = "DejaVu Sans"
FONT_FALLBACK_PATTERNS = ("dejavusans", "liberationsans", "helvetica", "arial")
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    rotate_deg: int = 0,
) -> None:
    """Blend `text` with its top-left corner at (x, y)."""
    if not text:
        return
    turns = _quarter_turns(rotate_deg)
    mask = _glyph_mask(text, _load_font(font_family, font_size_px))
    if turns:
        mask = np.rot90(mask, k=turns)
    blend_coverage(dst, x, y, mask.astype(np.float32) / 255.0, color)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    rotate_deg: int = 0,
) -> tuple[int, int]:
    """Pixel (width, height) of `text` after rotation; empty text keeps a line height."""
    font = _load_font(font_family, font_size_px)
    left, top, right, bottom = font.getbbox(text or "Ag")
    size = (0 if not text else max(0, int(right - left)), max(1, int(bottom - top)))
    if _quarter_turns(rotate_deg) % 2 == 1:
        return (size[1], size[0])
    return size


def _quarter_turns(rotate_deg: int) -> int:
    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    return (rotate_deg // 90) % 4


@lru_cache(maxsize=256)
def _glyph_mask(text: str, font: Font) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> Font:
    path = _find_font_file(font_family)
    if path is not None:
        try:
            return ImageFont.truetype(str(path), size=max(1, int(round(font_size_px))))
        except OSError:
            pass
    return ImageFont.load_default()


def _installed_fonts() -> Iterator[Path]:
    for base in FONT_DIRS:
        if base.is_dir():
            yield from base.rglob("*.ttf")
            yield from base.rglob("*.otf")


@lru_cache(maxsize=16)
def _find_font_file(font_family: str) -> Path | None:
    by_stem = {path.stem.lower().replace(" ", "").replace("-", ""): path for path in _installed_fonts()}
    wanted = font_family.lower().replace(" ", "") or DEFAULT_FONT_FAMILY.lower().replace(" ", "")
    for pattern in (wanted, *FONT_FALLBACK_PATTERNS):
        if pattern in by_stem:
            return by_stem[pattern]
        for stem in sorted(by_stem):
            if stem.startswith(pattern):
                return by_stem[stem]
    return None
