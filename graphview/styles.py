from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


RGBA = tuple[int, int, int, int]

DEFAULT_TEXT_COLOR: RGBA = (208, 218, 232, 255)
DEFAULT_SERIES_COLOR: RGBA = (0, 119, 204, 255)
DEFAULT_FONT_SIZE_PX = 12.0

TAP_MAX_DURATION_S = 0.4
TAP_MAX_MOVE_PX = 60.0
TAP_SEARCH_RADIUS_PX = 120.0
WHEEL_ZOOM_STEP = 1.1

GridStyle = Literal["both", "horizontal", "vertical", "none"]


@dataclass(frozen=True)
class GraphStyles:
    title_text_size: float = 14.0
    title_color: RGBA = DEFAULT_TEXT_COLOR
    background: RGBA = (12, 16, 23, 255)


@dataclass(frozen=True)
class GridLabelStyles:
    text_size: float = DEFAULT_FONT_SIZE_PX
    horizontal_labels_color: RGBA = DEFAULT_TEXT_COLOR
    vertical_labels_color: RGBA = DEFAULT_TEXT_COLOR
    vertical_labels_second_scale_color: RGBA = DEFAULT_TEXT_COLOR
    grid_color: RGBA = (44, 53, 66, 255)
    grid_style: GridStyle = "both"
    horizontal_labels_visible: bool = True
    vertical_labels_visible: bool = True
    num_horizontal_labels: int = 5
    num_vertical_labels: int = 5
    padding: int = 8
    label_gap: int = 4
    horizontal_axis_title: str | None = None
    vertical_axis_title: str | None = None
    horizontal_axis_title_color: RGBA = DEFAULT_TEXT_COLOR
    vertical_axis_title_color: RGBA = DEFAULT_TEXT_COLOR
    axis_title_text_size: float = DEFAULT_FONT_SIZE_PX


@dataclass(frozen=True)
class ViewportStyles:
    background_color: RGBA | None = (20, 26, 36, 255)
    draw_border: bool = True
    border_color: RGBA = (124, 138, 156, 255)


@dataclass(frozen=True)
class CursorStyles:
    line_color: RGBA = (255, 255, 255, 200)
    line_width: int = 1
    text_size: float = DEFAULT_FONT_SIZE_PX
    text_color: RGBA = DEFAULT_TEXT_COLOR
    box_color: RGBA = (10, 14, 20, 170)
    padding: int = 4
