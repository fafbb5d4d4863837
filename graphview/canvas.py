from __future__ import annotations

from typing import Literal, Protocol

from graphview.styles import RGBA


TextAlign = Literal["left", "center", "right"]


class Canvas(Protocol):
    """Drawing capability the chart renders into.

    Coordinates are pixels with the origin in the top-left corner and y growing
    downward. Text is anchored at its top edge; `align` picks which horizontal
    edge of the text box sits on `x`.
    """

    @property
    def width(self) -> int:
        ...

    @property
    def height(self) -> int:
        ...

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, color: RGBA, width: int = 1) -> None:
        ...

    def draw_rect(self, x0: float, y0: float, x1: float, y1: float, color: RGBA, *, fill: bool = True) -> None:
        ...

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
        ...

    def text_size(self, text: str, *, font_size_px: float, rotate_deg: int = 0) -> tuple[int, int]:
        ...
