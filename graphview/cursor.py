from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any

from graphview.canvas import Canvas
from graphview.events import PointerEvent
from graphview.series import DataPoint, Series
from graphview.styles import CursorStyles

if TYPE_CHECKING:
    from graphview.graph_view import GraphView


class CursorMode:
    """Vertical cursor line that follows the pointer and shows, per series,
    the value of the data point closest to it in x."""

    def __init__(self, graph: GraphView, styles: CursorStyles | None = None) -> None:
        self._graph = graph
        self.styles = styles or CursorStyles()
        self._pos_x: float | None = None
        self._pos_y: float | None = None

    def set_styles(self, **changes: Any) -> "CursorMode":
        self.styles = replace(self.styles, **changes)
        return self

    @property
    def position(self) -> tuple[float, float] | None:
        if self._pos_x is None or self._pos_y is None:
            return None
        return (self._pos_x, self._pos_y)

    def on_touch_event(self, event: PointerEvent) -> bool:
        if event.event_type in ("pointer_down", "pointer_move"):
            rect = self._graph.graph_content_rect()
            self._pos_x = min(max(event.x, rect.left), rect.right)
            self._pos_y = min(max(event.y, rect.top), rect.bottom)
            self._select_points()
            return True
        return event.event_type in ("pointer_up", "pointer_cancel")

    def _select_points(self) -> None:
        if self._pos_x is None or self._pos_y is None:
            return
        rect = self._graph.graph_content_rect()
        data_x = self._graph.viewport.map_pixel_to_data(self._pos_x, self._pos_y, rect).x
        for series in self._all_series():
            series.select_cursor_point(data_x)

    def _all_series(self) -> list[Series]:
        out = list(self._graph.series)
        if self._graph.second_scale is not None:
            out.extend(self._graph.second_scale.series)
        return out

    def selected_values(self) -> list[tuple[Series, DataPoint]]:
        return [(s, s.cursor_point) for s in self._all_series() if s.cursor_point is not None]

    def _text_rows(self) -> list[str]:
        selected = self.selected_values()
        if not selected:
            return []
        grid = self._graph.grid_label_renderer
        second = self._graph.second_scale
        rows = [grid.horizontal_label_formatter(selected[0][1].x, True)]
        primary = self._graph.series
        for i, (series, point) in enumerate(selected):
            if second is not None and series not in primary:
                label = second.label_formatter(point.y, False)
            else:
                label = grid.vertical_label_formatter(point.y, False)
            rows.append(f"{series.title or f'series {i + 1}'}: {label}")
        return rows

    def draw(self, canvas: Canvas) -> None:
        if self._pos_x is None or self._pos_y is None:
            return
        st = self.styles
        rect = self._graph.graph_content_rect()
        canvas.draw_line(self._pos_x, rect.top, self._pos_x, rect.bottom, st.line_color, st.line_width)

        rows = self._text_rows()
        if not rows:
            return
        sizes = [canvas.text_size(row, font_size_px=st.text_size) for row in rows]
        box_w = max(w for w, _ in sizes) + 2 * st.padding
        box_h = sum(h for _, h in sizes) + (len(rows) + 1) * st.padding
        left = self._pos_x + st.padding
        if left + box_w > rect.right:
            left = self._pos_x - st.padding - box_w
        top = max(rect.top, min(self._pos_y - box_h / 2.0, rect.bottom - box_h))
        canvas.draw_rect(left, top, left + box_w, top + box_h, st.box_color)
        y = top + st.padding
        for row, (_, h) in zip(rows, sizes, strict=True):
            canvas.draw_text(left + st.padding, y, row, st.text_color, font_size_px=st.text_size)
            y += h + st.padding
