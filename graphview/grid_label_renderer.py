from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any, Callable

import numpy as np

from graphview.canvas import Canvas
from graphview.label_formatter import DefaultLabelFormatter, LabelFormatter
from graphview.raster.draw_text import text_size
from graphview.scales import DataBounds, PixelRect, build_transform, generate_nice_ticks, map_to_pixels
from graphview.styles import GridLabelStyles

if TYPE_CHECKING:
    from graphview.graph_view import GraphView
    from graphview.second_scale import SecondScale


TextMeasurer = Callable[..., tuple[int, int]]


class GridLabelRenderer:
    """Computes tick values and labels for both axes and draws grid and labels.

    Label sizes are measured once and reused until `invalidate` is called with
    `keep_label_sizes=False`, which keeps the content rect stable while data
    streams in.
    """

    def __init__(self, styles: GridLabelStyles | None = None, *, text_measurer: TextMeasurer = text_size) -> None:
        self.styles = styles or GridLabelStyles()
        self._measure = text_measurer
        self._horizontal_formatter: LabelFormatter = DefaultLabelFormatter()
        self._vertical_formatter: LabelFormatter = DefaultLabelFormatter()
        self._label_vertical_width: int | None = None
        self._label_horizontal_height: int | None = None
        self._label_second_scale_width: int | None = None
        self._tick_cache: dict[tuple[str, float, float, int], np.ndarray] = {}

    # -- configuration ----------------------------------------------------

    def set_styles(self, **changes: Any) -> "GridLabelRenderer":
        self.styles = replace(self.styles, **changes)
        self.invalidate(keep_label_sizes=False, keep_viewport=False)
        return self

    @property
    def horizontal_label_formatter(self) -> LabelFormatter:
        return self._horizontal_formatter

    @property
    def vertical_label_formatter(self) -> LabelFormatter:
        return self._vertical_formatter

    def set_horizontal_label_formatter(self, formatter: LabelFormatter) -> "GridLabelRenderer":
        self._horizontal_formatter = formatter
        self.invalidate(keep_label_sizes=False, keep_viewport=True)
        return self

    def set_vertical_label_formatter(self, formatter: LabelFormatter) -> "GridLabelRenderer":
        self._vertical_formatter = formatter
        self.invalidate(keep_label_sizes=False, keep_viewport=True)
        return self

    def set_label_formatter(self, formatter: LabelFormatter) -> "GridLabelRenderer":
        self.set_horizontal_label_formatter(formatter)
        return self.set_vertical_label_formatter(formatter)

    def invalidate(self, keep_label_sizes: bool, keep_viewport: bool) -> None:
        if not keep_label_sizes:
            self._label_vertical_width = None
            self._label_horizontal_height = None
            self._label_second_scale_width = None
        if not keep_viewport:
            self._tick_cache.clear()

    # -- ticks & labels ---------------------------------------------------

    def _ticks(self, axis: str, vmin: float, vmax: float, target: int) -> np.ndarray:
        key = (axis, float(vmin), float(vmax), int(target))
        ticks = self._tick_cache.get(key)
        if ticks is None:
            ticks = generate_nice_ticks(vmin, vmax, target)
            self._tick_cache[key] = ticks
        return ticks

    def horizontal_ticks(self, bounds: DataBounds) -> np.ndarray:
        return self._ticks("x", bounds.min_x, bounds.max_x, self.styles.num_horizontal_labels)

    def vertical_ticks(self, bounds: DataBounds) -> np.ndarray:
        return self._ticks("y", bounds.min_y, bounds.max_y, self.styles.num_vertical_labels)

    def second_scale_ticks(self, second: SecondScale) -> np.ndarray:
        return self._ticks("y2", second.min_y, second.max_y, self.styles.num_vertical_labels)

    def horizontal_labels(self, bounds: DataBounds) -> list[tuple[float, str]]:
        return [(v, self._horizontal_formatter(v, True)) for v in self.horizontal_ticks(bounds).tolist()]

    def vertical_labels(self, bounds: DataBounds) -> list[tuple[float, str]]:
        return [(v, self._vertical_formatter(v, False)) for v in self.vertical_ticks(bounds).tolist()]

    def second_scale_labels(self, second: SecondScale) -> list[tuple[float, str]]:
        return [(v, second.label_formatter(v, False)) for v in self.second_scale_ticks(second).tolist()]

    # -- layout -----------------------------------------------------------

    def _max_width(self, labels: list[tuple[float, str]]) -> int:
        return max((self._measure(text, font_size_px=self.styles.text_size)[0] for _, text in labels), default=0)

    def label_vertical_width(self, graph: GraphView) -> int:
        if not self.styles.vertical_labels_visible:
            return 0
        if self._label_vertical_width is None:
            self._label_vertical_width = self._max_width(self.vertical_labels(graph.viewport.bounds))
        return self._label_vertical_width

    def label_vertical_second_scale_width(self, graph: GraphView) -> int:
        second = graph.second_scale
        if second is None or not self.styles.vertical_labels_visible:
            return 0
        if self._label_second_scale_width is None:
            self._label_second_scale_width = self._max_width(self.second_scale_labels(second))
        return self._label_second_scale_width

    def label_horizontal_height(self, graph: GraphView) -> int:
        if not self.styles.horizontal_labels_visible:
            return 0
        if self._label_horizontal_height is None:
            labels = self.horizontal_labels(graph.viewport.bounds)
            self._label_horizontal_height = max(
                (self._measure(text, font_size_px=self.styles.text_size)[1] for _, text in labels),
                default=0,
            )
        return self._label_horizontal_height

    def vertical_axis_title_width(self) -> int:
        title = self.styles.vertical_axis_title
        if not title:
            return 0
        return self._measure(title, font_size_px=self.styles.axis_title_text_size, rotate_deg=90)[0] + self.styles.label_gap

    def horizontal_axis_title_height(self) -> int:
        title = self.styles.horizontal_axis_title
        if not title:
            return 0
        return self._measure(title, font_size_px=self.styles.axis_title_text_size)[1] + self.styles.label_gap

    # -- drawing ----------------------------------------------------------

    def draw(self, canvas: Canvas, graph: GraphView, rect: PixelRect) -> None:
        st = self.styles
        bounds = graph.viewport.bounds
        transform = build_transform(bounds, rect)

        x_labels = self.horizontal_labels(bounds)
        y_labels = self.vertical_labels(bounds)
        px, _ = map_to_pixels(np.asarray([v for v, _ in x_labels]), np.zeros(len(x_labels)), transform)
        _, py = map_to_pixels(np.zeros(len(y_labels)), np.asarray([v for v, _ in y_labels]), transform)

        if st.grid_style in ("both", "horizontal"):
            for y in py.tolist():
                canvas.draw_line(rect.left, y, rect.right, y, st.grid_color)
        if st.grid_style in ("both", "vertical"):
            for x in px.tolist():
                canvas.draw_line(x, rect.top, x, rect.bottom, st.grid_color)

        if st.vertical_labels_visible:
            for y, (_, text) in zip(py.tolist(), y_labels, strict=True):
                _, h = canvas.text_size(text, font_size_px=st.text_size)
                canvas.draw_text(
                    rect.left - st.label_gap,
                    y - h / 2.0,
                    text,
                    st.vertical_labels_color,
                    font_size_px=st.text_size,
                    align="right",
                )
        if st.horizontal_labels_visible:
            for x, (_, text) in zip(px.tolist(), x_labels, strict=True):
                canvas.draw_text(
                    x,
                    rect.bottom + st.label_gap,
                    text,
                    st.horizontal_labels_color,
                    font_size_px=st.text_size,
                    align="center",
                )

        second = graph.second_scale
        if second is not None and st.vertical_labels_visible:
            self._draw_second_scale_labels(canvas, second, rect)
        self._draw_axis_titles(canvas, graph, rect)

    def _draw_second_scale_labels(self, canvas: Canvas, second: SecondScale, rect: PixelRect) -> None:
        st = self.styles
        labels = self.second_scale_labels(second)
        bounds = DataBounds(min_x=0.0, max_x=1.0, min_y=second.min_y, max_y=second.max_y)
        _, py = map_to_pixels(np.zeros(len(labels)), np.asarray([v for v, _ in labels]), build_transform(bounds, rect))
        for y, (_, text) in zip(py.tolist(), labels, strict=True):
            _, h = canvas.text_size(text, font_size_px=st.text_size)
            canvas.draw_text(
                rect.right + st.label_gap,
                y - h / 2.0,
                text,
                st.vertical_labels_second_scale_color,
                font_size_px=st.text_size,
            )
        if second.vertical_axis_title:
            w, h = canvas.text_size(second.vertical_axis_title, font_size_px=second.vertical_axis_title_text_size, rotate_deg=270)
            canvas.draw_text(
                canvas.width - st.padding - w,
                rect.top + (rect.height - h) / 2.0,
                second.vertical_axis_title,
                second.vertical_axis_title_color,
                font_size_px=second.vertical_axis_title_text_size,
                rotate_deg=270,
            )

    def _draw_axis_titles(self, canvas: Canvas, graph: GraphView, rect: PixelRect) -> None:
        st = self.styles
        if st.vertical_axis_title:
            _, h = canvas.text_size(st.vertical_axis_title, font_size_px=st.axis_title_text_size, rotate_deg=90)
            canvas.draw_text(
                st.padding,
                rect.top + (rect.height - h) / 2.0,
                st.vertical_axis_title,
                st.vertical_axis_title_color,
                font_size_px=st.axis_title_text_size,
                rotate_deg=90,
            )
        if st.horizontal_axis_title:
            canvas.draw_text(
                rect.left + rect.width / 2.0,
                rect.bottom + st.label_gap + self.label_horizontal_height(graph) + st.label_gap,
                st.horizontal_axis_title,
                st.horizontal_axis_title_color,
                font_size_px=st.axis_title_text_size,
                align="center",
            )
