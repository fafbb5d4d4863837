from __future__ import annotations

from typing import TYPE_CHECKING

from graphview.label_formatter import DefaultLabelFormatter, LabelFormatter
from graphview.series import Series
from graphview.styles import DEFAULT_FONT_SIZE_PX, DEFAULT_TEXT_COLOR, RGBA
from graphview.viewport import union_of_series

if TYPE_CHECKING:
    from graphview.graph_view import GraphView


class SecondScale:
    """Independent Y range with its own series, drawn on the right-hand side.

    The X range is shared with the primary viewport.
    """

    def __init__(self, graph: GraphView) -> None:
        self._graph = graph
        self._series: list[Series] = []
        self._min_y = 0.0
        self._max_y = 0.0
        self._y_manual = False
        self.label_formatter: LabelFormatter = DefaultLabelFormatter()
        self.vertical_axis_title: str | None = None
        self.vertical_axis_title_text_size = DEFAULT_FONT_SIZE_PX
        self.vertical_axis_title_color: RGBA = DEFAULT_TEXT_COLOR

    @property
    def series(self) -> tuple[Series, ...]:
        return tuple(self._series)

    def add_series(self, series: Series) -> None:
        series.on_graph_view_attached(self._graph)
        self._series.append(series)
        self._graph.on_data_changed(keep_label_sizes=False, keep_viewport=False)

    def remove_series(self, series: Series) -> None:
        if series in self._series:
            self._series.remove(series)
            series.on_graph_view_detached(self._graph)
        self._graph.on_data_changed(keep_label_sizes=False, keep_viewport=False)

    def remove_all_series(self) -> None:
        for series in self._series:
            series.on_graph_view_detached(self._graph)
        self._series.clear()
        self._graph.on_data_changed(keep_label_sizes=False, keep_viewport=False)

    @property
    def min_y(self) -> float:
        return self._min_y

    @property
    def max_y(self) -> float:
        return self._max_y

    def is_y_axis_bounds_manual(self) -> bool:
        return self._y_manual

    def set_min_y(self, value: float) -> "SecondScale":
        self._min_y = float(value)
        return self

    def set_max_y(self, value: float) -> "SecondScale":
        self._max_y = float(value)
        return self

    def set_manual_y_axis_bounds(self, enabled: bool, min_y: float | None = None, max_y: float | None = None) -> "SecondScale":
        self._y_manual = bool(enabled)
        if not self._y_manual:
            self.calc_complete_range()
            return self
        if min_y is not None:
            self._min_y = float(min_y)
        if max_y is not None:
            self._max_y = float(max_y)
        return self

    def calc_complete_range(self) -> None:
        if self._y_manual:
            return
        bounds = union_of_series(self._series)
        if bounds is None:
            self._min_y = 0.0
            self._max_y = 0.0
            return
        self._min_y = bounds.min_y
        self._max_y = bounds.max_y

    def set_label_formatter(self, formatter: LabelFormatter) -> "SecondScale":
        self.label_formatter = formatter
        return self
