from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any, Callable, Iterator

import numpy as np

from graphview.adapters import normalize_points
from graphview.canvas import Canvas
from graphview.scales import DataBounds, bounds_of, build_transform, clip_segment, map_to_pixels
from graphview.styles import DEFAULT_SERIES_COLOR, RGBA, TAP_SEARCH_RADIUS_PX

if TYPE_CHECKING:
    from graphview.graph_view import GraphView


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataPoint:
    x: float
    y: float


OnDataPointTapListener = Callable[["Series", DataPoint], None]


class Series(ABC):
    """Ordered (x, y) data rendered as one trace.

    Data is held as float64 arrays. Readers get copies; the only ways to change
    the data are `reset_data` and `append_data`, which notify every attached
    chart so it can recompute its ranges. A chart in log scale mode refuses
    both for its primary series.
    """

    def __init__(self, data: Any = None, *, title: str | None = None, color: RGBA = DEFAULT_SERIES_COLOR) -> None:
        self.title = title
        self.color = color
        self._x, self._y = normalize_points(data)
        self._graphs: list[GraphView] = []
        self._on_tap_listener: OnDataPointTapListener | None = None
        self._drawn_px = np.empty(0, dtype=np.float64)
        self._drawn_py = np.empty(0, dtype=np.float64)
        self._drawn_idx = np.empty(0, dtype=np.int64)
        self._cursor_point: DataPoint | None = None

    def __len__(self) -> int:
        return int(self._x.size)

    def is_empty(self) -> bool:
        return self.bounds() is None

    def points(self) -> tuple[DataPoint, ...]:
        return tuple(DataPoint(x=x, y=y) for x, y in zip(self._x.tolist(), self._y.tolist(), strict=True))

    def x_values(self) -> np.ndarray:
        return self._x.copy()

    def y_values(self) -> np.ndarray:
        return self._y.copy()

    def bounds(self) -> DataBounds | None:
        return bounds_of(self._x, self._y)

    @property
    def lowest_value_x(self) -> float:
        b = self.bounds()
        return 0.0 if b is None else b.min_x

    @property
    def highest_value_x(self) -> float:
        b = self.bounds()
        return 0.0 if b is None else b.max_x

    @property
    def lowest_value_y(self) -> float:
        b = self.bounds()
        return 0.0 if b is None else b.min_y

    @property
    def highest_value_y(self) -> float:
        b = self.bounds()
        return 0.0 if b is None else b.max_y

    def get_values(self, from_x: float, until_x: float) -> Iterator[DataPoint]:
        """Yield the points with `from_x <= x <= until_x`, plus the closest
        neighbour outside each edge so a line can be drawn up to the border."""
        window = self._window_slice(from_x, until_x)
        for x, y in zip(self._x[window].tolist(), self._y[window].tolist(), strict=True):
            yield DataPoint(x=x, y=y)

    def _window_slice(self, from_x: float, until_x: float) -> slice:
        x = self._x
        if x.size == 0:
            return slice(0, 0)
        inside = np.flatnonzero((x >= from_x) & (x <= until_x))
        if inside.size > 0:
            return slice(max(0, int(inside[0]) - 1), min(x.size, int(inside[-1]) + 2))
        before = np.flatnonzero(x < from_x)
        after = np.flatnonzero(x > until_x)
        if before.size == 0 or after.size == 0 or int(before[-1]) > int(after[0]):
            return slice(0, 0)
        return slice(int(before[-1]), int(after[0]) + 1)

    def reset_data(self, data: Any, *, notify: bool = True) -> None:
        self._check_writable("reset_data")
        self._x, self._y = normalize_points(data)
        self._clear_interaction_caches()
        if notify:
            self._notify_data_changed()

    def append_data(
        self,
        point: DataPoint,
        *,
        scroll_to_end: bool = False,
        max_data_points: int | None = None,
    ) -> None:
        if max_data_points is not None and max_data_points <= 0:
            raise ValueError("max_data_points must be > 0")
        self._check_writable("append_data")
        if self._x.size > 0 and float(point.x) < float(self._x[-1]):
            LOGGER.debug("appended x=%s is below the last x=%s", point.x, self._x[-1])
        self._x = np.append(self._x, float(point.x))
        self._y = np.append(self._y, float(point.y))
        if max_data_points is not None and self._x.size > max_data_points:
            self._x = self._x[-max_data_points:].copy()
            self._y = self._y[-max_data_points:].copy()
        self._clear_interaction_caches()
        for graph in list(self._graphs):
            graph.on_data_changed(keep_label_sizes=True, keep_viewport=False)
            if scroll_to_end:
                graph.viewport.scroll_to_end()

    def on_graph_view_attached(self, graph: GraphView) -> None:
        if graph not in self._graphs:
            self._graphs.append(graph)

    def on_graph_view_detached(self, graph: GraphView) -> None:
        if graph in self._graphs:
            self._graphs.remove(graph)

    def _check_writable(self, op: str) -> None:
        for graph in self._graphs:
            graph.check_series_writable(self, op)

    def _notify_data_changed(self) -> None:
        for graph in list(self._graphs):
            graph.on_data_changed(keep_label_sizes=True, keep_viewport=False)

    def set_on_data_point_tap_listener(self, listener: OnDataPointTapListener | None) -> None:
        self._on_tap_listener = listener

    def on_tap(self, x: float, y: float) -> DataPoint | None:
        if self._on_tap_listener is None:
            return None
        point = self.find_data_point(x, y)
        if point is not None:
            self._on_tap_listener(self, point)
        return point

    def find_data_point(self, px: float, py: float, radius: float = TAP_SEARCH_RADIUS_PX) -> DataPoint | None:
        """Closest point drawn in the last frame within `radius` pixels."""
        if self._drawn_idx.size == 0:
            return None
        dist = np.hypot(self._drawn_px - float(px), self._drawn_py - float(py))
        best = int(np.argmin(dist))
        if dist[best] >= radius:
            return None
        idx = int(self._drawn_idx[best])
        return DataPoint(x=float(self._x[idx]), y=float(self._y[idx]))

    def find_data_point_at_x(self, x: float) -> DataPoint | None:
        mask = np.isfinite(self._x) & np.isfinite(self._y)
        if not np.any(mask):
            return None
        candidates = np.flatnonzero(mask)
        best = int(candidates[np.argmin(np.abs(self._x[candidates] - float(x)))])
        return DataPoint(x=float(self._x[best]), y=float(self._y[best]))

    @property
    def cursor_point(self) -> DataPoint | None:
        return self._cursor_point

    def select_cursor_point(self, x: float) -> DataPoint | None:
        self._cursor_point = self.find_data_point_at_x(x)
        return self._cursor_point

    def clear_cursor_mode_cache(self) -> None:
        self._cursor_point = None

    def _clear_interaction_caches(self) -> None:
        self._drawn_px = np.empty(0, dtype=np.float64)
        self._drawn_py = np.empty(0, dtype=np.float64)
        self._drawn_idx = np.empty(0, dtype=np.int64)
        self.clear_cursor_mode_cache()

    def _register_drawn_points(self, px: np.ndarray, py: np.ndarray, indices: np.ndarray) -> None:
        self._drawn_px = px.astype(np.float64, copy=True)
        self._drawn_py = py.astype(np.float64, copy=True)
        self._drawn_idx = indices.astype(np.int64, copy=True)

    @abstractmethod
    def draw(self, graph: GraphView, canvas: Canvas, is_second_scale: bool) -> None:
        raise NotImplementedError


class LineGraphSeries(Series):
    def __init__(
        self,
        data: Any = None,
        *,
        title: str | None = None,
        color: RGBA = DEFAULT_SERIES_COLOR,
        thickness: int = 2,
        draw_data_points: bool = False,
        data_points_radius: int = 3,
    ) -> None:
        if thickness <= 0:
            raise ValueError("thickness must be > 0")
        super().__init__(data, title=title, color=color)
        self.thickness = thickness
        self.draw_data_points = draw_data_points
        self.data_points_radius = max(0, int(data_points_radius))

    def draw(self, graph: GraphView, canvas: Canvas, is_second_scale: bool) -> None:
        bounds = graph.bounds_for(is_second_scale)
        rect = graph.graph_content_rect()
        window = self._window_slice(bounds.min_x, bounds.max_x)
        indices = np.arange(self._x.size, dtype=np.int64)[window]
        x = self._x[window]
        y = self._y[window]
        finite = np.isfinite(x) & np.isfinite(y)
        px, py = map_to_pixels(x, y, build_transform(bounds, rect))

        # Non-finite samples break the line into separate runs.
        for i in range(px.size - 1):
            if not (finite[i] and finite[i + 1]):
                continue
            clipped = clip_segment(float(px[i]), float(py[i]), float(px[i + 1]), float(py[i + 1]), rect)
            if clipped is None:
                continue
            canvas.draw_line(*clipped, self.color, self.thickness)

        visible = finite & (px >= rect.left) & (px <= rect.right) & (py >= rect.top) & (py <= rect.bottom)
        self._register_drawn_points(px[visible], py[visible], indices[visible])
        if self.draw_data_points:
            r = self.data_points_radius
            for cx, cy in zip(px[visible].tolist(), py[visible].tolist(), strict=True):
                canvas.draw_rect(cx - r, cy - r, cx + r, cy + r, self.color)


class BarGraphSeries(Series):
    def __init__(
        self,
        data: Any = None,
        *,
        title: str | None = None,
        color: RGBA = DEFAULT_SERIES_COLOR,
        spacing: int = 20,
    ) -> None:
        super().__init__(data, title=title, color=color)
        self.set_spacing(spacing)

    def set_spacing(self, spacing: int) -> None:
        """Gap between neighbouring bars as a percentage of the slot width."""
        if spacing < 0 or spacing > 100:
            raise ValueError("spacing must be in [0, 100]")
        self.spacing = int(spacing)

    def _slot_width(self) -> float | None:
        xs = np.unique(self._x[np.isfinite(self._x)])
        if xs.size < 2:
            return None
        diffs = np.diff(xs)
        positive = diffs[diffs > 1e-12]
        return float(np.min(positive)) if positive.size else None

    def draw(self, graph: GraphView, canvas: Canvas, is_second_scale: bool) -> None:
        bounds = graph.bounds_for(is_second_scale)
        rect = graph.graph_content_rect()
        transform = build_transform(bounds, rect)
        inside = (self._x >= bounds.min_x) & (self._x <= bounds.max_x) & np.isfinite(self._y)
        indices = np.flatnonzero(inside)
        if indices.size == 0:
            self._register_drawn_points(np.empty(0), np.empty(0), indices)
            return

        slot = self._slot_width()
        slot_px = rect.width / max(1, indices.size) if slot is None or transform.sx == 0 else slot * transform.sx
        bar_w = max(1.0, slot_px * (1.0 - self.spacing / 100.0))

        baseline = min(max(0.0, bounds.min_y), bounds.max_y)
        _, base_py = map_to_pixels(np.asarray([0.0]), np.asarray([baseline]), transform)
        py0 = float(base_py[0])

        px, py = map_to_pixels(self._x[indices], self._y[indices], transform)
        py = np.clip(py, rect.top, rect.bottom)
        for cx, cy in zip(px.tolist(), py.tolist(), strict=True):
            left = max(rect.left, cx - bar_w / 2.0)
            right = min(rect.right, cx + bar_w / 2.0)
            if right <= left:
                continue
            canvas.draw_rect(left, cy, right, py0, self.color)
        self._register_drawn_points(px, py, indices)
