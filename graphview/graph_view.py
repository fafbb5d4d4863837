from __future__ import annotations

from dataclasses import replace
import logging
from typing import Any, Protocol

from graphview.canvas import Canvas
from graphview.cursor import CursorMode
from graphview.errors import GraphViewError, InvalidStateError, MissingBackupState
from graphview.events import PointerEvent
from graphview.gestures import GestureTracker, TapDetector
from graphview.grid_label_renderer import GridLabelRenderer, TextMeasurer
from graphview.label_formatter import DefaultLabelFormatter, LogLabelFormatter
from graphview.log_scale import LogScaleState, apply_log_transform, capture_state, log_axis_max, restore_linear
from graphview.raster.draw_text import text_size
from graphview.scales import DataBounds, PixelRect
from graphview.second_scale import SecondScale
from graphview.series import Series
from graphview.styles import CursorStyles, GraphStyles, GridLabelStyles, ViewportStyles
from graphview.viewport import Viewport


LOGGER = logging.getLogger(__name__)


class OnGraphViewListener(Protocol):
    def on_graph_view_point_touched(self, graph: "GraphView") -> None:
        ...

    def on_graph_view_point_showed(self, graph: "GraphView") -> None:
        ...

    def on_graph_view_point_finished_touch(self, graph: "GraphView") -> None:
        ...


class GraphView:
    """A chart: primary series on a viewport, an optional second Y scale,
    grid and labels, cursor mode and a reversible log10 Y mode.

    Drawing goes through any `Canvas`; pointer input arrives as
    `PointerEvent`s via `on_touch_event`.
    """

    def __init__(
        self,
        width: int = 640,
        height: int = 480,
        *,
        title: str | None = None,
        styles: GraphStyles | None = None,
        grid_styles: GridLabelStyles | None = None,
        viewport_styles: ViewportStyles | None = None,
        text_measurer: TextMeasurer = text_size,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self._width = int(width)
        self._height = int(height)
        self.title = title
        self.styles = styles or GraphStyles()
        self._measure = text_measurer
        self._series: list[Series] = []
        self.viewport = Viewport(lambda: self._series, styles=viewport_styles)
        self.grid_label_renderer = GridLabelRenderer(grid_styles, text_measurer=text_measurer)
        self._second_scale: SecondScale | None = None
        self._cursor_mode: CursorMode | None = None
        self._listener: OnGraphViewListener | None = None
        self._tap_detector = TapDetector()
        self._gestures = GestureTracker()
        self._log_state: LogScaleState | None = None

    # -- size & styles ----------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def set_size(self, width: int, height: int) -> "GraphView":
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self._width = int(width)
        self._height = int(height)
        self.on_data_changed(keep_label_sizes=False, keep_viewport=False)
        return self

    def set_styles(self, **changes: Any) -> "GraphView":
        self.styles = replace(self.styles, **changes)
        return self

    def set_title(self, title: str | None) -> "GraphView":
        self.title = title
        return self

    # -- series -----------------------------------------------------------

    @property
    def series(self) -> tuple[Series, ...]:
        return tuple(self._series)

    def _require_linear_mode(self, op: str) -> None:
        if self._log_state is not None:
            raise InvalidStateError(f"{op} is not allowed while log scale mode is active")

    def check_series_writable(self, series: Series, op: str) -> None:
        """Primary series data is frozen while log scale mode holds its linear backup."""
        if self._log_state is not None and series in self._series:
            raise InvalidStateError(f"{op} on a primary series is not allowed while log scale mode is active")

    def add_series(self, series: Series) -> None:
        self._require_linear_mode("add_series")
        series.on_graph_view_attached(self)
        self._series.append(series)
        self.on_data_changed(keep_label_sizes=False, keep_viewport=False)

    def remove_series(self, series: Series) -> None:
        self._require_linear_mode("remove_series")
        if series in self._series:
            self._series.remove(series)
            series.on_graph_view_detached(self)
        self.on_data_changed(keep_label_sizes=False, keep_viewport=False)

    def remove_all_series(self) -> None:
        self._require_linear_mode("remove_all_series")
        for series in self._series:
            series.on_graph_view_detached(self)
        self._series.clear()
        self.on_data_changed(keep_label_sizes=False, keep_viewport=False)

    @property
    def second_scale(self) -> SecondScale | None:
        return self._second_scale

    def get_second_scale(self) -> SecondScale:
        """Return the second scale, creating it on first use."""
        if self._second_scale is None:
            self._second_scale = SecondScale(self)
            self._second_scale.vertical_axis_title_text_size = self.grid_label_renderer.styles.text_size
            self.on_data_changed(keep_label_sizes=False, keep_viewport=True)
        return self._second_scale

    def clear_second_scale(self) -> None:
        if self._second_scale is None:
            return
        self._second_scale.remove_all_series()
        self._second_scale = None
        self.on_data_changed(keep_label_sizes=False, keep_viewport=True)

    def on_data_changed(self, keep_label_sizes: bool, keep_viewport: bool) -> None:
        """Recompute the complete ranges and drop cached label data.

        Called by series after their data changed and by the chart after its
        series membership changed.
        """
        self.viewport.calc_complete_range()
        if self._second_scale is not None:
            self._second_scale.calc_complete_range()
        self.grid_label_renderer.invalidate(keep_label_sizes, keep_viewport)

    def bounds_for(self, is_second_scale: bool) -> DataBounds:
        bounds = self.viewport.bounds
        if not is_second_scale or self._second_scale is None:
            return bounds
        return replace(bounds, min_y=self._second_scale.min_y, max_y=self._second_scale.max_y)

    # -- layout -----------------------------------------------------------

    def title_height(self) -> int:
        if not self.title:
            return 0
        return self._measure(self.title, font_size_px=self.styles.title_text_size)[1] + self.grid_label_renderer.styles.label_gap

    def _second_scale_width(self) -> int:
        second = self._second_scale
        if second is None:
            return 0
        grid = self.grid_label_renderer
        width = grid.styles.label_gap + grid.label_vertical_second_scale_width(self)
        if second.vertical_axis_title:
            width += grid.styles.label_gap
            width += self._measure(
                second.vertical_axis_title,
                font_size_px=second.vertical_axis_title_text_size,
                rotate_deg=270,
            )[0]
        return width

    def graph_content_rect(self) -> PixelRect:
        grid = self.grid_label_renderer
        st = grid.styles
        left = st.padding + grid.vertical_axis_title_width() + grid.label_vertical_width(self)
        if st.vertical_labels_visible:
            left += st.label_gap
        top = st.padding + self.title_height()
        right_margin = st.padding + self._second_scale_width()
        bottom_margin = st.padding + grid.horizontal_axis_title_height()
        if st.horizontal_labels_visible:
            bottom_margin += st.label_gap + grid.label_horizontal_height(self)
        width = self._width - left - right_margin
        height = self._height - top - bottom_margin
        if width <= 1 or height <= 1:
            raise GraphViewError("graph too small for its content area")
        return PixelRect(left=float(left), top=float(top), width=float(width), height=float(height))

    # -- drawing ----------------------------------------------------------

    def draw(self, canvas: Canvas) -> None:
        rect = self.graph_content_rect()
        canvas.draw_rect(0, 0, canvas.width, canvas.height, self.styles.background)
        if self.title:
            canvas.draw_text(
                self._width / 2.0,
                self.grid_label_renderer.styles.padding,
                self.title,
                self.styles.title_color,
                font_size_px=self.styles.title_text_size,
                align="center",
            )
        self.viewport.draw_first(canvas, rect)
        self.grid_label_renderer.draw(canvas, self, rect)
        for series in self._series:
            series.draw(self, canvas, False)
        if self._second_scale is not None:
            for series in self._second_scale.series:
                series.draw(self, canvas, True)
        if self._cursor_mode is not None:
            self._cursor_mode.draw(canvas)
        self.viewport.draw(canvas, rect)

    # -- interaction ------------------------------------------------------

    def _all_series(self) -> list[Series]:
        out = list(self._series)
        if self._second_scale is not None:
            out.extend(self._second_scale.series)
        return out

    def set_cursor_mode(self, enabled: bool, styles: CursorStyles | None = None) -> "GraphView":
        if enabled:
            if self._cursor_mode is None:
                self._cursor_mode = CursorMode(self, styles)
        else:
            self._cursor_mode = None
        for series in self._all_series():
            series.clear_cursor_mode_cache()
        return self

    @property
    def cursor_mode(self) -> CursorMode | None:
        return self._cursor_mode

    def is_cursor_mode(self) -> bool:
        return self._cursor_mode is not None

    def set_on_graph_view_listener(self, listener: OnGraphViewListener | None) -> None:
        self._listener = listener

    def on_touch_event(self, event: PointerEvent) -> bool:
        if self._cursor_mode is not None:
            return self._cursor_mode.on_touch_event(event)

        handled = False
        if event.event_type == "pointer_down":
            handled = True
            if self._listener is not None:
                self._listener.on_graph_view_point_touched(self)

        if self._tap_detector.on_event(event):
            hits = [s.on_tap(event.x, event.y) for s in self._all_series()]
            if any(hit is not None for hit in hits):
                handled = True
                if self._listener is not None:
                    self._listener.on_graph_view_point_showed(self)

        if event.event_type == "pointer_up" and self._listener is not None:
            self._listener.on_graph_view_point_finished_touch(self)

        rect = self._gesture_rect() if event.event_type in ("pointer_move", "wheel") else None
        if self._gestures.on_event(event, self.viewport, rect):
            handled = True
        return handled

    def _gesture_rect(self) -> PixelRect | None:
        try:
            return self.graph_content_rect()
        except GraphViewError:
            LOGGER.debug("gesture ignored: graph too small for its content area")
            return None

    # -- log scale --------------------------------------------------------

    def is_log_scale_mode(self) -> bool:
        return self._log_state is not None

    def to_log_scale(self) -> None:
        """Show primary series Y values as log10, keeping a backup of the
        linear data. Y bounds become manual `[0, floor(log10(max y))]`."""
        if self._log_state is not None:
            LOGGER.warning("to_log_scale ignored: log scale mode is already active")
            return
        if not self._series:
            LOGGER.debug("to_log_scale ignored: no series attached")
            return
        state = capture_state(self._series)
        apply_log_transform(self._series, state)
        self._log_state = state
        self.viewport.set_manual_y_axis_bounds(True, 0.0, log_axis_max(state.max_y))
        self.grid_label_renderer.set_label_formatter(LogLabelFormatter())
        self.on_data_changed(keep_label_sizes=False, keep_viewport=False)
        LOGGER.debug("log scale mode on: %s series, max y %s", len(self._series), state.max_y)

    def to_linear_scale(self) -> None:
        state = self._log_state
        if state is None:
            raise MissingBackupState("to_linear_scale called without an active log scale backup")
        if len(state.backups) != len(self._series):
            raise InvalidStateError(
                f"log scale backup holds {len(state.backups)} series but the chart has {len(self._series)}"
            )
        self._log_state = None
        restore_linear(self._series, state)
        self.viewport.set_y_axis_bounds_manual(False)
        self.grid_label_renderer.set_label_formatter(DefaultLabelFormatter())
        self.on_data_changed(keep_label_sizes=False, keep_viewport=False)
        LOGGER.debug("log scale mode off")
