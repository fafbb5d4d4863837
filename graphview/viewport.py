from __future__ import annotations

from dataclasses import replace
import logging
from typing import Any, Callable, Sequence

from graphview.canvas import Canvas
from graphview.errors import InvalidStateError
from graphview.scales import EMPTY_BOUNDS, DataBounds, PixelRect, build_transform, map_point, unmap_point
from graphview.series import DataPoint, Series
from graphview.styles import ViewportStyles


LOGGER = logging.getLogger(__name__)


def union_of_series(series: Sequence[Series]) -> DataBounds | None:
    out: DataBounds | None = None
    for s in series:
        b = s.bounds()
        if b is None:
            continue
        out = b if out is None else out.union(b)
    return out


class Viewport:
    """Visible data window of the primary scale and its mapping to pixels.

    Each axis is either auto-managed (follows the union of all series extents on
    every `calc_complete_range`) or manual (keeps caller supplied bounds). Pan
    and zoom gestures only move auto-managed axes.
    """

    def __init__(
        self,
        series_provider: Callable[[], Sequence[Series]],
        *,
        styles: ViewportStyles | None = None,
        scrollable: bool = True,
        scalable: bool = True,
    ) -> None:
        self._series_provider = series_provider
        self.styles = styles or ViewportStyles()
        self.scrollable = scrollable
        self.scalable = scalable
        self._current = EMPTY_BOUNDS
        self._complete = EMPTY_BOUNDS
        self._x_manual = False
        self._y_manual = False

    # -- bounds -----------------------------------------------------------

    @property
    def bounds(self) -> DataBounds:
        return self._current

    @property
    def complete_bounds(self) -> DataBounds:
        return self._complete

    def is_x_axis_bounds_manual(self) -> bool:
        return self._x_manual

    def is_y_axis_bounds_manual(self) -> bool:
        return self._y_manual

    def get_min_x(self, complete: bool = False) -> float:
        return (self._complete if complete else self._current).min_x

    def get_max_x(self, complete: bool = False) -> float:
        return (self._complete if complete else self._current).max_x

    def get_min_y(self, complete: bool = False) -> float:
        return (self._complete if complete else self._current).min_y

    def get_max_y(self, complete: bool = False) -> float:
        return (self._complete if complete else self._current).max_y

    def set_min_x(self, value: float) -> "Viewport":
        self._current = replace(self._current, min_x=float(value))
        return self

    def set_max_x(self, value: float) -> "Viewport":
        self._current = replace(self._current, max_x=float(value))
        return self

    def set_min_y(self, value: float) -> "Viewport":
        self._current = replace(self._current, min_y=float(value))
        return self

    def set_max_y(self, value: float) -> "Viewport":
        self._current = replace(self._current, max_y=float(value))
        return self

    def set_x_axis_bounds_manual(self, enabled: bool) -> "Viewport":
        self._x_manual = bool(enabled)
        if not self._x_manual:
            self._current = replace(self._current, min_x=self._complete.min_x, max_x=self._complete.max_x)
        return self

    def set_y_axis_bounds_manual(self, enabled: bool) -> "Viewport":
        self._y_manual = bool(enabled)
        if not self._y_manual:
            self._current = replace(self._current, min_y=self._complete.min_y, max_y=self._complete.max_y)
        return self

    def set_manual_x_axis_bounds(self, enabled: bool, min_x: float | None = None, max_x: float | None = None) -> "Viewport":
        # min < max is the caller's responsibility; a zero span renders flat.
        self.set_x_axis_bounds_manual(enabled)
        if enabled:
            if min_x is not None:
                self.set_min_x(min_x)
            if max_x is not None:
                self.set_max_x(max_x)
        return self

    def set_manual_y_axis_bounds(self, enabled: bool, min_y: float | None = None, max_y: float | None = None) -> "Viewport":
        self.set_y_axis_bounds_manual(enabled)
        if enabled:
            if min_y is not None:
                self.set_min_y(min_y)
            if max_y is not None:
                self.set_max_y(max_y)
        return self

    def calc_complete_range(self) -> None:
        self._complete = union_of_series(self._series_provider()) or EMPTY_BOUNDS
        current = self._current
        if not self._x_manual:
            current = replace(current, min_x=self._complete.min_x, max_x=self._complete.max_x)
        if not self._y_manual:
            current = replace(current, min_y=self._complete.min_y, max_y=self._complete.max_y)
        self._current = current

    # -- mapping ----------------------------------------------------------

    def map_data_to_pixel(self, point: DataPoint, rect: PixelRect) -> tuple[float, float]:
        return map_point(point.x, point.y, build_transform(self._current, rect))

    def map_pixel_to_data(self, px: float, py: float, rect: PixelRect) -> DataPoint:
        x, y = unmap_point(px, py, self._current, rect)
        return DataPoint(x=x, y=y)

    # -- gestures ---------------------------------------------------------

    def _gesture_locked(self, enabled: bool, name: str) -> bool:
        if not enabled:
            LOGGER.debug("%s gesture ignored: viewport is not %s", name, "scrollable" if name == "pan" else "scalable")
            return True
        if self._x_manual and self._y_manual:
            LOGGER.debug("%s gesture ignored: both axes have manual bounds", name)
            return True
        return False

    def scroll(self, dx_px: float, dy_px: float, rect: PixelRect) -> bool:
        """Pan by a pointer drag of (dx_px, dy_px); content follows the pointer."""
        if self._gesture_locked(self.scrollable, "pan"):
            return False
        cur = self._current
        changed = False
        if not self._x_manual and rect.width > 0 and dx_px != 0:
            delta = -float(dx_px) * cur.span_x / rect.width
            cur = replace(cur, min_x=cur.min_x + delta, max_x=cur.max_x + delta)
            changed = True
        if not self._y_manual and rect.height > 0 and dy_px != 0:
            delta = float(dy_px) * cur.span_y / rect.height
            cur = replace(cur, min_y=cur.min_y + delta, max_y=cur.max_y + delta)
            changed = True
        self._current = cur
        return changed

    def scale(self, factor: float, focus_x_px: float, focus_y_px: float, rect: PixelRect) -> bool:
        """Zoom about a focal pixel; `factor > 1` zooms in."""
        if factor <= 0:
            raise ValueError("zoom factor must be > 0")
        if self._gesture_locked(self.scalable, "zoom"):
            return False
        if factor == 1.0:
            return False
        focus = self.map_pixel_to_data(focus_x_px, focus_y_px, rect)
        cur = self._current
        if not self._x_manual:
            cur = replace(
                cur,
                min_x=focus.x - (focus.x - cur.min_x) / factor,
                max_x=focus.x + (cur.max_x - focus.x) / factor,
            )
        if not self._y_manual:
            cur = replace(
                cur,
                min_y=focus.y - (focus.y - cur.min_y) / factor,
                max_y=focus.y + (cur.max_y - focus.y) / factor,
            )
        self._current = cur
        return True

    def scroll_to_end(self) -> None:
        if not self._x_manual:
            raise InvalidStateError("scroll_to_end requires manual x axis bounds")
        span = self._current.span_x
        end = self._complete.max_x
        self._current = replace(self._current, min_x=end - span, max_x=end)

    # -- drawing ----------------------------------------------------------

    def set_styles(self, **changes: Any) -> "Viewport":
        self.styles = replace(self.styles, **changes)
        return self

    def draw_first(self, canvas: Canvas, rect: PixelRect) -> None:
        if self.styles.background_color is not None:
            canvas.draw_rect(rect.left, rect.top, rect.right, rect.bottom, self.styles.background_color)

    def draw(self, canvas: Canvas, rect: PixelRect) -> None:
        if self.styles.draw_border:
            canvas.draw_rect(rect.left, rect.top, rect.right, rect.bottom, self.styles.border_color, fill=False)
