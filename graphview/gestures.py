from __future__ import annotations

from dataclasses import dataclass
import math

from graphview.events import PointerEvent
from graphview.scales import PixelRect
from graphview.styles import TAP_MAX_DURATION_S, TAP_MAX_MOVE_PX, WHEEL_ZOOM_STEP
from graphview.viewport import Viewport


@dataclass
class _TapState:
    pointer_id: int
    down_ts: float
    x: float
    y: float


class TapDetector:
    """Recognizes a tap: a release soon after the press without wandering off."""

    def __init__(self, max_duration_s: float = TAP_MAX_DURATION_S, max_move_px: float = TAP_MAX_MOVE_PX) -> None:
        if max_duration_s <= 0:
            raise ValueError("max_duration_s must be > 0")
        if max_move_px <= 0:
            raise ValueError("max_move_px must be > 0")
        self._max_duration_s = max_duration_s
        self._max_move_px = max_move_px
        self._state: _TapState | None = None
        self._pressed: set[int] = set()

    def on_event(self, event: PointerEvent) -> bool:
        kind = event.event_type
        if kind == "pointer_down":
            self._pressed.add(event.pointer_id)
            if len(self._pressed) == 1:
                self._state = _TapState(pointer_id=event.pointer_id, down_ts=event.timestamp, x=event.x, y=event.y)
            else:
                # A second finger turns the touch into a multi-pointer gesture.
                self._state = None
            return False
        if kind in ("pointer_up", "pointer_cancel"):
            self._pressed.discard(event.pointer_id)
        state = self._state
        if state is None or event.pointer_id != state.pointer_id:
            return False
        if kind == "pointer_move":
            if abs(event.x - state.x) > self._max_move_px or abs(event.y - state.y) > self._max_move_px:
                self._state = None
            return False
        if kind == "pointer_up":
            self._state = None
            if abs(event.x - state.x) > self._max_move_px or abs(event.y - state.y) > self._max_move_px:
                return False
            return (event.timestamp - state.down_ts) < self._max_duration_s
        if kind == "pointer_cancel":
            self._state = None
        return False


class GestureTracker:
    """Turns pointer events into viewport pan and pinch-zoom calls.

    One active pointer pans, two pointers pinch about their midpoint and wheel
    events zoom in steps about the pointer position.
    """

    def __init__(self, wheel_zoom_step: float = WHEEL_ZOOM_STEP) -> None:
        if wheel_zoom_step <= 1.0:
            raise ValueError("wheel_zoom_step must be > 1")
        self._wheel_zoom_step = wheel_zoom_step
        self._pointers: dict[int, tuple[float, float]] = {}

    @property
    def active_pointers(self) -> int:
        return len(self._pointers)

    def reset(self) -> None:
        self._pointers.clear()

    def on_event(self, event: PointerEvent, viewport: Viewport, rect: PixelRect | None) -> bool:
        """Feed one event. Without a `rect` pointers are still tracked but the
        viewport is left alone."""
        kind = event.event_type
        if kind == "wheel":
            if not event.delta_y or rect is None:
                return False
            factor = self._wheel_zoom_step ** (-float(event.delta_y))
            return viewport.scale(factor, event.x, event.y, rect)
        if kind == "pointer_down":
            self._pointers[event.pointer_id] = (event.x, event.y)
            return False
        if kind in ("pointer_up", "pointer_cancel"):
            self._pointers.pop(event.pointer_id, None)
            return False
        if kind != "pointer_move" or event.pointer_id not in self._pointers:
            return False

        if len(self._pointers) == 1:
            last_x, last_y = self._pointers[event.pointer_id]
            self._pointers[event.pointer_id] = (event.x, event.y)
            if rect is None:
                return False
            return viewport.scroll(event.x - last_x, event.y - last_y, rect)

        other_id = next(pid for pid in self._pointers if pid != event.pointer_id)
        ox, oy = self._pointers[other_id]
        last_x, last_y = self._pointers[event.pointer_id]
        self._pointers[event.pointer_id] = (event.x, event.y)
        before = math.hypot(last_x - ox, last_y - oy)
        after = math.hypot(event.x - ox, event.y - oy)
        if rect is None or before <= 1e-9 or after <= 1e-9:
            return False
        return viewport.scale(after / before, (event.x + ox) * 0.5, (event.y + oy) * 0.5, rect)
