from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

import numpy as np


@dataclass(frozen=True)
class DataBounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def span_x(self) -> float:
        return self.max_x - self.min_x

    @property
    def span_y(self) -> float:
        return self.max_y - self.min_y

    def union(self, other: "DataBounds") -> "DataBounds":
        return DataBounds(
            min_x=min(self.min_x, other.min_x),
            max_x=max(self.max_x, other.max_x),
            min_y=min(self.min_y, other.min_y),
            max_y=max(self.max_y, other.max_y),
        )


EMPTY_BOUNDS = DataBounds(min_x=0.0, max_x=0.0, min_y=0.0, max_y=0.0)


@dataclass(frozen=True)
class PixelRect:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


@dataclass(frozen=True)
class PlotTransform:
    sx: float
    tx: float
    sy: float
    ty: float


def bounds_of(x: np.ndarray, y: np.ndarray) -> DataBounds | None:
    mask = np.isfinite(x) & np.isfinite(y)
    if not np.any(mask):
        return None
    vx = x[mask]
    vy = y[mask]
    return DataBounds(
        min_x=float(np.min(vx)),
        max_x=float(np.max(vx)),
        min_y=float(np.min(vy)),
        max_y=float(np.max(vy)),
    )


def _usable_span(span: float) -> bool:
    return bool(np.isfinite(span)) and span > 0.0


def build_transform(bounds: DataBounds, rect: PixelRect) -> PlotTransform:
    # A zero or non-finite span collapses that axis onto the centre of the rect.
    if _usable_span(bounds.span_x):
        sx = rect.width / bounds.span_x
        tx = rect.left - bounds.min_x * sx
    else:
        sx = 0.0
        tx = rect.left + rect.width * 0.5
    if _usable_span(bounds.span_y):
        sy = -rect.height / bounds.span_y
        ty = rect.bottom - bounds.min_y * sy
    else:
        sy = 0.0
        ty = rect.top + rect.height * 0.5
    return PlotTransform(sx=sx, tx=tx, sy=sy, ty=ty)


def map_to_pixels(x: np.ndarray, y: np.ndarray, transform: PlotTransform) -> tuple[np.ndarray, np.ndarray]:
    px = np.asarray(x, dtype=np.float64) * transform.sx + transform.tx
    py = np.asarray(y, dtype=np.float64) * transform.sy + transform.ty
    return px, py


def map_point(x: float, y: float, transform: PlotTransform) -> tuple[float, float]:
    return (float(x) * transform.sx + transform.tx, float(y) * transform.sy + transform.ty)


def unmap_point(px: float, py: float, bounds: DataBounds, rect: PixelRect) -> tuple[float, float]:
    if _usable_span(bounds.span_x) and rect.width > 0:
        x = bounds.min_x + (float(px) - rect.left) / rect.width * bounds.span_x
    else:
        x = bounds.min_x
    if _usable_span(bounds.span_y) and rect.height > 0:
        y = bounds.min_y + (rect.bottom - float(py)) / rect.height * bounds.span_y
    else:
        y = bounds.min_y
    return (x, y)


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    if target <= 0:
        raise ValueError("target must be > 0")
    if not (np.isfinite(vmin) and np.isfinite(vmax)):
        return np.asarray([], dtype=np.float64)
    if vmin > vmax:
        vmin, vmax = vmax, vmin
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    span = _nice_number(vmax - vmin, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    tick_min = np.ceil(vmin / step) * step
    tick_max = np.floor(vmax / step) * step

    ticks = np.arange(tick_min, tick_max + 0.5 * step, step, dtype=np.float64)
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    if ticks.size == 0:
        return np.asarray([vmin, vmax], dtype=np.float64)
    return ticks


def tick_step(ticks: np.ndarray) -> float | None:
    if ticks.size < 2:
        return None
    return float(abs(ticks[1] - ticks[0]))


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e9 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim trailing zeros for fractional values (preserve integer zeros like 30, 40).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)


def clip_segment(
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    rect: PixelRect,
) -> tuple[float, float, float, float] | None:
    """Liang-Barsky clip of a pixel-space segment against `rect`."""
    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0 - rect.left), (dx, rect.right - x0), (-dy, y0 - rect.top), (dy, rect.bottom - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        r = q / p
        if p < 0:
            t0 = max(t0, r)
        else:
            t1 = min(t1, r)
        if t0 > t1:
            return None
    return (x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy)
