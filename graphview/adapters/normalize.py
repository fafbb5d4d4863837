from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from graphview.errors import SeriesDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def normalize_points(data: Any) -> tuple[np.ndarray, np.ndarray]:
    """Coerce series input into a pair of float64 arrays (x, y).

    Accepted inputs: None (empty), a sequence of objects with `x`/`y` attributes
    (e.g. `DataPoint`), a sequence of (x, y) pairs, a 1-D numeric sequence whose
    index becomes x, an (N, 2) ndarray, or a pandas DataFrame with `x`/`y`
    columns or exactly two numeric columns.
    """
    if data is None:
        return np.empty(0, dtype=np.float64), np.empty(0, dtype=np.float64)

    if pd is not None and isinstance(data, pd.DataFrame):
        return _from_dataframe(data)

    if isinstance(data, np.ndarray):
        return _from_ndarray(data)

    if isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray)):
        return _from_sequence(data)

    raise SeriesDataError(f"unsupported series input type: {type(data)!r}")


def _from_dataframe(frame: Any) -> tuple[np.ndarray, np.ndarray]:
    if "x" in frame.columns and "y" in frame.columns:
        x_col, y_col = frame["x"], frame["y"]
    else:
        numeric_cols = [c for c in frame.columns if pd.api.types.is_numeric_dtype(frame[c])]
        if len(numeric_cols) != 2:
            raise SeriesDataError("DataFrame input must have x/y columns or exactly two numeric columns")
        x_col, y_col = frame[numeric_cols[0]], frame[numeric_cols[1]]
    return (
        _coerce_ndarray(x_col.to_numpy(), label="x"),
        _coerce_ndarray(y_col.to_numpy(), label="y"),
    )


def _from_ndarray(arr: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    if arr.ndim == 1:
        y = _coerce_ndarray(arr, label="y")
        return np.arange(y.size, dtype=np.float64), y
    if arr.ndim == 2 and arr.shape[1] == 2:
        return _coerce_ndarray(arr[:, 0], label="x"), _coerce_ndarray(arr[:, 1], label="y")
    raise SeriesDataError(f"ndarray input must be 1-D or have shape (N, 2), got {arr.shape}")


def _from_sequence(items: Sequence[Any]) -> tuple[np.ndarray, np.ndarray]:
    if len(items) == 0:
        return np.empty(0, dtype=np.float64), np.empty(0, dtype=np.float64)
    first = items[0]
    if hasattr(first, "x") and hasattr(first, "y"):
        xs = [getattr(p, "x") for p in items]
        ys = [getattr(p, "y") for p in items]
        return _coerce_list(xs, label="x"), _coerce_list(ys, label="y")
    if isinstance(first, Sequence) and not isinstance(first, (str, bytes, bytearray)):
        xs = []
        ys = []
        for i, pair in enumerate(items):
            if not isinstance(pair, Sequence) or len(pair) != 2:
                raise SeriesDataError(f"point at index {i} is not an (x, y) pair: {pair!r}")
            xs.append(pair[0])
            ys.append(pair[1])
        return _coerce_list(xs, label="x"), _coerce_list(ys, label="y")
    y = _coerce_list(list(items), label="y")
    return np.arange(y.size, dtype=np.float64), y


def _coerce_list(values: list[Any], *, label: str) -> np.ndarray:
    return _coerce_ndarray(np.asarray(values, dtype=object), label=label)


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=True)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise SeriesDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
