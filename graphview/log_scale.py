from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

import numpy as np

from graphview.series import Series


@dataclass(frozen=True)
class SeriesBackup:
    x: np.ndarray
    y: np.ndarray


@dataclass(frozen=True)
class LogScaleState:
    """Linear data of every primary series, in series order, taken when log
    mode was entered. Exists exactly while log mode is active."""

    backups: tuple[SeriesBackup, ...]
    max_y: float


def log10_clamped(y: np.ndarray) -> np.ndarray:
    with np.errstate(divide="ignore", invalid="ignore"):
        out = np.log10(np.asarray(y, dtype=np.float64))
    out[~np.isfinite(out) | (out < 0.0)] = 0.0
    return out


def log_axis_max(max_y: float) -> float:
    # Below 1 the floor would go negative and cross the fixed minimum of 0.
    if not math.isfinite(max_y) or max_y <= 1.0:
        return 0.0
    return float(math.floor(math.log10(max_y)))


def capture_state(series: Sequence[Series]) -> LogScaleState:
    backups: list[SeriesBackup] = []
    max_y = 0.0
    for s in series:
        x = s.x_values()
        y = s.y_values()
        backups.append(SeriesBackup(x=x, y=y))
        finite = y[np.isfinite(y)]
        if finite.size > 0:
            max_y = max(max_y, float(np.max(finite)))
    return LogScaleState(backups=tuple(backups), max_y=max_y)


def apply_log_transform(series: Sequence[Series], state: LogScaleState) -> None:
    for s, backup in zip(series, state.backups, strict=True):
        s.reset_data(np.column_stack((backup.x, log10_clamped(backup.y))), notify=False)


def restore_linear(series: Sequence[Series], state: LogScaleState) -> None:
    for s, backup in zip(series, state.backups, strict=True):
        s.reset_data(np.column_stack((backup.x, backup.y)), notify=False)
