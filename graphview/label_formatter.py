from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import numpy as np

from graphview.scales import format_tick


LabelFormatter = Callable[[float, bool], str]
"""Turns a tick value into its label; the flag is True for the X axis."""

NEG_INFINITY_LABEL = "−∞"


@dataclass(frozen=True)
class DefaultLabelFormatter:
    step: float | None = None

    def __call__(self, value: float, is_value_x: bool) -> str:
        return format_tick(float(value), step=self.step)


@dataclass(frozen=True)
class LogLabelFormatter:
    """Labels log10-transformed Y ticks with their linear value.

    A tick `t` reads as `floor(10 ** t)`; ticks at or below zero read as
    `NEG_INFINITY_LABEL`. X ticks go through the wrapped formatter untouched.
    """

    base: LabelFormatter = field(default_factory=DefaultLabelFormatter)

    def __call__(self, value: float, is_value_x: bool) -> str:
        if is_value_x:
            return self.base(value, True)
        if value <= 0:
            return NEG_INFINITY_LABEL
        with np.errstate(over="ignore"):
            linear = float(np.floor(np.power(10.0, float(value))))
        return self.base(linear, False)
