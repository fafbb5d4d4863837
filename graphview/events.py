from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


PointerEventType = Literal[
    "pointer_down",
    "pointer_move",
    "pointer_up",
    "pointer_cancel",
    "wheel",
]


@dataclass(frozen=True)
class PointerEvent:
    event_type: PointerEventType
    timestamp: float
    x: float
    y: float
    pointer_id: int = 0
    delta_y: Optional[float] = None
