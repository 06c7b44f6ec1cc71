from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Position:
    """캔버스 좌표."""

    x: float
    y: float

    def to_payload(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}
