from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class EdgeStyle:
    """엣지 시각 스타일."""

    stroke_width: int = 3
    stroke: str = "#000"
    animated: bool = True

    def to_payload(self) -> Dict[str, object]:
        return {"strokeWidth": self.stroke_width, "stroke": self.stroke}


DEFAULT_EDGE_STYLE = EdgeStyle()
