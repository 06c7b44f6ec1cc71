from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from roadmapkit.roadmap_core.domain.position import Position

# 렌더링 표면이 로드맵 노드로 인식하는 고정 표시 타입
ROADMAP_NODE_KIND = "customNode"


@dataclass(frozen=True)
class PlacedNode:
    """좌표가 확정된 로드맵 노드."""

    node_id: str
    position: Position
    data: Dict[str, Any] = field(default_factory=dict)
    kind: str = ROADMAP_NODE_KIND

    def to_payload(self) -> Dict[str, Any]:
        """
        렌더링 표면이 기대하는 노드 JSON으로 변환합니다.

        @returns {Dict[str, Any]} id/type/position/data 구조의 노드.
        """
        return {
            "id": self.node_id,
            "type": self.kind,
            "position": self.position.to_payload(),
            "data": {key: value for key, value in self.data.items() if value is not None},
        }
