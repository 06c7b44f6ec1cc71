from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RawNode:
    """위치가 없는 생성 노드 (외부 생성기 출력)."""

    node_id: str
    label: Any = None
    description: Any = None
    node_type: Any = None
    emoji: Any = None

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["RawNode"]:
        """
        JSON 노드 객체를 RawNode로 변환합니다.

        @param {Any} payload - 생성기가 반환한 노드 객체.
        @returns {Optional[RawNode]} 유효한 id가 없으면 None.
        """
        if isinstance(payload, RawNode):
            return payload
        if not isinstance(payload, dict):
            return None
        node_id = payload.get("id")
        if not isinstance(node_id, str) or not node_id:
            return None
        return cls(
            node_id=node_id,
            label=payload.get("label"),
            description=payload.get("description"),
            node_type=payload.get("type"),
            emoji=payload.get("emoji"),
        )

    def display_data(self) -> Dict[str, Any]:
        """
        렌더링용 data 블록을 구성합니다.

        @returns {Dict[str, Any]} label/description/type/emoji 원본 값.
        """
        return {
            "label": self.label,
            "description": self.description,
            "type": self.node_type,
            "emoji": self.emoji,
        }
