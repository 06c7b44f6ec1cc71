from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class RawEdge:
    """노드 id를 참조하는 방향 엣지."""

    source: Any = None
    target: Any = None
    edge_id: Any = None

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["RawEdge"]:
        """
        @param payload 생성기가 반환한 엣지 객체.
        @returns 매핑이 아니면 None, 그 외에는 필드 누락을 허용한 RawEdge.
        """
        if isinstance(payload, RawEdge):
            return payload
        if not isinstance(payload, dict):
            return None
        return cls(
            source=payload.get("source"),
            target=payload.get("target"),
            edge_id=payload.get("id"),
        )

    @property
    def is_valid(self) -> bool:
        """
        @returns 양 끝점이 비어있지 않은 문자열이면 True.
        """
        return _non_empty(self.source) and _non_empty(self.target)

    @property
    def has_target(self) -> bool:
        """
        @returns target 필드가 채워져 있으면 True.
        """
        return _non_empty(self.target)


def _non_empty(value: Any) -> bool:
    return isinstance(value, str) and bool(value)
