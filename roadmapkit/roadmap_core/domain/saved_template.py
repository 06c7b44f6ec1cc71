from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from roadmapkit.roadmap_core.domain.template_source import TemplateSource


@dataclass(frozen=True)
class SavedTemplate:
    """
    저장/공개되는 로드맵 템플릿.

    nodes/edges는 렌더링 표면이 그대로 사용하는 JSON 페이로드이며,
    저장소 직렬화는 기존 키-값 저장 포맷(camelCase)을 따른다.
    """

    template_id: str
    title: str
    source: TemplateSource
    nodes: Tuple[Dict[str, Any], ...] = ()
    edges: Tuple[Dict[str, Any], ...] = ()
    created_at: int = 0
    updated_at: int = 0
    source_url: Optional[str] = None
    thumbnail: Optional[str] = None
    is_public: bool = False
    author: Optional[str] = None
    description: Optional[str] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)
    likes: int = 0
    views: int = 0

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SavedTemplate":
        """
        저장소/요청 JSON을 템플릿으로 변환합니다.

        @param {Dict[str, Any]} payload - camelCase 템플릿 JSON.
        @returns {SavedTemplate} 변환된 템플릿.
        @throws {ValueError} id/title/source가 없거나 필드 타입이 맞지 않을 때.
        """
        if not isinstance(payload, dict):
            raise ValueError("template payload must be an object")
        template_id = payload.get("id")
        title = payload.get("title")
        if not template_id or not isinstance(template_id, str):
            raise ValueError("template id is required")
        if not isinstance(title, str):
            raise ValueError("template title is required")
        source = TemplateSource(payload.get("source") or TemplateSource.CUSTOM.value)
        return cls(
            template_id=template_id,
            title=title,
            source=source,
            nodes=_sequence(payload, "nodes"),
            edges=_sequence(payload, "edges"),
            created_at=_integer(payload, "createdAt"),
            updated_at=_integer(payload, "updatedAt"),
            source_url=payload.get("sourceUrl"),
            thumbnail=payload.get("thumbnail"),
            is_public=bool(payload.get("isPublic", False)),
            author=payload.get("author"),
            description=payload.get("description"),
            tags=tuple(str(tag) for tag in _sequence(payload, "tags")),
            likes=_integer(payload, "likes"),
            views=_integer(payload, "views"),
        )

    def to_payload(self) -> Dict[str, Any]:
        """
        @returns 저장소/응답용 camelCase JSON (None 필드는 생략).
        """
        payload: Dict[str, Any] = {
            "id": self.template_id,
            "title": self.title,
            "source": self.source.value,
            "nodes": list(self.nodes),
            "edges": list(self.edges),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "isPublic": self.is_public,
            "tags": list(self.tags),
            "likes": self.likes,
            "views": self.views,
        }
        optional = {
            "sourceUrl": self.source_url,
            "thumbnail": self.thumbnail,
            "author": self.author,
            "description": self.description,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        return payload

    def replace(self, **changes: Any) -> "SavedTemplate":
        """
        @param changes 변경할 필드.
        @returns 변경이 반영된 새 템플릿.
        """
        if "tags" in changes and changes["tags"] is not None:
            changes["tags"] = tuple(changes["tags"])
        return dataclasses.replace(self, **changes)

    @property
    def user_owned(self) -> bool:
        """
        @returns 사용자가 만든(custom/imported) 템플릿이면 True.
        """
        return self.source in (TemplateSource.CUSTOM, TemplateSource.IMPORTED)


def _sequence(payload: Dict[str, Any], key: str) -> Tuple[Any, ...]:
    value = payload.get(key)
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"template {key} should be a list")
    return tuple(value)


def _integer(payload: Dict[str, Any], key: str) -> int:
    value = payload.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"template {key} should be a number")
    return int(value)
