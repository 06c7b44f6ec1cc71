from __future__ import annotations

from enum import Enum


class NodeType(str, Enum):
    """로드맵 노드 난이도/분류."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    FRAMEWORK = "framework"
    OPTIONAL = "optional"
    CUSTOM = "custom"


# 생성 프롬프트에 노출하는 타입 목록 (custom은 사용자 편집 전용)
GENERATED_NODE_TYPES = [
    NodeType.BEGINNER.value,
    NodeType.INTERMEDIATE.value,
    NodeType.ADVANCED.value,
    NodeType.FRAMEWORK.value,
    NodeType.OPTIONAL.value,
]
