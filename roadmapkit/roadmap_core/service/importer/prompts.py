from __future__ import annotations

from typing import Any, Dict

from roadmapkit.roadmap_core.domain.node_type import GENERATED_NODE_TYPES

_TYPE_CHOICES = ", ".join(f"'{node_type}'" for node_type in GENERATED_NODE_TYPES)
_TYPE_SLASHED = "/".join(GENERATED_NODE_TYPES)

ROADMAP_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "nodes": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "STRING"},
                    "label": {"type": "STRING"},
                    "description": {"type": "STRING"},
                    "type": {"type": "STRING"},
                    "emoji": {"type": "STRING"},
                },
            },
        },
        "edges": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "STRING"},
                    "source": {"type": "STRING"},
                    "target": {"type": "STRING"},
                },
            },
        },
    },
}


def build_generation_prompt(topic: str, context: str = "") -> str:
    """
    로드맵 생성 프롬프트를 구성합니다.

    페이지 본문이 있으면 본문에서 로드맵을 추출하도록, 없으면 주제만으로
    8-12개 노드를 만들도록 요청한다.

    @param {str} topic - 로드맵 주제.
    @param {str} context - 수집한 페이지 본문 (없으면 빈 문자열).
    @returns {str} 프롬프트 문자열.
    """
    if context:
        return _build_context_prompt(topic, context)
    return _build_topic_prompt(topic)


def _build_context_prompt(topic: str, context: str) -> str:
    return (
        f"I have content from a webpage about '{topic}'.\n"
        "Analyze this content and extract a structured learning roadmap.\n\n"
        "CONTENT START:\n"
        f"{context}\n"
        "CONTENT END\n\n"
        "You MUST respond with ONLY valid JSON in this exact format, no markdown, no explanation.\n"
        "Return a JSON object with 'nodes' and 'edges'.\n"
        "Nodes must have: id, label (short title), description (1 sentence), "
        f"type ({_TYPE_SLASHED}), emoji.\n"
        "Create edges to connect them logically."
    )


def _build_topic_prompt(topic: str) -> str:
    return (
        f"Generate a learning roadmap for '{topic}'.\n"
        "You MUST respond with ONLY valid JSON in this exact format, no markdown, no explanation.\n"
        "Return a JSON object with 'nodes' and 'edges'.\n"
        "Create at least 8-12 nodes representing key concepts, arranged logically from beginner to advanced.\n\n"
        "Nodes must have:\n"
        "- id: string (unique)\n"
        "- label: string (short title)\n"
        "- description: string (1 sentence summary)\n"
        f"- type: one of [{_TYPE_CHOICES}]\n"
        "- emoji: string (relevant single emoji)\n\n"
        "Edges must have:\n"
        "- id: string\n"
        "- source: string (node id)\n"
        "- target: string (node id)"
    )
