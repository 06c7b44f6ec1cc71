from __future__ import annotations

import logging
from typing import Any, Dict, List

from roadmapkit.roadmap_core.domain.edge_style import DEFAULT_EDGE_STYLE, EdgeStyle
from roadmapkit.roadmap_core.domain.raw_edge import RawEdge

logger = logging.getLogger(__name__)


def format_edges(edges: Any, style: EdgeStyle = DEFAULT_EDGE_STYLE) -> List[Dict[str, Any]]:
    """
    생성된 엣지를 렌더링용 엣지 JSON으로 변환합니다.

    원본 필드는 유지하고 id가 없으면 `e-{source}-{target}`을 부여한 뒤
    애니메이션/선 스타일을 덧붙인다. 그릴 수 없는 엣지는 제외한다.

    @param {Any} edges - 엣지 목록 (리스트가 아니면 빈 입력).
    @param {EdgeStyle} style - 적용할 엣지 스타일.
    @returns {List[Dict[str, Any]]} 렌더링용 엣지 목록.
    """
    if not isinstance(edges, (list, tuple)):
        return []

    formatted: List[Dict[str, Any]] = []
    dropped = 0
    for payload in edges:
        edge = RawEdge.from_payload(payload)
        if edge is None or not edge.is_valid:
            dropped += 1
            continue
        base = dict(payload) if isinstance(payload, dict) else {
            "source": edge.source,
            "target": edge.target,
        }
        base["id"] = edge.edge_id or f"e-{edge.source}-{edge.target}"
        base["animated"] = style.animated
        base["style"] = style.to_payload()
        formatted.append(base)

    if dropped:
        logger.debug("렌더링 불가 엣지 제외", extra={"dropped_count": dropped})
    return formatted
