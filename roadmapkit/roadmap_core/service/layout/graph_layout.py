from __future__ import annotations

import logging
import random
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Sequence, Tuple

from roadmapkit.roadmap_core.domain.placed_node import PlacedNode
from roadmapkit.roadmap_core.domain.position import Position
from roadmapkit.roadmap_core.domain.raw_edge import RawEdge
from roadmapkit.roadmap_core.domain.raw_node import RawNode

logger = logging.getLogger(__name__)

HORIZONTAL_SPACING = 350
VERTICAL_SPACING = 250
TOP_OFFSET = 100
ODD_LEVEL_STAGGER = 100
FALLBACK_SPREAD = 500


class GraphLayoutEngine:
    """
    생성된 노드/엣지 목록을 레벨 기반 2D 배치로 변환하는 레이아웃 엔진.

    루트(들어오는 엣지가 없는 노드)에서 다중 출발 BFS로 레벨을 정하고,
    레벨마다 발견 순서대로 가로로 배치한다. 어떤 루트에서도 닿지 않는
    노드(고립 노드, 진입점 없는 사이클)는 랜덤 좌표로 배치한다.
    호출 간 상태를 갖지 않으며 잘못된 입력에도 예외를 던지지 않는다.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        """
        @param {Optional[random.Random]} rng - 미연결 노드 배치에 쓸 난수 소스.
        @returns {None} 난수 소스를 저장합니다.
        """
        self._rng = rng or random.Random()

    def layout(self, nodes: Any, edges: Any = None) -> List[PlacedNode]:
        """
        노드 전체에 좌표를 부여합니다.

        @param {Any} nodes - 노드 JSON 또는 RawNode 시퀀스 (리스트가 아니면 빈 입력).
        @param {Any} edges - 엣지 JSON 또는 RawEdge 시퀀스 (생략 가능).
        @returns {List[PlacedNode]} 입력 노드 id마다 하나씩 배치된 노드.
        """
        node_map = _index_nodes(nodes)
        if not node_map:
            return []
        raw_edges = _collect_edges(edges)

        adjacency = _build_adjacency(raw_edges)
        targets = {edge.target for edge in raw_edges if edge.has_target}
        roots = [node_id for node_id in node_map if node_id not in targets]

        levels = _assign_levels(roots, adjacency)

        placed: List[PlacedNode] = []
        for level, ids in _group_by_level(levels).items():
            for index, node_id in enumerate(ids):
                node = node_map.get(node_id)
                if node is None:
                    continue
                placed.append(_place(node, _level_position(level, index)))

        fallback = [node for node_id, node in node_map.items() if node_id not in levels]
        for node in fallback:
            position = Position(
                x=self._rng.random() * FALLBACK_SPREAD,
                y=self._rng.random() * FALLBACK_SPREAD,
            )
            placed.append(_place(node, position))

        logger.debug(
            "로드맵 레이아웃 완료",
            extra={
                "node_count": len(placed),
                "root_count": len(roots),
                "fallback_count": len(fallback),
            },
        )
        return placed


def layout_nodes(nodes: Any, edges: Any = None, rng: Optional[random.Random] = None) -> List[Dict[str, Any]]:
    """
    레이아웃 결과를 렌더링용 JSON으로 반환하는 편의 함수.

    @param {Any} nodes - 노드 목록.
    @param {Any} edges - 엣지 목록.
    @param {Optional[random.Random]} rng - 난수 소스.
    @returns {List[Dict[str, Any]]} 배치된 노드 JSON 목록.
    """
    return [node.to_payload() for node in GraphLayoutEngine(rng=rng).layout(nodes, edges)]


def _index_nodes(nodes: Any) -> Dict[str, RawNode]:
    """
    노드를 id 기준으로 색인합니다. 중복 id는 마지막 노드가 남습니다.

    @param {Any} nodes - 노드 입력.
    @returns {Dict[str, RawNode]} 입력 순서를 유지한 id → 노드 매핑.
    """
    if not isinstance(nodes, (list, tuple)):
        if nodes is not None:
            logger.warning("노드 입력이 리스트가 아님", extra={"input_type": type(nodes).__name__})
        return {}

    node_map: Dict[str, RawNode] = {}
    duplicates: List[str] = []
    skipped = 0
    for payload in nodes:
        node = RawNode.from_payload(payload)
        if node is None:
            skipped += 1
            continue
        if node.node_id in node_map:
            duplicates.append(node.node_id)
        node_map[node.node_id] = node

    if skipped:
        logger.warning("id가 없는 노드 제외", extra={"skipped_count": skipped})
    if duplicates:
        logger.warning("중복 노드 id 감지 (마지막 노드 사용)", extra={"duplicate_ids": duplicates})
    return node_map


def _collect_edges(edges: Any) -> List[RawEdge]:
    if not isinstance(edges, (list, tuple)):
        return []
    collected = []
    for payload in edges:
        edge = RawEdge.from_payload(payload)
        if edge is not None:
            collected.append(edge)
    return collected


def _build_adjacency(edges: Sequence[RawEdge]) -> Dict[str, List[str]]:
    """
    @param edges 엣지 목록.
    @returns source id → target id 목록 (유효한 엣지만).
    """
    adjacency: Dict[str, List[str]] = {}
    skipped = 0
    for edge in edges:
        if not edge.is_valid:
            skipped += 1
            continue
        adjacency.setdefault(edge.source, []).append(edge.target)
    if skipped:
        logger.debug("source/target 누락 엣지 제외", extra={"skipped_count": skipped})
    return adjacency


def _assign_levels(roots: Sequence[str], adjacency: Dict[str, List[str]]) -> Dict[str, int]:
    """
    다중 출발 BFS로 레벨을 부여합니다.

    최단 거리가 아니라 FIFO 순서상 처음 방문한 경로의 깊이가 레벨이 된다.

    @param {Sequence[str]} roots - 루트 노드 id 목록.
    @param {Dict[str, List[str]]} adjacency - 정방향 인접 목록.
    @returns {Dict[str, int]} 방문 순서를 유지한 id → 레벨 매핑.
    """
    queue: Deque[Tuple[str, int]] = deque((root, 0) for root in roots)
    levels: Dict[str, int] = {}
    while queue:
        node_id, level = queue.popleft()
        if node_id in levels:
            continue
        levels[node_id] = level
        for child in adjacency.get(node_id, []):
            queue.append((child, level + 1))
    return levels


def _group_by_level(levels: Dict[str, int]) -> Dict[int, List[str]]:
    groups: Dict[int, List[str]] = {}
    for node_id, level in levels.items():
        groups.setdefault(level, []).append(node_id)
    return groups


def _level_position(level: int, index: int) -> Position:
    stagger = 0 if level % 2 == 0 else ODD_LEVEL_STAGGER
    return Position(
        x=index * HORIZONTAL_SPACING + stagger,
        y=level * VERTICAL_SPACING + TOP_OFFSET,
    )


def _place(node: RawNode, position: Position) -> PlacedNode:
    return PlacedNode(node_id=node.node_id, position=position, data=node.display_data())
