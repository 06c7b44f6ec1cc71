import random
import unittest

from roadmapkit.roadmap_core.domain.placed_node import ROADMAP_NODE_KIND
from roadmapkit.roadmap_core.domain.raw_edge import RawEdge
from roadmapkit.roadmap_core.domain.raw_node import RawNode
from roadmapkit.roadmap_core.service.layout.graph_layout import GraphLayoutEngine, layout_nodes


class FixedRandom:
    def __init__(self, values) -> None:
        """
        정해진 순서의 값을 돌려주는 난수 소스를 초기화합니다.

        @param {list} values - random() 호출마다 반환할 값.
        @returns {None} 값 목록을 저장합니다.
        """
        self._values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self._values[self.calls % len(self._values)]
        self.calls += 1
        return value


def _nodes(*ids):
    return [{"id": node_id, "label": node_id} for node_id in ids]


def _edge(source, target):
    return {"source": source, "target": target}


def _positions(placed):
    return {node.node_id: (node.position.x, node.position.y) for node in placed}


class GraphLayoutTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = GraphLayoutEngine(rng=FixedRandom([0.5]))

    def test_chain_levels(self) -> None:
        """
        A->B->C 체인은 레벨마다 y가 250씩 증가합니다.

        @returns {None} 테스트만 수행합니다.
        """
        placed = self.engine.layout(_nodes("A", "B", "C"), [_edge("A", "B"), _edge("B", "C")])
        positions = _positions(placed)
        self.assertEqual(positions["A"], (0, 100))
        self.assertEqual(positions["B"], (100, 350))
        self.assertEqual(positions["C"], (0, 600))

    def test_siblings_share_level(self) -> None:
        """
        같은 부모의 자식은 같은 y, 다른 x에 배치됩니다.

        @returns {None} 테스트만 수행합니다.
        """
        placed = self.engine.layout(_nodes("A", "B", "C"), [_edge("A", "B"), _edge("A", "C")])
        positions = _positions(placed)
        self.assertEqual(positions["A"], (0, 100))
        self.assertEqual(positions["B"], (100, 350))
        self.assertEqual(positions["C"], (450, 350))

    def test_edge_without_target_is_ignored(self) -> None:
        placed = self.engine.layout(_nodes("A", "B"), [{"source": "A"}])
        positions = _positions(placed)
        self.assertEqual(positions["A"], (0, 100))
        self.assertEqual(positions["B"], (350, 100))

    def test_edge_without_source_still_marks_target(self) -> None:
        """
        source가 없는 엣지의 target은 루트가 아니므로 대체 배치됩니다.

        @returns {None} 테스트만 수행합니다.
        """
        rng = FixedRandom([0.2, 0.4])
        placed = GraphLayoutEngine(rng=rng).layout(_nodes("A", "B"), [{"target": "B"}])
        positions = _positions(placed)
        self.assertEqual(positions["A"], (0, 100))
        self.assertEqual(positions["B"], (100.0, 200.0))

    def test_single_isolated_node(self) -> None:
        placed = GraphLayoutEngine().layout([{"id": "solo", "label": "Solo"}], [])
        self.assertEqual(len(placed), 1)
        self.assertTrue(0 <= placed[0].position.x < 500)
        self.assertTrue(0 <= placed[0].position.y < 500)

    def test_cycle_without_entry_uses_fallback(self) -> None:
        """
        진입점 없는 사이클은 모두 난수 좌표로 배치되고 입력 순서로 출력됩니다.

        @returns {None} 테스트만 수행합니다.
        """
        rng = FixedRandom([0.1, 0.2, 0.3, 0.4])
        placed = GraphLayoutEngine(rng=rng).layout(_nodes("X", "Y"), [_edge("X", "Y"), _edge("Y", "X")])
        self.assertEqual([node.node_id for node in placed], ["X", "Y"])
        self.assertAlmostEqual(placed[0].position.x, 50.0)
        self.assertAlmostEqual(placed[0].position.y, 100.0)
        self.assertAlmostEqual(placed[1].position.x, 150.0)
        self.assertAlmostEqual(placed[1].position.y, 200.0)
        self.assertEqual(rng.calls, 4)

    def test_leveled_nodes_come_before_fallback(self) -> None:
        placed = self.engine.layout(
            _nodes("X", "A", "Y", "B"),
            [_edge("X", "Y"), _edge("Y", "X"), _edge("A", "B")],
        )
        self.assertEqual([node.node_id for node in placed], ["A", "B", "X", "Y"])

    def test_every_input_node_emitted_once(self) -> None:
        nodes = _nodes("A", "B", "C", "D", "E")
        edges = [_edge("A", "B"), _edge("B", "C"), _edge("D", "D"), _edge("A", "ghost")]
        placed = self.engine.layout(nodes, edges)
        self.assertEqual(sorted(node.node_id for node in placed), ["A", "B", "C", "D", "E"])

    def test_dangling_target_occupies_slot(self) -> None:
        """
        입력에 없는 id도 레벨 슬롯을 차지하지만 출력되지 않습니다.

        @returns {None} 테스트만 수행합니다.
        """
        placed = self.engine.layout(_nodes("A", "B"), [_edge("A", "ghost"), _edge("A", "B")])
        positions = _positions(placed)
        self.assertNotIn("ghost", positions)
        self.assertEqual(positions["B"], (450, 350))

    def test_diamond_keeps_first_discovery(self) -> None:
        nodes = _nodes("A", "B", "C", "D")
        edges = [_edge("A", "B"), _edge("A", "C"), _edge("B", "D"), _edge("C", "D")]
        positions = _positions(self.engine.layout(nodes, edges))
        self.assertEqual(positions["D"], (0, 600))

    def test_emits_fields_verbatim(self) -> None:
        node = {
            "id": "n1",
            "label": "React",
            "description": "UI 라이브러리",
            "type": "framework",
            "emoji": "⚛️",
            "extra": "ignored",
        }
        payload = layout_nodes([node], [])[0]
        self.assertEqual(payload["id"], "n1")
        self.assertEqual(payload["type"], ROADMAP_NODE_KIND)
        self.assertEqual(payload["position"], {"x": 0, "y": 100})
        self.assertEqual(
            payload["data"],
            {"label": "React", "description": "UI 라이브러리", "type": "framework", "emoji": "⚛️"},
        )

    def test_unknown_node_type_passes_through(self) -> None:
        payload = layout_nodes([{"id": "n1", "label": "Odd", "type": "legendary"}])[0]
        self.assertEqual(payload["data"]["type"], "legendary")

    def test_empty_and_invalid_input(self) -> None:
        self.assertEqual(self.engine.layout([], []), [])
        self.assertEqual(self.engine.layout(None, None), [])
        self.assertEqual(self.engine.layout("nodes", {"edges": 1}), [])
        self.assertEqual(self.engine.layout({"id": "A"}), [])

    def test_invalid_edges_are_tolerated(self) -> None:
        placed = self.engine.layout(_nodes("A", "B"), ["edge", None, 3, _edge("A", "B")])
        positions = _positions(placed)
        self.assertEqual(positions["B"], (100, 350))

        placed = self.engine.layout(_nodes("A", "B"), "not-a-list")
        self.assertEqual(len(placed), 2)

    def test_duplicate_ids_last_wins(self) -> None:
        nodes = [{"id": "A", "label": "first"}, {"id": "B", "label": "b"}, {"id": "A", "label": "second"}]
        placed = self.engine.layout(nodes, [])
        self.assertEqual([node.node_id for node in placed], ["A", "B"])
        self.assertEqual(placed[0].data["label"], "second")

    def test_nodes_without_id_are_skipped(self) -> None:
        placed = self.engine.layout([{"label": "no id"}, {"id": ""}, {"id": 7}, {"id": "A"}], [])
        self.assertEqual([node.node_id for node in placed], ["A"])

    def test_accepts_domain_objects(self) -> None:
        placed = self.engine.layout([RawNode("A"), RawNode("B")], [RawEdge("A", "B")])
        self.assertEqual(_positions(placed)["B"], (100, 350))

    def test_connected_graph_is_deterministic(self) -> None:
        nodes = _nodes("A", "B", "C", "D")
        edges = [_edge("A", "B"), _edge("A", "C"), _edge("C", "D")]
        first = layout_nodes(nodes, edges)
        second = layout_nodes(nodes, edges)
        self.assertEqual(first, second)

    def test_seeded_fallback_is_reproducible(self) -> None:
        nodes = _nodes("X", "Y")
        edges = [_edge("X", "Y"), _edge("Y", "X")]
        first = layout_nodes(nodes, edges, rng=random.Random(42))
        second = layout_nodes(nodes, edges, rng=random.Random(42))
        self.assertEqual(first, second)

    def test_input_is_not_mutated(self) -> None:
        nodes = _nodes("A", "B")
        edges = [_edge("A", "B")]
        snapshot = ([dict(node) for node in nodes], [dict(edge) for edge in edges])
        self.engine.layout(nodes, edges)
        self.assertEqual((nodes, edges), snapshot)


if __name__ == "__main__":
    unittest.main()
