from roadmapkit.roadmap_core.domain.edge_style import DEFAULT_EDGE_STYLE, EdgeStyle
from roadmapkit.roadmap_core.domain.node_type import GENERATED_NODE_TYPES, NodeType
from roadmapkit.roadmap_core.domain.placed_node import ROADMAP_NODE_KIND, PlacedNode
from roadmapkit.roadmap_core.domain.position import Position
from roadmapkit.roadmap_core.domain.raw_edge import RawEdge
from roadmapkit.roadmap_core.domain.raw_node import RawNode
from roadmapkit.roadmap_core.domain.saved_template import SavedTemplate
from roadmapkit.roadmap_core.domain.template_library import TemplateLibrary
from roadmapkit.roadmap_core.domain.template_source import TemplateSource

__all__ = [
    "DEFAULT_EDGE_STYLE",
    "EdgeStyle",
    "GENERATED_NODE_TYPES",
    "NodeType",
    "PlacedNode",
    "Position",
    "ROADMAP_NODE_KIND",
    "RawEdge",
    "RawNode",
    "SavedTemplate",
    "TemplateLibrary",
    "TemplateSource",
]
