from __future__ import annotations

from typing import Any, Dict, List, Tuple

from roadmapkit.roadmap_core.common.identifiers import now_millis
from roadmapkit.roadmap_core.domain.edge_style import DEFAULT_EDGE_STYLE
from roadmapkit.roadmap_core.domain.node_type import NodeType
from roadmapkit.roadmap_core.domain.placed_node import ROADMAP_NODE_KIND
from roadmapkit.roadmap_core.domain.saved_template import SavedTemplate
from roadmapkit.roadmap_core.domain.template_source import TemplateSource

_LOADED_AT = now_millis()


def _node(node_id: str, label: str, node_type: NodeType, emoji: str, x: int, y: int) -> Dict[str, Any]:
    return {
        "id": node_id,
        "type": ROADMAP_NODE_KIND,
        "position": {"x": x, "y": y},
        "data": {"label": label, "type": node_type.value, "emoji": emoji},
    }


def _chain(*pairs: Tuple[str, str]) -> Tuple[Dict[str, Any], ...]:
    return tuple(
        {
            "id": f"e{source}-{target}",
            "source": source,
            "target": target,
            "animated": DEFAULT_EDGE_STYLE.animated,
            "style": DEFAULT_EDGE_STYLE.to_payload(),
        }
        for source, target in pairs
    )


OFFICIAL_TEMPLATES: List[SavedTemplate] = [
    SavedTemplate(
        template_id="official-react",
        title="React.js Roadmap",
        source=TemplateSource.OFFICIAL,
        created_at=_LOADED_AT,
        updated_at=_LOADED_AT,
        is_public=True,
        author="RoadmapKit Team",
        likes=1205,
        views=5000,
        tags=("Frontend", "React", "JavaScript"),
        nodes=(
            _node("1", "HTML/CSS", NodeType.BEGINNER, "🎨", 250, 50),
            _node("2", "JavaScript", NodeType.BEGINNER, "📜", 250, 200),
            _node("3", "React Basics", NodeType.INTERMEDIATE, "⚛️", 250, 350),
            _node("4", "State Managers", NodeType.ADVANCED, "📦", 100, 500),
            _node("5", "Next.js", NodeType.FRAMEWORK, "▲", 400, 500),
        ),
        edges=_chain(("1", "2"), ("2", "3"), ("3", "4"), ("3", "5")),
    ),
    SavedTemplate(
        template_id="official-python",
        title="Python Developer",
        source=TemplateSource.OFFICIAL,
        created_at=_LOADED_AT,
        updated_at=_LOADED_AT,
        is_public=True,
        author="RoadmapKit Team",
        likes=890,
        views=3400,
        tags=("Backend", "Python", "Data Science"),
        nodes=(
            _node("1", "Syntax Basics", NodeType.BEGINNER, "🐍", 250, 50),
            _node("2", "Data Structures", NodeType.INTERMEDIATE, "📊", 250, 200),
            _node("3", "Django / Flask", NodeType.FRAMEWORK, "🌐", 250, 350),
        ),
        edges=_chain(("1", "2"), ("2", "3")),
    ),
]

MOCK_PUBLIC_TEMPLATES: List[SavedTemplate] = [
    SavedTemplate(
        template_id="public-devops",
        title="DevOps Essentials 2024",
        source=TemplateSource.CUSTOM,
        created_at=_LOADED_AT - 100_000_000,
        updated_at=_LOADED_AT - 500_000,
        is_public=True,
        author="cloud_ninja",
        likes=342,
        views=1200,
        tags=("DevOps", "Cloud", "CI/CD"),
        nodes=(
            _node("1", "Linux", NodeType.BEGINNER, "🐧", 250, 50),
            _node("2", "Docker", NodeType.INTERMEDIATE, "🐳", 250, 200),
            _node("3", "Kubernetes", NodeType.ADVANCED, "☸️", 250, 350),
        ),
        edges=_chain(("1", "2"), ("2", "3")),
    ),
    SavedTemplate(
        template_id="public-uiux",
        title="UI/UX Design Path",
        source=TemplateSource.CUSTOM,
        created_at=_LOADED_AT - 200_000_000,
        updated_at=_LOADED_AT - 1_000_000,
        is_public=True,
        author="design_guru",
        likes=567,
        views=2100,
        tags=("Design", "Figma", "UX"),
        nodes=(
            _node("1", "Color Theory", NodeType.BEGINNER, "🎨", 250, 50),
            _node("2", "Typography", NodeType.BEGINNER, "🔤", 250, 200),
            _node("3", "Figma", NodeType.INTERMEDIATE, "🖌️", 250, 350),
        ),
        edges=_chain(("1", "2"), ("2", "3")),
    ),
]

SEED_PUBLIC_TEMPLATES: List[SavedTemplate] = OFFICIAL_TEMPLATES + MOCK_PUBLIC_TEMPLATES
