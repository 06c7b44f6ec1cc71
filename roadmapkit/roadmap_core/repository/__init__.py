from roadmapkit.roadmap_core.repository.key_value_storage import InMemoryStorage, KeyValueStorage
from roadmapkit.roadmap_core.repository.seed_templates import (
    MOCK_PUBLIC_TEMPLATES,
    OFFICIAL_TEMPLATES,
    SEED_PUBLIC_TEMPLATES,
)
from roadmapkit.roadmap_core.repository.template_store import TemplateStore

__all__ = [
    "InMemoryStorage",
    "KeyValueStorage",
    "MOCK_PUBLIC_TEMPLATES",
    "OFFICIAL_TEMPLATES",
    "SEED_PUBLIC_TEMPLATES",
    "TemplateStore",
]
