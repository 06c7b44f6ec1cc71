from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from roadmapkit.roadmap_core.domain.saved_template import SavedTemplate


@dataclass(frozen=True)
class TemplateLibrary:
    """내 템플릿/공개 템플릿의 불변 스냅샷."""

    my_templates: Tuple[SavedTemplate, ...] = ()
    public_templates: Tuple[SavedTemplate, ...] = ()

    def find_mine(self, template_id: str) -> Optional[SavedTemplate]:
        """
        @param template_id 템플릿 ID.
        @returns 내 템플릿 중 일치 항목 또는 None.
        """
        return next((t for t in self.my_templates if t.template_id == template_id), None)

    def find_public(self, template_id: str) -> Optional[SavedTemplate]:
        """
        @param template_id 템플릿 ID.
        @returns 공개 템플릿 중 일치 항목 또는 None.
        """
        return next((t for t in self.public_templates if t.template_id == template_id), None)
