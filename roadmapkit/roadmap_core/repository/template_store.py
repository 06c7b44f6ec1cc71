from __future__ import annotations

import json
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from roadmapkit.roadmap_core.common.identifiers import generate_template_id, now_millis
from roadmapkit.roadmap_core.domain.saved_template import SavedTemplate
from roadmapkit.roadmap_core.domain.template_library import TemplateLibrary
from roadmapkit.roadmap_core.domain.template_source import TemplateSource
from roadmapkit.roadmap_core.repository.key_value_storage import KeyValueStorage
from roadmapkit.roadmap_core.repository.seed_templates import SEED_PUBLIC_TEMPLATES

logger = logging.getLogger(__name__)

MY_TEMPLATES_KEY = "neo-roadmap-templates"
PUBLIC_TEMPLATES_KEY = "neo-roadmap-public"
PUBLISHED_AUTHOR = "You"


class TemplateStore:
    """
    내 템플릿/공개 템플릿 저장소.

    모든 변경 연산은 입력 스냅샷을 수정하지 않고 새 TemplateLibrary를 반환하며,
    변경된 목록은 즉시 키-값 저장소에 기록한다.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        seed_public: Optional[Sequence[SavedTemplate]] = None,
    ) -> None:
        """
        @param storage 키-값 저장소.
        @param seed_public 항상 노출되는 공식/예시 공개 템플릿.
        @returns None
        """
        self._storage = storage
        self._seed_public: Tuple[SavedTemplate, ...] = tuple(
            SEED_PUBLIC_TEMPLATES if seed_public is None else seed_public
        )
        self._seed_ids = {template.template_id for template in self._seed_public}

    def load(self) -> TemplateLibrary:
        """
        저장소에서 템플릿 스냅샷을 읽습니다.

        @returns 내 템플릿과 (시드 + 사용자 공개) 공개 템플릿 스냅샷.
        """
        mine = self._read(MY_TEMPLATES_KEY)
        published = [t for t in self._read(PUBLIC_TEMPLATES_KEY) if t.template_id not in self._seed_ids]
        return TemplateLibrary(
            my_templates=tuple(mine),
            public_templates=self._seed_public + tuple(published),
        )

    def get(self, library: TemplateLibrary, template_id: str) -> Optional[SavedTemplate]:
        """
        @param library 현재 스냅샷.
        @param template_id 템플릿 ID.
        @returns 내 템플릿 우선, 없으면 공개 템플릿, 둘 다 없으면 None.
        """
        return library.find_mine(template_id) or library.find_public(template_id)

    def save(self, library: TemplateLibrary, template: SavedTemplate) -> TemplateLibrary:
        """
        같은 ID를 교체하고 맨 앞에 추가합니다.

        @param library 현재 스냅샷.
        @param template 저장할 템플릿.
        @returns 갱신된 스냅샷.
        """
        mine = (template,) + tuple(t for t in library.my_templates if t.template_id != template.template_id)
        self._write(MY_TEMPLATES_KEY, mine)
        logger.info("템플릿 저장", extra={"template_id": template.template_id, "count": len(mine)})
        return TemplateLibrary(my_templates=mine, public_templates=library.public_templates)

    def delete(self, library: TemplateLibrary, template_id: str) -> TemplateLibrary:
        """
        @param library 현재 스냅샷.
        @param template_id 삭제할 템플릿 ID.
        @returns 갱신된 스냅샷.
        """
        mine = tuple(t for t in library.my_templates if t.template_id != template_id)
        self._write(MY_TEMPLATES_KEY, mine)
        logger.info("템플릿 삭제", extra={"template_id": template_id})
        return TemplateLibrary(my_templates=mine, public_templates=library.public_templates)

    def publish(
        self,
        library: TemplateLibrary,
        template_id: str,
        is_public: bool,
        tags: Optional[Iterable[str]] = None,
    ) -> TemplateLibrary:
        """
        내 템플릿의 공개 여부를 바꾸고 공개 목록을 갱신합니다.

        @param library 현재 스냅샷.
        @param template_id 대상 템플릿 ID.
        @param is_public 공개 여부.
        @param tags 지정 시 템플릿 태그를 교체.
        @returns 갱신된 스냅샷 (내 템플릿에 없는 ID면 입력 스냅샷 그대로).
        """
        current = library.find_mine(template_id)
        if current is None:
            logger.warning("공개 대상 템플릿 없음", extra={"template_id": template_id})
            return library

        updated = current.replace(
            is_public=is_public,
            tags=tuple(tags) if tags is not None else current.tags,
            author=PUBLISHED_AUTHOR,
        )
        library = self.save(library, updated)

        public = tuple(t for t in library.public_templates if t.template_id != template_id)
        if is_public:
            public = (updated,) + public
        self._write(PUBLIC_TEMPLATES_KEY, self._user_published(public))
        logger.info("템플릿 공개 상태 변경", extra={"template_id": template_id, "is_public": is_public})
        return TemplateLibrary(my_templates=library.my_templates, public_templates=public)

    def fork(self, library: TemplateLibrary, template: SavedTemplate) -> Tuple[TemplateLibrary, SavedTemplate]:
        """
        템플릿을 새 ID의 개인 사본으로 복제해 저장합니다.

        @param library 현재 스냅샷.
        @param template 복제할 템플릿.
        @returns (갱신된 스냅샷, 생성된 사본).
        """
        timestamp = now_millis()
        copy = template.replace(
            template_id=generate_template_id(),
            title=f"Copy of {template.title}",
            source=TemplateSource.CUSTOM,
            author=None,
            is_public=False,
            created_at=timestamp,
            updated_at=timestamp,
        )
        return self.save(library, copy), copy

    def _user_published(self, public: Sequence[SavedTemplate]) -> List[SavedTemplate]:
        return [t for t in public if t.user_owned and t.template_id not in self._seed_ids]

    def _read(self, key: str) -> List[SavedTemplate]:
        """
        @param key 저장 키.
        @returns 역직렬화된 템플릿 목록 (손상된 데이터는 빈 목록).
        """
        raw = self._storage.get(key)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except (TypeError, json.JSONDecodeError) as exc:
            logger.error("템플릿 로드 실패", extra={"key": key, "error": str(exc)})
            return []
        if not isinstance(items, list):
            logger.error("템플릿 목록 형식 오류", extra={"key": key})
            return []

        templates = []
        for item in items:
            try:
                templates.append(SavedTemplate.from_payload(item))
            except (TypeError, ValueError) as exc:
                logger.warning("손상된 템플릿 제외", extra={"key": key, "error": str(exc)})
        return templates

    def _write(self, key: str, templates: Sequence[SavedTemplate]) -> None:
        payload = [template.to_payload() for template in templates]
        self._storage.set(key, json.dumps(payload, ensure_ascii=False))
