from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Sequence

from roadmapkit.roadmap_core.domain.saved_template import SavedTemplate

ALL_TAGS = "all"


class ShowcaseSort(str, Enum):
    """공개 템플릿 정렬 기준."""

    POPULAR = "popular"
    NEWEST = "newest"
    ALPHABETICAL = "alphabetical"


def collect_tags(templates: Iterable[SavedTemplate]) -> List[str]:
    """
    @param {Iterable[SavedTemplate]} templates - 공개 템플릿 목록.
    @returns {List[str]} 처음 등장한 순서를 유지한 중복 없는 태그 목록.
    """
    seen: Dict[str, None] = {}
    for template in templates:
        for tag in template.tags:
            seen.setdefault(tag, None)
    return list(seen)


def browse(
    templates: Sequence[SavedTemplate],
    search: str = "",
    tag: str = ALL_TAGS,
    sort: str = ShowcaseSort.POPULAR.value,
) -> List[SavedTemplate]:
    """
    공개 템플릿을 검색/필터/정렬합니다.

    @param {Sequence[SavedTemplate]} templates - 공개 템플릿 목록.
    @param {str} search - 제목/작성자/태그 부분 일치 검색어 (대소문자 무시).
    @param {str} tag - 정확히 일치해야 하는 태그 (`all`이면 필터 없음).
    @param {str} sort - popular/newest/alphabetical (그 외는 입력 순서 유지).
    @returns {List[SavedTemplate]} 조건에 맞는 템플릿 목록.
    """
    result = list(templates)

    if search:
        needle = search.lower()
        result = [template for template in result if _matches(template, needle)]

    if tag and tag != ALL_TAGS:
        result = [template for template in result if tag in template.tags]

    if sort == ShowcaseSort.POPULAR.value:
        result.sort(key=lambda template: template.likes, reverse=True)
    elif sort == ShowcaseSort.NEWEST.value:
        result.sort(key=lambda template: template.created_at, reverse=True)
    elif sort == ShowcaseSort.ALPHABETICAL.value:
        result.sort(key=lambda template: template.title.lower())
    return result


def _matches(template: SavedTemplate, needle: str) -> bool:
    if needle in template.title.lower():
        return True
    if template.author and needle in template.author.lower():
        return True
    return any(needle in tag.lower() for tag in template.tags)
