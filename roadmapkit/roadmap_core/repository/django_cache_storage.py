from __future__ import annotations

from typing import Optional

from django.core.cache import caches

from roadmapkit.roadmap_core.repository.key_value_storage import KeyValueStorage


class DjangoCacheStorage(KeyValueStorage):
    """Django 캐시 백엔드(locmem/Redis) 기반 저장소. 만료 없이 보관한다."""

    def __init__(self, alias: str = "default", prefix: str = "roadmapkit") -> None:
        """
        @param alias settings.CACHES 별칭.
        @param prefix 키 접두사.
        @returns None
        """
        self._alias = alias
        self._prefix = prefix

    def get(self, key: str) -> Optional[str]:
        return caches[self._alias].get(self._key(key))

    def set(self, key: str, value: str) -> None:
        caches[self._alias].set(self._key(key), value, timeout=None)

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"
