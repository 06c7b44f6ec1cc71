from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Optional


class KeyValueStorage(ABC):
    """템플릿 JSON을 보관하는 키-값 저장소 인터페이스."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        @param key 저장 키.
        @returns 저장된 문자열 또는 None.
        """
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        @param key 저장 키.
        @param value 저장할 문자열.
        @returns None
        """
        raise NotImplementedError


class InMemoryStorage(KeyValueStorage):
    """프로세스 메모리 기반 저장소."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        """
        @param initial 초기 키-값.
        @returns None
        """
        self._items: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value
