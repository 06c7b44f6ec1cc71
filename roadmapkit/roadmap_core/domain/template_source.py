from __future__ import annotations

from enum import Enum


class TemplateSource(str, Enum):
    """템플릿 출처."""

    OFFICIAL = "official"
    CUSTOM = "custom"
    IMPORTED = "imported"
