# =============================================================================
# AI 클라이언트 모듈
# =============================================================================
# 외부 생성 서비스와 통신하는 클라이언트를 제공합니다.
#
# 지원 서비스:
#   - Gemini: Google LLM API (로드맵 그래프 생성)
#
# 사용 예시:
#   from roadmapkit.roadmap_core.client import GeminiClient
#
#   gemini = GeminiClient()
#   response = gemini.generate_json("JSON으로 답변: ...")
# =============================================================================

from __future__ import annotations

from roadmapkit.roadmap_core.client.gemini_client import (
    GeminiClient,
    GeminiModel,
    GenerationConfig,
)
from roadmapkit.roadmap_core.client.gemini_response import (
    GeminiResponse,
    create_empty_response,
)

__all__ = [
    "GeminiClient",
    "GeminiModel",
    "GeminiResponse",
    "GenerationConfig",
    "create_empty_response",
]
