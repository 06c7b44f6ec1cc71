# =============================================================================
# Gemini 응답 데이터 모델
# =============================================================================
# Gemini API 응답을 파싱된 JSON과 원본 텍스트로 함께 보관합니다.
# 가져오기 파이프라인은 raw_text 유무로 "생성 실패"와 "JSON 파싱 실패"를 구분합니다.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class GeminiResponse:
    """
    Google Gemini API 응답 래퍼 클래스.

    Attributes:
        data (Optional[Dict[str, Any]]):
            파싱된 JSON 데이터. 파싱 실패 시 None.
        raw_text (str):
            Gemini API로부터 받은 원본 텍스트 응답.
        created_at (datetime):
            응답 생성 시각.
        model (Optional[str]):
            응답을 생성한 모델 이름.
        metadata (Dict[str, Any]):
            추가 메타데이터.

    Example:
        >>> response = GeminiResponse(data={"nodes": []}, raw_text='{"nodes": []}')
        >>> response.is_valid
        True
        >>> response.get_list("edges")
        []
    """

    data: Optional[Dict[str, Any]]
    raw_text: str
    created_at: datetime = field(default_factory=datetime.now)
    model: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        """
        Returns:
            bool: data가 비어있지 않은 딕셔너리이면 True.
        """
        return self.data is not None and len(self.data) > 0

    @property
    def is_empty(self) -> bool:
        """
        Returns:
            bool: 모델이 아무 텍스트도 반환하지 않았으면 True.
        """
        return not self.raw_text.strip()

    def get(self, key: str, default: Any = None) -> Any:
        """
        딕셔너리에서 안전하게 값을 가져옵니다.

        Args:
            key: 가져올 키.
            default: 키가 없을 때 반환할 기본값.

        Returns:
            Any: 해당 키의 값 또는 기본값.
        """
        if self.data is None:
            return default
        return self.data.get(key, default)

    def get_list(self, key: str, default: Optional[List[Any]] = None) -> List[Any]:
        """
        딕셔너리에서 리스트 값을 안전하게 가져옵니다.

        값이 리스트가 아닌 경우 기본값(빈 리스트)을 반환합니다.

        Args:
            key: 가져올 키.
            default: 기본값.

        Returns:
            List[Any]: 해당 키의 리스트 값 또는 기본값.
        """
        if default is None:
            default = []
        value = self.get(key, default)
        if isinstance(value, list):
            return value
        return default

    def __repr__(self) -> str:
        """디버깅용 문자열 표현."""
        data_preview = str(self.data)[:50] + "..." if self.data and len(str(self.data)) > 50 else str(self.data)
        return (
            f"GeminiResponse("
            f"is_valid={self.is_valid}, "
            f"model={self.model}, "
            f"data_preview={data_preview})"
        )


def create_empty_response(model: Optional[str] = None) -> GeminiResponse:
    """
    빈 응답 객체를 생성합니다.

    API 호출 실패, 비활성화 상태, 타임아웃 시 기본 응답으로 사용합니다.

    Args:
        model: 모델 이름 (선택적).

    Returns:
        GeminiResponse: 빈 데이터를 가진 응답 객체.
    """
    return GeminiResponse(
        data=None,
        raw_text="",
        model=model,
        metadata={"error": "empty_response"},
    )
