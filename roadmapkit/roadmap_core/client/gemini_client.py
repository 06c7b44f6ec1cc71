# =============================================================================
# Google Gemini API 클라이언트
# =============================================================================
# 로드맵 가져오기 파이프라인이 노드/엣지 그래프를 요청할 때 사용하는
# Gemini 클라이언트입니다.
#
# 주요 기능:
#   - 텍스트 생성 (generate_text)
#   - JSON 모드 생성 및 파싱 (generate_json, 응답 스키마 지정 가능)
#   - 재시도 로직 (지수 백오프)
#   - 헬스 체크
#
# 환경 변수:
#   - GEMINI_API_KEY: Google AI Studio에서 발급받은 API 키
#   - AI_DISABLE_LLM: "true"로 설정 시 LLM 호출 비활성화
#   - AI_DISABLE_EXTERNAL: "true"로 설정 시 모든 외부 API 비활성화
#
# 사용 예시:
#   client = GeminiClient()
#   if client.available():
#       response = client.generate_json(prompt, response_schema=schema)
#       if response.is_valid:
#           nodes = response.get_list("nodes")
# =============================================================================

from __future__ import annotations

import json
import logging
import os
import re
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from google import genai
from google.genai import types as genai_types
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from roadmapkit.roadmap_core.client.gemini_response import (
    GeminiResponse,
    create_empty_response,
)

logger = logging.getLogger(__name__)

# LLM 응답에서 JSON을 추출하기 위한 패턴
_CODE_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


class GeminiModel(str, Enum):
    """
    로드맵 생성에 사용하는 Gemini 모델.

    AI_DEFAULT_MODEL 환경변수로 다른 모델 이름을 지정할 수 있다.
    """

    FLASH_25 = "gemini-2.5-flash"
    """Gemini 2.5 Flash - 빠른 응답, 구조화 출력 (기본값)."""


@dataclass
class GenerationConfig:
    """
    텍스트 생성 설정.

    Attributes:
        temperature (float):
            응답의 무작위성 (0.0~2.0). 낮을수록 결정적.
        top_p (float):
            누적 확률 샘플링 (0.0~1.0).
        max_output_tokens (int):
            최대 출력 토큰 수.
        stop_sequences (List[str]):
            생성을 중단할 문자열들.
    """

    temperature: float = 0.7
    top_p: float = 0.95
    max_output_tokens: int = 8192
    stop_sequences: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환합니다."""
        config: Dict[str, Any] = {
            "temperature": self.temperature,
            "top_p": self.top_p,
            "max_output_tokens": self.max_output_tokens,
        }
        if self.stop_sequences:
            config["stop_sequences"] = self.stop_sequences
        return config


def create_retry_decorator(
    max_attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 10.0,
) -> Callable:
    """
    재시도 데코레이터를 생성합니다.

    지수 백오프(exponential backoff) 전략으로 일시적인 네트워크 오류에서 복구합니다.

    Args:
        max_attempts: 최대 시도 횟수.
        min_wait: 최소 대기 시간(초).
        max_wait: 최대 대기 시간(초).

    Returns:
        Callable: tenacity 재시도 데코레이터.
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type((ConnectionError, TimeoutError)),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


class GeminiClient:
    """
    Google Gemini API 클라이언트.

    API 키가 없거나 환경변수로 비활성화된 경우 `available()`이 False를 반환하며,
    생성 메서드는 예외 대신 빈 응답을 돌려준다.

    Example:
        >>> client = GeminiClient()
        >>> response = client.generate_json("JSON으로 답변: 파이썬 로드맵")
        >>> if response.is_valid:
        ...     print(response.get_list("nodes"))
    """

    DEFAULT_MODEL = GeminiModel.FLASH_25
    """기본 모델."""

    DEFAULT_TIMEOUT = 30
    """기본 타임아웃(초)."""

    DEFAULT_MAX_RETRIES = 3
    """기본 최대 재시도 횟수."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Union[str, GeminiModel, None] = None,
        timeout: int = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        """
        GeminiClient 인스턴스를 초기화합니다.

        Args:
            api_key:
                Gemini API 키. 미제공 시 GEMINI_API_KEY 환경변수 사용.
            model:
                사용할 모델. 미제공 시 AI_DEFAULT_MODEL 환경변수 또는 기본 모델.
            timeout:
                API 요청 타임아웃(초).
            max_retries:
                실패 시 최대 시도 횟수.
        """
        self._api_key = api_key or os.getenv("GEMINI_API_KEY", "")

        if model is None:
            model = os.getenv("AI_DEFAULT_MODEL") or self.DEFAULT_MODEL
        self._model = model.value if isinstance(model, GeminiModel) else str(model)

        self._timeout = timeout
        self._max_retries = max_retries

        # AI_DISABLE_LLM 또는 AI_DISABLE_EXTERNAL이 "true"면 비활성화
        self._disabled = (
            os.getenv("AI_DISABLE_LLM", "").lower() == "true"
            or os.getenv("AI_DISABLE_EXTERNAL", "").lower() == "true"
        )

        self._client: Optional[Any] = None
        if self._api_key and not self._disabled:
            try:
                self._client = genai.Client(
                    api_key=self._api_key,
                    http_options=genai_types.HttpOptions(timeout=self._timeout * 1000),
                )
                logger.info("Gemini 클라이언트 초기화 성공", extra={"model": self._model})
            except Exception as e:
                logger.error("Gemini 클라이언트 초기화 실패", extra={"error": str(e)})
                self._client = None
        elif self._disabled:
            logger.info("Gemini 클라이언트가 환경변수로 비활성화됨")

        self._execute_with_retry = create_retry_decorator(
            max_attempts=max_retries,
        )(self._execute_generation)

    @property
    def model_name(self) -> str:
        """
        Returns:
            str: 사용 중인 모델 이름 (예: 'gemini-2.5-flash').
        """
        return self._model

    @property
    def is_available(self) -> bool:
        """
        Returns:
            bool: API 키가 있고 클라이언트가 초기화되었으며 비활성화되지 않았으면 True.
        """
        return self._client is not None and not self._disabled

    def available(self) -> bool:
        """
        클라이언트 사용 가능 여부 (레거시 메서드).

        Returns:
            bool: 사용 가능 여부.
        """
        return self.is_available

    def generate_text(
        self,
        contents: str,
        config: Optional[GenerationConfig] = None,
        system_instruction: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        주어진 프롬프트에 대한 텍스트 응답을 생성합니다.

        Args:
            contents:
                생성 요청 프롬프트.
            config:
                생성 설정. None이면 모델 기본값 사용.
            system_instruction:
                시스템 지시사항.
            response_schema:
                지정 시 JSON 모드(application/json)로 요청하고 스키마를 전달.

        Returns:
            str: 생성된 텍스트. 오류 발생 시 빈 문자열.
        """
        if not self.is_available:
            logger.warning("Gemini 클라이언트가 사용 불가능한 상태")
            return ""

        try:
            start_time = time.time()
            result = self._execute_with_retry(
                contents=contents,
                config=config,
                system_instruction=system_instruction,
                response_schema=response_schema,
            )
            logger.debug(
                "텍스트 생성 완료",
                extra={
                    "model": self._model,
                    "elapsed_seconds": round(time.time() - start_time, 2),
                    "response_length": len(result),
                },
            )
            return result
        except Exception as e:
            logger.error(
                "텍스트 생성 실패",
                extra={"error": str(e), "model": self._model},
                exc_info=True,
            )
            return ""

    def _execute_generation(
        self,
        contents: str,
        config: Optional[GenerationConfig] = None,
        system_instruction: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        실제 API 호출을 수행합니다. 재시도 데코레이터가 적용됩니다.
        """
        if self._client is None:
            return ""

        options: Dict[str, Any] = dict(config.to_dict()) if config else {}
        if system_instruction:
            options["system_instruction"] = system_instruction
        if response_schema is not None:
            options["response_mime_type"] = "application/json"
            options["response_schema"] = response_schema

        response = self._client.models.generate_content(
            model=self._model,
            contents=contents,
            config=genai_types.GenerateContentConfig(**options) if options else None,
        )
        return getattr(response, "text", "") or ""

    def generate_json(
        self,
        contents: str,
        config: Optional[GenerationConfig] = None,
        system_instruction: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> GeminiResponse:
        """
        JSON 형식의 응답을 생성하고 파싱합니다.

        JSON 모드에서도 모델이 마크다운 코드 블록을 덧붙이는 경우가 있어
        코드 블록과 본문 중 JSON 객체 부분을 순서대로 추출한다.

        Args:
            contents:
                JSON 응답을 요청하는 프롬프트.
            config:
                생성 설정.
            system_instruction:
                시스템 지시사항.
            response_schema:
                응답 JSON 스키마.

        Returns:
            GeminiResponse: 파싱된 JSON과 원본 텍스트.
                - response.is_valid: JSON 파싱 성공 여부
                - response.raw_text: 원본 응답 텍스트 (비어 있으면 생성 실패)
        """
        raw_text = self.generate_text(
            contents=contents,
            config=config,
            system_instruction=system_instruction,
            response_schema=response_schema,
        )
        if not raw_text:
            return create_empty_response(model=self._model)

        data = _safe_json_parse(raw_text)
        return GeminiResponse(
            data=data,
            raw_text=raw_text,
            model=self._model,
            metadata={
                "parse_success": data is not None,
                "raw_length": len(raw_text),
            },
        )

    def health_check(self) -> Dict[str, Any]:
        """
        클라이언트 상태를 확인합니다.

        Returns:
            Dict[str, Any]: 상태 정보 딕셔너리.
        """
        return {
            "available": self.is_available,
            "model": self._model,
            "api_key_set": bool(self._api_key),
            "disabled": self._disabled,
            "timeout": self._timeout,
            "max_retries": self._max_retries,
        }


def _safe_json_parse(text: str) -> Optional[Dict[str, Any]]:
    """
    텍스트에서 JSON 객체를 안전하게 파싱합니다.

    1. 전체 텍스트를 JSON으로 파싱
    2. 마크다운 코드 블록에서 JSON 추출
    3. 정규표현식으로 JSON 객체 추출

    Args:
        text: JSON이 포함된 텍스트.

    Returns:
        Optional[Dict[str, Any]]: 파싱된 JSON 객체 또는 None.
    """
    if not text or not text.strip():
        return None

    text = text.strip()
    candidates = [text]

    code_match = _CODE_BLOCK_RE.search(text)
    if code_match:
        candidates.append(code_match.group(1).strip())

    obj_match = _JSON_OBJECT_RE.search(text)
    if obj_match:
        candidates.append(obj_match.group(0))

    for candidate in candidates:
        try:
            result = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(result, dict):
            return result

    logger.warning("JSON 파싱 실패", extra={"raw_length": len(text)})
    return None
