from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional, Tuple

from roadmapkit.roadmap_core.client import GeminiClient, GeminiResponse, GenerationConfig
from roadmapkit.roadmap_core.common.identifiers import generate_template_id, now_millis
from roadmapkit.roadmap_core.common.schema_validation import (
    SchemaError,
    validate_generated_roadmap,
    validate_template_output,
)
from roadmapkit.roadmap_core.domain.saved_template import SavedTemplate
from roadmapkit.roadmap_core.domain.template_source import TemplateSource
from roadmapkit.roadmap_core.repository.template_store import TemplateStore
from roadmapkit.roadmap_core.service.importer.errors import (
    EmptyInputError,
    EmptyRoadmapError,
    GenerationUnavailableError,
    InvalidGenerationError,
)
from roadmapkit.roadmap_core.service.importer.page_fetcher import PageContentFetcher
from roadmapkit.roadmap_core.service.importer.prompts import ROADMAP_RESPONSE_SCHEMA, build_generation_prompt
from roadmapkit.roadmap_core.service.importer.topic import is_url_input, resolve_topic
from roadmapkit.roadmap_core.service.layout.edge_formatter import format_edges
from roadmapkit.roadmap_core.service.layout.graph_layout import GraphLayoutEngine

logger = logging.getLogger(__name__)

# 노드 id/타입 일관성을 위해 기본값보다 낮은 temperature를 사용
ROADMAP_GENERATION_CONFIG = GenerationConfig(temperature=0.4)


class RoadmapImportService:
    """URL/주제 입력을 생성 모델로 로드맵 그래프로 만든 뒤 배치해 템플릿으로 저장하는 서비스."""

    def __init__(
        self,
        llm_client: Optional[GeminiClient] = None,
        fetcher: Optional[PageContentFetcher] = None,
        layout_engine: Optional[GraphLayoutEngine] = None,
        template_store: Optional[TemplateStore] = None,
        generation_config: Optional[GenerationConfig] = None,
    ) -> None:
        """
        가져오기에 필요한 의존성을 초기화합니다.

        @param {Optional[GeminiClient]} llm_client - 생성 모델 클라이언트.
        @param {Optional[PageContentFetcher]} fetcher - 페이지 본문 수집기.
        @param {Optional[GraphLayoutEngine]} layout_engine - 레이아웃 엔진.
        @param {Optional[TemplateStore]} template_store - 템플릿 저장소 (없으면 저장 생략).
        @param {Optional[GenerationConfig]} generation_config - 생성 설정.
        @returns {None} 내부 상태를 구성합니다.
        """
        self._llm_client = llm_client or GeminiClient()
        self._fetcher = fetcher or PageContentFetcher()
        self._layout_engine = layout_engine or GraphLayoutEngine()
        self._template_store = template_store
        self._generation_config = generation_config or ROADMAP_GENERATION_CONFIG

    def import_roadmap(self, user_input: str, persist: bool = True) -> SavedTemplate:
        """
        입력으로부터 배치된 로드맵 템플릿을 생성합니다.

        @param {str} user_input - URL 또는 주제 문자열.
        @param {bool} persist - True면 생성한 템플릿을 내 템플릿에 저장.
        @returns {SavedTemplate} source가 imported인 새 템플릿.
        @throws {RoadmapImportError} 입력/생성/응답 단계가 실패할 때.
        """
        user_input = (user_input or "").strip()
        if not user_input:
            raise EmptyInputError()

        started = time.time()
        topic = resolve_topic(user_input)
        context = self._fetcher.fetch(user_input) if user_input.startswith("http") else ""
        logger.info(
            "로드맵 가져오기 시작",
            extra={"topic": topic, "context_length": len(context)},
        )

        if not self._llm_client.available():
            raise GenerationUnavailableError()
        response = self._llm_client.generate_json(
            build_generation_prompt(topic, context),
            config=self._generation_config,
            response_schema=ROADMAP_RESPONSE_SCHEMA,
        )
        raw_nodes, raw_edges = read_generated_graph(response)

        nodes = [placed.to_payload() for placed in self._layout_engine.layout(raw_nodes, raw_edges)]
        edges = format_edges(raw_edges)

        timestamp = now_millis()
        template = SavedTemplate(
            template_id=generate_template_id(),
            title=topic,
            source=TemplateSource.IMPORTED,
            source_url=user_input if is_url_input(user_input) else None,
            created_at=timestamp,
            updated_at=timestamp,
            nodes=tuple(nodes),
            edges=tuple(edges),
        )
        validate_template_output(template.to_payload())

        if persist and self._template_store is not None:
            self._template_store.save(self._template_store.load(), template)

        logger.info(
            "로드맵 가져오기 완료",
            extra={
                "template_id": template.template_id,
                "node_count": len(nodes),
                "edge_count": len(edges),
                "elapsed_seconds": round(time.time() - started, 2),
            },
        )
        return template


def read_generated_graph(response: GeminiResponse) -> Tuple[List[Any], List[Any]]:
    """
    생성 응답에서 노드/엣지 목록을 꺼냅니다.

    nodes/edges가 리스트가 아니면 빈 목록으로 취급한다.

    @param {GeminiResponse} response - 생성 모델 응답.
    @returns {Tuple[List[Any], List[Any]]} (노드 목록, 엣지 목록).
    @throws {GenerationUnavailableError} 응답 텍스트가 없을 때.
    @throws {InvalidGenerationError} 텍스트가 JSON 객체로 파싱되지 않을 때.
    @throws {EmptyRoadmapError} 노드가 하나도 없을 때.
    """
    if response.is_empty:
        raise GenerationUnavailableError()
    data: Optional[Dict[str, Any]] = response.data
    if data is None:
        logger.error("생성 응답 JSON 파싱 실패", extra={"raw_length": len(response.raw_text)})
        raise InvalidGenerationError()

    try:
        validate_generated_roadmap(data)
    except SchemaError as exc:
        logger.warning("생성 응답 형식 불일치", extra={"error": str(exc)})

    nodes = response.get_list("nodes")
    edges = response.get_list("edges")
    if not nodes:
        raise EmptyRoadmapError()
    logger.debug("생성 그래프 수신", extra={"node_count": len(nodes), "edge_count": len(edges)})
    return nodes, edges
