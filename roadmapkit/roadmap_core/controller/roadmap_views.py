from __future__ import annotations

from datetime import datetime

from django.conf import settings
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiTypes, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from roadmapkit.roadmap_core.client import GeminiClient
from roadmapkit.roadmap_core.common.identifiers import generate_template_id, now_millis
from roadmapkit.roadmap_core.controller.serializers import (
    ErrorSerializer,
    HealthCheckSerializer,
    ImportRequestSerializer,
    LayoutRequestSerializer,
    LayoutResponseSerializer,
    PublishRequestSerializer,
    ShowcaseSerializer,
    TemplateInputSerializer,
    TemplateSerializer,
)
from roadmapkit.roadmap_core.domain.saved_template import SavedTemplate
from roadmapkit.roadmap_core.repository.django_cache_storage import DjangoCacheStorage
from roadmapkit.roadmap_core.repository.template_store import TemplateStore
from roadmapkit.roadmap_core.service.importer.errors import GenerationUnavailableError, RoadmapImportError
from roadmapkit.roadmap_core.service.importer.page_fetcher import PageContentFetcher
from roadmapkit.roadmap_core.service.importer.roadmap_import_service import RoadmapImportService
from roadmapkit.roadmap_core.service.layout.edge_formatter import format_edges
from roadmapkit.roadmap_core.service.layout.graph_layout import GraphLayoutEngine
from roadmapkit.roadmap_core.service.showcase.showcase_service import ALL_TAGS, ShowcaseSort, browse, collect_tags

API_VERSION = "1.0.0"


def get_template_store() -> TemplateStore:
    """
    @returns Django 캐시에 저장하는 템플릿 저장소.
    """
    return TemplateStore(DjangoCacheStorage())


def get_import_service() -> RoadmapImportService:
    """
    @returns 설정값으로 구성한 로드맵 가져오기 서비스.
    """
    llm_client = GeminiClient(
        api_key=settings.GEMINI_API_KEY or None,
        model=settings.AI_DEFAULT_MODEL,
        timeout=settings.AI_TIMEOUT,
        max_retries=settings.AI_MAX_RETRIES,
    )
    fetcher = PageContentFetcher(
        timeout=settings.IMPORT_FETCH_TIMEOUT,
        max_chars=settings.IMPORT_CONTEXT_MAX_CHARS,
    )
    return RoadmapImportService(
        llm_client=llm_client,
        fetcher=fetcher,
        layout_engine=GraphLayoutEngine(),
        template_store=get_template_store(),
    )


# =============================================================================
# 레이아웃 API
# =============================================================================

class LayoutAPIView(APIView):
    """노드/엣지 목록을 배치된 렌더링 그래프로 변환하는 엔드포인트."""

    @extend_schema(
        summary="그래프 레이아웃",
        description="루트에서 BFS로 레벨을 정해 노드 좌표를 계산하고 엣지에 스타일을 붙입니다.",
        request=LayoutRequestSerializer,
        responses={200: LayoutResponseSerializer, 400: ErrorSerializer},
        examples=[
            OpenApiExample(
                "chain",
                value={
                    "nodes": [{"id": "A", "label": "HTML"}, {"id": "B", "label": "CSS"}],
                    "edges": [{"source": "A", "target": "B"}],
                },
                request_only=True,
            )
        ],
    )
    def post(self, request) -> Response:
        """
        @param request DRF 요청 객체 (nodes/edges JSON).
        @returns 배치된 노드와 렌더링용 엣지.
        """
        serializer = LayoutRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        nodes = serializer.validated_data["nodes"]
        edges = serializer.validated_data["edges"]

        placed = GraphLayoutEngine().layout(nodes, edges)
        payload = {
            "nodes": [node.to_payload() for node in placed],
            "edges": format_edges(edges),
        }
        return _serialize(LayoutResponseSerializer, payload)


# =============================================================================
# 로드맵 가져오기 API
# =============================================================================

class RoadmapImportAPIView(APIView):
    """
    URL 또는 주제로 로드맵을 생성해 템플릿으로 저장합니다.

    사용 예시:
        POST /api/roadmaps/import
        Body: {"input": "https://roadmap.sh/python"}
    """

    @extend_schema(
        summary="로드맵 가져오기",
        description="페이지 본문 또는 주제를 생성 모델에 전달해 로드맵을 만들고 배치합니다.",
        request=ImportRequestSerializer,
        responses={201: TemplateSerializer, 400: ErrorSerializer, 503: ErrorSerializer},
    )
    def post(self, request) -> Response:
        """
        @param {Request} request - DRF 요청 객체 (input/persist JSON).
        @returns {Response} 생성된 템플릿 (실패 시 detail 메시지).
        """
        serializer = ImportRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            template = get_import_service().import_roadmap(
                serializer.validated_data["input"],
                persist=serializer.validated_data["persist"],
            )
        except GenerationUnavailableError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        except RoadmapImportError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return _serialize(TemplateSerializer, template.to_payload(), status_code=status.HTTP_201_CREATED)


# =============================================================================
# 템플릿 API
# =============================================================================

class TemplateListAPIView(APIView):
    """내 템플릿 목록 조회/저장."""

    @extend_schema(summary="내 템플릿 목록", responses={200: TemplateSerializer(many=True)})
    def get(self, request) -> Response:
        library = get_template_store().load()
        return _serialize(TemplateSerializer, [t.to_payload() for t in library.my_templates], many=True)

    @extend_schema(
        summary="템플릿 저장",
        description="같은 ID의 템플릿은 교체되며 목록 맨 앞에 저장됩니다.",
        request=TemplateInputSerializer,
        responses={201: TemplateSerializer, 400: ErrorSerializer},
    )
    def post(self, request) -> Response:
        """
        @param request DRF 요청 객체 (템플릿 JSON).
        @returns 저장된 템플릿.
        """
        serializer = TemplateInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        timestamp = now_millis()
        data["id"] = data.get("id") or generate_template_id()
        data["createdAt"] = data.get("createdAt") or timestamp
        data["updatedAt"] = timestamp

        store = get_template_store()
        library = store.load()
        existing = library.find_mine(data["id"])
        template = SavedTemplate.from_payload(data)
        if existing is not None:
            template = template.replace(
                is_public=existing.is_public,
                author=existing.author,
                likes=existing.likes,
                views=existing.views,
            )
        store.save(library, template)
        return _serialize(TemplateSerializer, template.to_payload(), status_code=status.HTTP_201_CREATED)


class TemplateDetailAPIView(APIView):
    """내 템플릿 삭제."""

    @extend_schema(summary="템플릿 삭제", responses={204: None})
    def delete(self, request, template_id: str) -> Response:
        store = get_template_store()
        store.delete(store.load(), template_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class TemplatePublishAPIView(APIView):
    """내 템플릿 공개/비공개 전환."""

    @extend_schema(
        summary="템플릿 공개 설정",
        request=PublishRequestSerializer,
        responses={200: TemplateSerializer, 404: ErrorSerializer},
    )
    def post(self, request, template_id: str) -> Response:
        """
        @param request DRF 요청 객체 (isPublic/tags JSON).
        @param template_id 대상 템플릿 ID.
        @returns 공개 설정이 반영된 템플릿.
        """
        serializer = PublishRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        store = get_template_store()
        library = store.load()
        if library.find_mine(template_id) is None:
            return _not_found(template_id)

        library = store.publish(
            library,
            template_id,
            is_public=serializer.validated_data["isPublic"],
            tags=serializer.validated_data.get("tags"),
        )
        return _serialize(TemplateSerializer, library.find_mine(template_id).to_payload())


class TemplateForkAPIView(APIView):
    """공개 템플릿 또는 내 템플릿을 개인 사본으로 복제."""

    @extend_schema(summary="템플릿 복제", responses={201: TemplateSerializer, 404: ErrorSerializer})
    def post(self, request, template_id: str) -> Response:
        store = get_template_store()
        library = store.load()
        original = store.get(library, template_id)
        if original is None:
            return _not_found(template_id)

        _, copy = store.fork(library, original)
        return _serialize(TemplateSerializer, copy.to_payload(), status_code=status.HTTP_201_CREATED)


# =============================================================================
# 쇼케이스 API
# =============================================================================

class ShowcaseAPIView(APIView):
    """공개 템플릿 검색/필터/정렬."""

    @extend_schema(
        summary="공개 템플릿 쇼케이스",
        parameters=[
            OpenApiParameter("search", OpenApiTypes.STR, required=False, description="제목/작성자/태그 검색어"),
            OpenApiParameter("tag", OpenApiTypes.STR, required=False, description="태그 필터 (기본: all)"),
            OpenApiParameter(
                "sort",
                OpenApiTypes.STR,
                required=False,
                description="정렬 기준 (기본: popular)",
                enum=[sort.value for sort in ShowcaseSort],
            ),
        ],
        responses={200: ShowcaseSerializer},
    )
    def get(self, request) -> Response:
        """
        @param request DRF 요청 객체 (search/tag/sort 쿼리 파라미터).
        @returns 조건에 맞는 공개 템플릿과 전체 태그 목록.
        """
        public = get_template_store().load().public_templates
        templates = browse(
            public,
            search=request.GET.get("search", ""),
            tag=request.GET.get("tag") or ALL_TAGS,
            sort=request.GET.get("sort") or ShowcaseSort.POPULAR.value,
        )
        payload = {
            "templates": [template.to_payload() for template in templates],
            "tags": collect_tags(public),
        }
        return _serialize(ShowcaseSerializer, payload)


# =============================================================================
# 헬스체크 API
# =============================================================================

class HealthCheckAPIView(APIView):
    """
    API 헬스체크 엔드포인트.

    서버 상태와 생성 모델 사용 가능 여부를 확인합니다.
    """

    @extend_schema(summary="헬스체크", responses={200: HealthCheckSerializer})
    def get(self, request) -> Response:
        payload = {
            "status": "ok",
            "version": API_VERSION,
            "services": {
                "gemini": GeminiClient(api_key=settings.GEMINI_API_KEY or None).available(),
                "layout": True,
            },
            "timestamp": datetime.utcnow().isoformat(),
        }
        return _serialize(HealthCheckSerializer, payload)


def _not_found(template_id: str) -> Response:
    return Response({"detail": f"Template not found: {template_id}"}, status=status.HTTP_404_NOT_FOUND)


def _serialize(serializer_class, payload, many: bool = False, status_code: int = status.HTTP_200_OK) -> Response:
    """
    @param serializer_class 사용할 DRF Serializer 클래스.
    @param payload 응답 데이터.
    @param many 리스트 여부.
    @param status_code HTTP 상태 코드.
    @returns 직렬화된 DRF Response.
    """
    serializer = serializer_class(payload, many=many)
    return Response(serializer.data, status=status_code)
