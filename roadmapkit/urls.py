from django.urls import path

from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

from roadmapkit.roadmap_core.controller.roadmap_views import (
    HealthCheckAPIView,
    LayoutAPIView,
    RoadmapImportAPIView,
    ShowcaseAPIView,
    TemplateDetailAPIView,
    TemplateForkAPIView,
    TemplateListAPIView,
    TemplatePublishAPIView,
)

urlpatterns = [
    # OpenAPI 스키마 및 문서
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),

    # 헬스체크 API
    path("api/health/", HealthCheckAPIView.as_view(), name="health-check"),

    # 레이아웃 / 가져오기 API
    path("api/layout", LayoutAPIView.as_view(), name="layout"),
    path("api/roadmaps/import", RoadmapImportAPIView.as_view(), name="roadmap-import"),

    # 템플릿 API
    path("api/templates", TemplateListAPIView.as_view(), name="template-list"),
    path("api/templates/<str:template_id>", TemplateDetailAPIView.as_view(), name="template-detail"),
    path("api/templates/<str:template_id>/publish", TemplatePublishAPIView.as_view(), name="template-publish"),
    path("api/templates/<str:template_id>/fork", TemplateForkAPIView.as_view(), name="template-fork"),

    # 쇼케이스 API
    path("api/showcase", ShowcaseAPIView.as_view(), name="showcase"),
]
