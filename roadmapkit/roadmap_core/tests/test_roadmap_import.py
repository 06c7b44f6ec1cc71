import string
import unittest
from unittest import mock

from roadmapkit.roadmap_core.client import GeminiResponse, GenerationConfig, create_empty_response
from roadmapkit.roadmap_core.common.identifiers import generate_template_id
from roadmapkit.roadmap_core.domain.template_source import TemplateSource
from roadmapkit.roadmap_core.repository.key_value_storage import InMemoryStorage
from roadmapkit.roadmap_core.repository.template_store import TemplateStore
from roadmapkit.roadmap_core.service.importer.errors import (
    EmptyInputError,
    EmptyRoadmapError,
    GenerationUnavailableError,
    InvalidGenerationError,
    RoadmapImportError,
)
from roadmapkit.roadmap_core.service.importer import page_fetcher
from roadmapkit.roadmap_core.service.importer.page_fetcher import PageContentFetcher, html_to_text
from roadmapkit.roadmap_core.service.importer.prompts import ROADMAP_RESPONSE_SCHEMA, build_generation_prompt
from roadmapkit.roadmap_core.service.importer.roadmap_import_service import (
    ROADMAP_GENERATION_CONFIG,
    RoadmapImportService,
)
from roadmapkit.roadmap_core.service.importer.topic import resolve_topic
from roadmapkit.roadmap_core.service.layout.graph_layout import GraphLayoutEngine

GENERATED = {
    "nodes": [
        {"id": "1", "label": "Syntax", "description": "기본 문법", "type": "beginner", "emoji": "🐍"},
        {"id": "2", "label": "Packaging", "type": "intermediate", "emoji": "📦"},
        {"id": "3", "label": "Django", "type": "framework", "emoji": "🌐"},
    ],
    "edges": [
        {"source": "1", "target": "2"},
        {"id": "custom", "source": "1", "target": "3"},
    ],
}


class FakeLLMClient:
    def __init__(self, response: GeminiResponse, available: bool = True) -> None:
        """
        테스트용 생성 모델 클라이언트를 초기화합니다.

        @param {GeminiResponse} response - 고정 응답.
        @param {bool} available - 사용 가능 여부.
        @returns {None} 호출 기록을 초기화합니다.
        """
        self._response = response
        self._available = available
        self.prompts = []
        self.schemas = []
        self.configs = []

    def available(self) -> bool:
        return self._available

    def generate_json(self, contents: str, config=None, response_schema=None) -> GeminiResponse:
        self.prompts.append(contents)
        self.schemas.append(response_schema)
        self.configs.append(config)
        return self._response


class FakeFetcher:
    def __init__(self, text: str = "") -> None:
        self.text = text
        self.urls = []

    def fetch(self, url: str) -> str:
        self.urls.append(url)
        return self.text


def _response(data) -> GeminiResponse:
    return GeminiResponse(data=data, raw_text="{...}")


class RoadmapImportServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = TemplateStore(InMemoryStorage(), seed_public=[])

    def _service(self, llm_client, fetcher=None) -> RoadmapImportService:
        return RoadmapImportService(
            llm_client=llm_client,
            fetcher=fetcher or FakeFetcher(),
            layout_engine=GraphLayoutEngine(),
            template_store=self.store,
        )

    def test_topic_import_builds_template(self) -> None:
        """
        주제 입력은 배치된 imported 템플릿을 만들고 저장합니다.

        @returns {None} 테스트만 수행합니다.
        """
        llm_client = FakeLLMClient(_response(GENERATED))
        fetcher = FakeFetcher("unused")
        template = self._service(llm_client, fetcher).import_roadmap("python developer")

        self.assertEqual(template.title, "Python developer")
        self.assertEqual(template.source, TemplateSource.IMPORTED)
        self.assertIsNone(template.source_url)
        self.assertEqual(len(template.template_id), 9)
        self.assertEqual(fetcher.urls, [])
        self.assertIs(llm_client.schemas[0], ROADMAP_RESPONSE_SCHEMA)

        positions = {node["id"]: node["position"] for node in template.nodes}
        self.assertEqual(positions["1"], {"x": 0, "y": 100})
        self.assertEqual(positions["2"], {"x": 100, "y": 350})
        self.assertEqual(positions["3"], {"x": 450, "y": 350})
        self.assertEqual([edge["id"] for edge in template.edges], ["e-1-2", "custom"])

        library = self.store.load()
        self.assertEqual(library.my_templates[0].template_id, template.template_id)

    def test_url_import_uses_page_context(self) -> None:
        llm_client = FakeLLMClient(_response(GENERATED))
        fetcher = FakeFetcher("Learn variables then functions")
        url = "https://roadmap.sh/machine-learning"
        template = self._service(llm_client, fetcher).import_roadmap(url)

        self.assertEqual(template.title, "Machine learning")
        self.assertEqual(template.source_url, url)
        self.assertEqual(fetcher.urls, [url])
        self.assertIn("CONTENT START", llm_client.prompts[0])
        self.assertIn("Learn variables then functions", llm_client.prompts[0])

    def test_failed_fetch_falls_back_to_topic_prompt(self) -> None:
        llm_client = FakeLLMClient(_response(GENERATED))
        self._service(llm_client, FakeFetcher("")).import_roadmap("https://example.com/rust")
        self.assertIn("Generate a learning roadmap for 'Rust'", llm_client.prompts[0])

    def test_persist_false_skips_store(self) -> None:
        llm_client = FakeLLMClient(_response(GENERATED))
        self._service(llm_client).import_roadmap("go", persist=False)
        self.assertEqual(self.store.load().my_templates, ())

    def test_generation_config_is_forwarded(self) -> None:
        llm_client = FakeLLMClient(_response(GENERATED))
        self._service(llm_client).import_roadmap("go")
        self.assertIs(llm_client.configs[0], ROADMAP_GENERATION_CONFIG)
        self.assertEqual(ROADMAP_GENERATION_CONFIG.to_dict()["temperature"], 0.4)

        custom = GenerationConfig(temperature=0.1, max_output_tokens=2048)
        llm_client = FakeLLMClient(_response(GENERATED))
        RoadmapImportService(
            llm_client=llm_client,
            fetcher=FakeFetcher(),
            template_store=self.store,
            generation_config=custom,
        ).import_roadmap("go")
        self.assertIs(llm_client.configs[0], custom)

    def test_blank_input(self) -> None:
        with self.assertRaises(EmptyInputError):
            self._service(FakeLLMClient(_response(GENERATED))).import_roadmap("   ")

    def test_unavailable_client(self) -> None:
        llm_client = FakeLLMClient(_response(GENERATED), available=False)
        with self.assertRaises(GenerationUnavailableError):
            self._service(llm_client).import_roadmap("go")
        self.assertEqual(llm_client.prompts, [])

    def test_empty_generation(self) -> None:
        with self.assertRaises(GenerationUnavailableError):
            self._service(FakeLLMClient(create_empty_response())).import_roadmap("go")

    def test_unparseable_generation(self) -> None:
        response = GeminiResponse(data=None, raw_text="not json at all")
        with self.assertRaises(InvalidGenerationError) as ctx:
            self._service(FakeLLMClient(response)).import_roadmap("go")
        self.assertIn("invalid JSON", str(ctx.exception))

    def test_generation_without_nodes(self) -> None:
        for data in ({"nodes": [], "edges": []}, {"nodes": "A", "edges": []}, {"edges": []}):
            with self.subTest(data=data):
                with self.assertRaises(EmptyRoadmapError):
                    self._service(FakeLLMClient(_response(data))).import_roadmap("go")

    def test_errors_share_base_class(self) -> None:
        for error in (EmptyInputError(), GenerationUnavailableError(), InvalidGenerationError(), EmptyRoadmapError()):
            self.assertIsInstance(error, RoadmapImportError)
            self.assertIsInstance(error, ValueError)


class FakeHTTPResponse:
    def __init__(self, body: bytes, charset=None) -> None:
        self._body = body
        self.headers = mock.Mock()
        self.headers.get_content_charset.return_value = charset

    def __enter__(self) -> "FakeHTTPResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        return None

    def read(self) -> bytes:
        return self._body


class PageContentFetcherTests(unittest.TestCase):
    def _fetch(self, response: FakeHTTPResponse, **kwargs) -> str:
        with mock.patch.object(page_fetcher.request, "urlopen", return_value=response):
            return PageContentFetcher(**kwargs).fetch("https://example.com/go")

    def test_fetch_strips_and_truncates(self) -> None:
        body = "<html><body><h1>Go</h1><p>고루틴과 채널</p></body></html>".encode("utf-8")
        self.assertEqual(self._fetch(FakeHTTPResponse(body)), "Go 고루틴과 채널")
        self.assertEqual(self._fetch(FakeHTTPResponse(body), max_chars=2), "Go")

    def test_declared_charset_is_used(self) -> None:
        body = "<p>café</p>".encode("latin-1")
        self.assertEqual(self._fetch(FakeHTTPResponse(body, charset="latin-1")), "café")

    def test_unknown_charset_returns_empty(self) -> None:
        """
        응답 헤더의 charset을 알 수 없으면 예외 대신 빈 문자열을 반환합니다.

        @returns {None} 테스트만 수행합니다.
        """
        response = FakeHTTPResponse(b"<p>Go</p>", charset="x-bogus-charset")
        self.assertEqual(self._fetch(response), "")

    def test_network_error_returns_empty(self) -> None:
        with mock.patch.object(page_fetcher.request, "urlopen", side_effect=page_fetcher.error.URLError("down")):
            self.assertEqual(PageContentFetcher().fetch("https://example.com/go"), "")


class ImportHelperTests(unittest.TestCase):
    def test_template_ids_are_base36(self) -> None:
        allowed = set(string.digits + string.ascii_lowercase)
        ids = [generate_template_id() for _ in range(200)]
        for template_id in ids:
            self.assertEqual(len(template_id), 9)
            self.assertTrue(set(template_id) <= allowed, template_id)
        self.assertEqual(len(set(ids)), len(ids))
        self.assertTrue(any(set(template_id) - set("0123456789abcdef") for template_id in ids))

    def test_resolve_topic(self) -> None:
        """
        URL은 마지막 경로 세그먼트, 그 외는 입력 그대로 주제로 사용합니다.

        @returns {None} 테스트만 수행합니다.
        """
        self.assertEqual(resolve_topic("https://roadmap.sh/full-stack"), "Full stack")
        self.assertEqual(resolve_topic("https://roadmap.sh/backend/"), "Backend")
        self.assertEqual(resolve_topic("https://roadmap.sh"), "Https://roadmap.sh")
        self.assertEqual(resolve_topic("kubernetes"), "Kubernetes")
        self.assertEqual(resolve_topic("데이터 엔지니어링"), "데이터 엔지니어링")

    def test_html_to_text(self) -> None:
        html = (
            "<html><head><style>body { color: red; }</style><script>var x = 1;</script></head>"
            "<body><h1>Python</h1>\n\n<p>Learn   <b>basics</b></p><svg><text>icon</text></svg>"
            "<noscript>enable js</noscript><iframe src='x'>frame</iframe></body></html>"
        )
        self.assertEqual(html_to_text(html), "Python Learn basics")

    def test_prompt_variants(self) -> None:
        topic_prompt = build_generation_prompt("Go")
        self.assertIn("8-12 nodes", topic_prompt)
        self.assertIn("'beginner', 'intermediate', 'advanced', 'framework', 'optional'", topic_prompt)
        self.assertNotIn("custom", topic_prompt)

        context_prompt = build_generation_prompt("Go", "goroutines and channels")
        self.assertIn("goroutines and channels", context_prompt)
        self.assertIn("beginner/intermediate/advanced/framework/optional", context_prompt)


if __name__ == "__main__":
    unittest.main()
