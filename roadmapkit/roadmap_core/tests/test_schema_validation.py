import unittest

from roadmapkit.roadmap_core.common.schema_validation import (
    SchemaError,
    validate_generated_roadmap,
    validate_template_output,
)
from roadmapkit.roadmap_core.repository.seed_templates import OFFICIAL_TEMPLATES


class SchemaValidationTests(unittest.TestCase):
    def test_generated_roadmap_schema(self) -> None:
        """
        생성 응답 스키마를 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        validate_generated_roadmap({"nodes": [{"id": "1"}], "edges": []})
        validate_generated_roadmap({"nodes": []})

    def test_generated_roadmap_rejects_bad_shapes(self) -> None:
        with self.assertRaises(SchemaError):
            validate_generated_roadmap({"edges": []})
        with self.assertRaises(SchemaError):
            validate_generated_roadmap({"nodes": "A,B"})
        with self.assertRaises(SchemaError):
            validate_generated_roadmap({"nodes": [], "edges": {}})
        with self.assertRaises(SchemaError):
            validate_generated_roadmap(["nodes"])

    def test_seed_templates_match_output_schema(self) -> None:
        for template in OFFICIAL_TEMPLATES:
            validate_template_output(template.to_payload())

    def test_template_output_requires_node_position(self) -> None:
        payload = OFFICIAL_TEMPLATES[0].to_payload()
        payload["nodes"] = [{"id": "1", "type": "customNode", "data": {}}]
        with self.assertRaises(SchemaError):
            validate_template_output(payload)


if __name__ == "__main__":
    unittest.main()
