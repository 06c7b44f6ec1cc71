from typing import Any, Dict, List


class SchemaError(ValueError):
    """스키마 검증 실패."""

    pass


def validate_generated_roadmap(payload: Dict[str, Any]) -> None:
    """
    @param payload 생성 서비스가 반환한 로드맵 그래프 JSON.
    @returns None
    """
    if not isinstance(payload, dict):
        raise SchemaError("Roadmap payload should be dict")
    _require_fields(payload, ["nodes"])
    _require_types(payload["nodes"], list, "nodes")
    if "edges" in payload and payload["edges"] is not None:
        _require_types(payload["edges"], list, "edges")


def validate_template_output(payload: Dict[str, Any]) -> None:
    """
    @param payload 저장/응답용 템플릿 JSON.
    @returns None
    """
    _require_fields(payload, [
        "id",
        "title",
        "source",
        "nodes",
        "edges",
        "createdAt",
        "updatedAt",
        "isPublic",
        "tags",
    ])
    _require_types(payload["nodes"], list, "nodes")
    _require_types(payload["edges"], list, "edges")
    _require_types(payload["tags"], list, "tags")
    for node in payload["nodes"]:
        _require_fields(node, ["id", "type", "position", "data"])
        _require_types(node["position"], dict, "position")


def _require_fields(payload: Dict[str, Any], fields: List[str]) -> None:
    """
    @param payload 점검 대상 JSON.
    @param fields 필수 필드 목록.
    @returns None
    """
    missing = [field for field in fields if field not in payload]
    if missing:
        raise SchemaError(f"Missing fields: {missing}")


def _require_types(value: Any, expected_type: type, field_name: str) -> None:
    """
    @param value 점검 대상 값.
    @param expected_type 기대 타입.
    @param field_name 필드 이름.
    @returns None
    """
    if not isinstance(value, expected_type):
        raise SchemaError(f"Field {field_name} should be {expected_type.__name__}")
