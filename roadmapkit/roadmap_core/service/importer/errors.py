class RoadmapImportError(ValueError):
    """로드맵 가져오기 실패 (사용자에게 보여줄 메시지를 가진다)."""

    pass


class EmptyInputError(RoadmapImportError):
    """입력이 비어 있음."""

    def __init__(self) -> None:
        super().__init__("Please enter a URL or a topic to import.")


class GenerationUnavailableError(RoadmapImportError):
    """생성 모델이 비활성화되었거나 응답 텍스트가 없음."""

    def __init__(self) -> None:
        super().__init__("No text returned from AI")


class InvalidGenerationError(RoadmapImportError):
    """응답이 올바른 JSON이 아니거나 로드맵 형태가 아님."""

    def __init__(self, detail: str = "") -> None:
        message = "Failed to parse AI response. The model returned invalid JSON."
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class EmptyRoadmapError(RoadmapImportError):
    """응답에 노드가 하나도 없음."""

    def __init__(self) -> None:
        super().__init__("AI returned a valid response but it contained no roadmap nodes.")
