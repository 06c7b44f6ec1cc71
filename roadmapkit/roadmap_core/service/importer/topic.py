from __future__ import annotations

import logging
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


def resolve_topic(user_input: str) -> str:
    """
    입력에서 로드맵 주제를 정합니다.

    URL이면 경로의 마지막 세그먼트를 주제로 쓰고(`-`는 공백으로), 그 외에는
    입력 그대로 사용한다. 첫 글자는 대문자로 바꾼다.

    @param {str} user_input - URL 또는 주제 문자열.
    @returns {str} 로드맵 제목으로 쓸 주제.
    """
    topic = user_input
    if user_input.startswith("http"):
        try:
            segments = [segment for segment in urlparse(user_input).path.split("/") if segment]
        except ValueError:
            logger.warning("URL 파싱 실패, 주제 문자열로 처리", extra={"input": user_input})
            segments = []
        if segments:
            topic = segments[-1].replace("-", " ")
    return topic[:1].upper() + topic[1:]


def is_url_input(user_input: str) -> bool:
    """
    @param {str} user_input - 사용자 입력.
    @returns {bool} 출처 URL로 기록할 입력이면 True.
    """
    return "http" in user_input
