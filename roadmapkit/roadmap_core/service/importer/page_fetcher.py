from __future__ import annotations

import logging
import re
from http.client import HTTPException
from typing import Optional
from urllib import error, request

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHARS = 15000

_NOISE_BLOCK_RE = re.compile(
    r"<(script|style|svg|noscript|iframe)\b[^>]*>.*?</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")


class PageContentFetcher:
    """웹 페이지 본문을 생성 모델 컨텍스트용 평문으로 가져온다."""

    def __init__(self, timeout: int = 10, max_chars: int = DEFAULT_MAX_CHARS, user_agent: Optional[str] = None) -> None:
        self._timeout = timeout
        self._max_chars = max_chars
        self._user_agent = user_agent or "roadmapkit/0.1"

    def fetch(self, url: str) -> str:
        """
        @param url 가져올 페이지 URL.
        @returns 정리된 본문 텍스트 (실패 시 빈 문자열).
        """
        html = self._download(url)
        if not html:
            return ""
        text = html_to_text(html)[: self._max_chars]
        logger.info("페이지 본문 수집", extra={"url": url, "length": len(text)})
        return text

    def _download(self, url: str) -> str:
        req = request.Request(url, headers={"User-Agent": self._user_agent}, method="GET")
        try:
            with request.urlopen(req, timeout=self._timeout) as resp:
                charset = resp.headers.get_content_charset() or "utf-8"
                return resp.read().decode(charset, errors="replace")
        except (error.URLError, HTTPException, LookupError, ValueError, OSError) as exc:
            logger.warning("페이지 수집 실패, 주제 기반 생성으로 진행", extra={"url": url, "error": str(exc)})
            return ""


def html_to_text(html: str) -> str:
    """
    @param html 원본 HTML.
    @returns 잡음 블록과 태그를 제거하고 공백을 합친 텍스트.
    """
    text = _NOISE_BLOCK_RE.sub(" ", html)
    text = _TAG_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()
