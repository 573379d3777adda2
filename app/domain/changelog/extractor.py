"""LLM 응답 → 체인지로그 항목 변환

- 평평한 불릿 목록이면 줄 단위로 나누어 각 줄을 하나의 항목으로 만든다
- 제목 + 설명 + 불릿으로 구성된 블록이면 전체를 하나의 항목으로 유지한다
"""

from app.core.logging import get_logger
from app.domain.changelog.classifiers import classify_entry
from app.domain.changelog.constants import BULLET_MARKERS, FALLBACK_ENTRIES, QUOTE_CHARS
from app.domain.changelog.schemas import EntryDraft

logger = get_logger(__name__)


def strip_quotes(line: str) -> str:
    """앞뒤를 감싼 따옴표 제거"""
    return line.strip().strip(QUOTE_CHARS).strip()


def is_bullet(line: str) -> bool:
    stripped = line.lstrip()
    # **굵은 글씨** 는 불릿이 아님
    return stripped.startswith(BULLET_MARKERS) and not stripped.startswith("**")


def normalize_bullet(line: str) -> str:
    """항목 앞에 불릿 마커를 정확히 하나만 붙인다"""
    text = strip_quotes(line)
    while text.startswith(BULLET_MARKERS):
        for marker in BULLET_MARKERS:
            if text.startswith(marker):
                text = strip_quotes(text[len(marker) :])
                break
    return f"- {text}" if text else ""


def split_entries(response_text: str) -> list[str]:
    """응답 텍스트를 항목 문자열 목록으로 분할

    Returns:
        항목 문자열 목록, 내용이 없으면 빈 리스트
    """
    lines = [strip_quotes(line) for line in response_text.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        return []

    if all(is_bullet(line) for line in lines):
        entries = [normalize_bullet(line) for line in lines]
        return [entry for entry in entries if entry]

    block = strip_quotes(response_text.strip())
    return [block] if block else []


def extract_entries(response_text: str) -> list[EntryDraft]:
    """LLM 응답에서 순서가 유지된 항목 초안 추출"""
    contents = split_entries(response_text or "")
    entries = [classify_entry(content) for content in contents]
    logger.info("항목 추출 완료 entries=%d", len(entries))
    return entries


def fallback_entries() -> list[EntryDraft]:
    """생성 불가 시 사용하는 고정 항목"""
    return [classify_entry(content) for content in FALLBACK_ENTRIES]
