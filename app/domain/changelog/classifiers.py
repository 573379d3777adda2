"""결정적 규칙 기반 분류기

- 파일 경로 → 컴포넌트 라벨
- 항목 텍스트 → 컴포넌트/스코프/영향도/기술 여부

모든 규칙은 (조건, 카테고리) 쌍의 순서 있는 표로 표현되며, 앞선 규칙이 우선한다.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import lru_cache

from app.domain.changelog.constants import (
    COMPONENT_KEYWORDS,
    FILE_COMPONENT_DEFAULT,
    FILE_COMPONENT_RULES,
    IMPACT_MAJOR_KEYWORDS,
    IMPACT_PATCH_KEYWORDS,
    SCOPE_KEYWORDS,
    TECHNICAL_KEYWORDS,
)
from app.domain.changelog.schemas import EntryDraft, Impact

Predicate = Callable[[str], bool]


@dataclass(frozen=True)
class Rule:
    """단일 분류 규칙"""

    category: str
    predicate: Predicate

    def matches(self, text: str) -> bool:
        return self.predicate(text)


@lru_cache(maxsize=512)
def _keyword_pattern(keyword: str) -> re.Pattern:
    # 짧은 키워드는 단어 전체 일치, 나머지는 단어 시작 일치
    if len(keyword) <= 3:
        return re.compile(rf"\b{re.escape(keyword)}\b")
    return re.compile(rf"\b{re.escape(keyword)}")


def contains_any(keywords: Sequence[str]) -> Predicate:
    """키워드 중 하나라도 포함하면 참인 조건 생성"""

    def predicate(text: str) -> bool:
        return any(_keyword_pattern(k).search(text) for k in keywords)

    return predicate


def path_matches(
    prefixes: Sequence[str], substrings: Sequence[str], suffixes: Sequence[str]
) -> Predicate:
    """경로 접두/포함/접미 조건 생성"""

    def predicate(path: str) -> bool:
        return (
            any(path.startswith(p) for p in prefixes)
            or any(s in path for s in substrings)
            or any(path.endswith(s) for s in suffixes)
        )

    return predicate


def build_keyword_rules(table: Sequence[tuple[str, Sequence[str]]]) -> tuple[Rule, ...]:
    return tuple(Rule(category, contains_any(keywords)) for category, keywords in table)


FILE_RULES: tuple[Rule, ...] = tuple(
    Rule(label, path_matches(prefixes, substrings, suffixes))
    for label, prefixes, substrings, suffixes in FILE_COMPONENT_RULES
)
COMPONENT_RULES = build_keyword_rules(COMPONENT_KEYWORDS)
SCOPE_RULES = build_keyword_rules(SCOPE_KEYWORDS)
IMPACT_RULES: tuple[Rule, ...] = (
    Rule(Impact.MAJOR.value, contains_any(IMPACT_MAJOR_KEYWORDS)),
    Rule(Impact.PATCH.value, contains_any(IMPACT_PATCH_KEYWORDS)),
)
TECHNICAL_RULE = Rule("technical", contains_any(TECHNICAL_KEYWORDS))


def first_match(rules: Sequence[Rule], text: str, default: str | None = None) -> str | None:
    """우선순위 순으로 첫 번째 일치 카테고리 반환"""
    for rule in rules:
        if rule.matches(text):
            return rule.category
    return default


def all_matches(rules: Sequence[Rule], text: str) -> list[str]:
    """일치하는 모든 카테고리를 우선순위 순으로 반환"""
    return [rule.category for rule in rules if rule.matches(text)]


def detect_file_component(path: str) -> str:
    """파일 경로로 컴포넌트 라벨 결정, 일치 규칙이 없으면 other"""
    normalized = path.replace("\\", "/").lower()
    return first_match(FILE_RULES, normalized, FILE_COMPONENT_DEFAULT)


def detect_component(text: str) -> str | None:
    return first_match(COMPONENT_RULES, text.lower())


def detect_labels(text: str) -> list[str]:
    return all_matches(COMPONENT_RULES, text.lower())


def detect_scope(text: str) -> str | None:
    return first_match(SCOPE_RULES, text.lower())


def detect_impact(text: str) -> Impact:
    return Impact(first_match(IMPACT_RULES, text.lower(), Impact.MINOR.value))


def is_technical(text: str) -> bool:
    return TECHNICAL_RULE.matches(text.lower())


def classify_entry(content: str) -> EntryDraft:
    """항목 텍스트로부터 메타데이터를 추론한 초안 생성"""
    technical = is_technical(content)
    return EntryDraft(
        content=content,
        component=detect_component(content),
        scope=detect_scope(content),
        impact=detect_impact(content),
        labels=detect_labels(content),
        is_technical=technical,
        is_user_facing=not technical,
    )
