"""프롬프트 구성

커밋 메시지와 파일 diff 발췌를 크기 제한 안에서 하나의 프롬프트로 합친다.
잘린 부분은 항상 표시(marker)를 남긴다.
"""

from app.core.config import settings
from app.core.logging import get_logger
from app.domain.changelog.constants import OMITTED_FILES_MARKER, TRUNCATION_MARKER
from app.domain.changelog.prompts import CHANGELOG_GENERATOR_HUMAN, CHANGELOG_GENERATOR_SYSTEM
from app.domain.changelog.schemas import ChangeType, Commit

logger = get_logger(__name__)

NO_FILE_DETAILS = "No file-level details available."
# 잘림 표시 문구가 들어갈 여유 공간
MARKER_RESERVE = 128


def truncate_text(text: str, limit: int) -> str:
    """limit 글자를 넘으면 자르고 잘린 글자 수를 표시"""
    if limit < 0 or len(text) <= limit:
        return text
    return text[:limit] + "\n" + TRUNCATION_MARKER.format(count=len(text) - limit)


def format_commit_messages(commits: list[Commit]) -> str:
    """커밋 메시지 첫 줄 목록"""
    lines = []
    for commit in commits:
        first_line = commit.message.strip().splitlines()[0] if commit.message.strip() else ""
        if first_line:
            lines.append(f"- {first_line}")
    return "\n".join(lines) or "- (no commit messages)"


def format_file_change(path: str, component: str, additions: int, deletions: int, patch: str, max_patch_chars: int) -> str:
    excerpt = truncate_text(patch, max_patch_chars) if patch else "(no diff available)"
    return (
        f"File: {path} [{component}]\n"
        f"Changes: {additions} additions, {deletions} deletions\n"
        f"Diff preview:\n{excerpt}"
    )


def format_file_changes(commits: list[Commit], max_patch_chars: int, budget: int) -> str:
    """파일 변경 발췌를 budget 글자 안에서 구성"""
    files = [f for commit in commits for f in (commit.files or [])]
    if not files:
        return NO_FILE_DETAILS

    sections: list[str] = []
    used = 0
    for idx, f in enumerate(files):
        section = format_file_change(f.path, f.component, f.additions, f.deletions, f.patch, max_patch_chars)
        cost = len(section) + 2
        if used + cost > budget:
            omitted = len(files) - idx
            sections.append(OMITTED_FILES_MARKER.format(count=omitted))
            logger.info("프롬프트 예산 초과로 diff 생략 omitted=%d total=%d", omitted, len(files))
            break
        sections.append(section)
        used += cost

    return "\n\n".join(sections)


def compose_prompt(
    commits: list[Commit],
    change_type: ChangeType = ChangeType.FEATURE,
    max_patch_chars: int | None = None,
    max_chars: int | None = None,
) -> str:
    """커밋 목록으로 LLM 입력 프롬프트 생성

    Args:
        commits: 대상 커밋 목록
        change_type: 체인지로그 유형
        max_patch_chars: 파일 하나당 diff 최대 글자 수
        max_chars: 시스템 프롬프트를 포함한 전체 최대 글자 수

    Returns:
        사람 메시지로 전달할 프롬프트 텍스트
    """
    max_patch_chars = settings.prompt_max_patch_chars if max_patch_chars is None else max_patch_chars
    max_chars = settings.prompt_max_chars if max_chars is None else max_chars

    overhead = len(CHANGELOG_GENERATOR_SYSTEM) + len(
        CHANGELOG_GENERATOR_HUMAN.format(
            change_type=change_type.value, commit_count=len(commits), commit_messages="", file_changes=""
        )
    )
    remaining = max(max_chars - overhead - MARKER_RESERVE, 0)

    messages = truncate_text(format_commit_messages(commits), remaining // 3)
    file_budget = max(remaining - len(messages), 0)
    file_changes = format_file_changes(commits, max_patch_chars, file_budget)

    prompt = CHANGELOG_GENERATOR_HUMAN.format(
        change_type=change_type.value,
        commit_count=len(commits),
        commit_messages=messages,
        file_changes=file_changes,
    )
    logger.debug("프롬프트 구성 완료 commits=%d chars=%d", len(commits), len(prompt))
    return prompt
