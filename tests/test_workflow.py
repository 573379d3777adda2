"""체인지로그 생성 워크플로우 테스트"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest

from app.core.exceptions import GenerationUnavailableError
from app.domain.changelog.constants import FALLBACK_ENTRIES, FALLBACK_MARKER
from app.domain.changelog.dates import changelog_title
from app.domain.changelog.schemas import ChangeType, GenerationState
from app.domain.changelog.workflow import (
    create_generation_workflow,
    extract_node,
    fallback_node,
    generate_changelog,
    should_extract,
    should_fallback,
)


class TestRouting:
    """조건부 분기 함수 테스트"""

    def test_should_extract(self):
        assert should_extract(GenerationState(response_text="- a")) == "extract"
        assert should_extract(GenerationState(error_message="timeout")) == "fallback"

    def test_should_fallback(self):
        assert should_fallback(GenerationState(entries=[])) == "fallback"
        assert should_fallback(GenerationState()) == "fallback"


class TestNodes:
    @pytest.mark.asyncio
    async def test_extract_node_empty(self):
        result = await extract_node(GenerationState(response_text="  \n "))

        assert result["entries"] == []
        assert result["error_message"]

    @pytest.mark.asyncio
    async def test_fallback_node_logs_marker(self):
        """fallback 사용 시 검색 가능한 표식을 경고 로그로 남김"""
        with patch("app.domain.changelog.workflow.logger") as mock_logger:
            result = await fallback_node(GenerationState(error_message="LLM 응답 시간 초과"))

        assert result["is_fallback"] is True
        assert [e.content for e in result["entries"]] == list(FALLBACK_ENTRIES)
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.args[1] == FALLBACK_MARKER


class TestWorkflowCreation:
    def test_create_workflow(self):
        workflow = create_generation_workflow()
        assert workflow is not None


class TestGenerateChangelog:
    """generate_changelog 함수 테스트"""

    @pytest.mark.asyncio
    async def test_success(self, sample_commits):
        with patch(
            "app.domain.changelog.workflow.complete",
            AsyncMock(return_value="- Enhanced security for login\n- Added a dark mode option"),
        ) as mock_complete:
            result = await generate_changelog(sample_commits, ChangeType.UPDATE, session_id="s-1")

        assert result.is_fallback is False
        assert result.type == ChangeType.UPDATE
        assert [e.content for e in result.entries] == [
            "- Enhanced security for login",
            "- Added a dark mode option",
        ]
        assert result.entries[0].component == "Authentication"
        assert result.title == changelog_title(result.date)
        assert mock_complete.call_args.kwargs["session_id"] == "s-1"

    @pytest.mark.asyncio
    async def test_generation_unavailable_falls_back(self, sample_commits):
        """LLM 사용 불가 시 오류 대신 고정 항목 반환"""
        with patch(
            "app.domain.changelog.workflow.complete",
            AsyncMock(side_effect=GenerationUnavailableError(detail="LLM 응답 시간 초과")),
        ):
            result = await generate_changelog(sample_commits)

        assert result.is_fallback is True
        assert result.type == ChangeType.FEATURE
        assert [e.content for e in result.entries] == list(FALLBACK_ENTRIES)

    @pytest.mark.asyncio
    async def test_empty_response_falls_back(self, sample_commits):
        with patch("app.domain.changelog.workflow.complete", AsyncMock(return_value="")):
            result = await generate_changelog(sample_commits)

        assert result.is_fallback is True
        assert len(result.entries) == len(FALLBACK_ENTRIES)

    @pytest.mark.asyncio
    async def test_title_uses_configured_timezone(self, sample_commits):
        """제목은 기준 타임존의 월 이름과 연도"""
        moment = datetime(2026, 10, 31, 23, 30, tzinfo=timezone.utc)
        with (
            patch("app.domain.changelog.workflow.complete", AsyncMock(return_value="- Done")),
            patch("app.domain.changelog.workflow.now_in_changelog_tz", return_value=moment),
        ):
            result = await generate_changelog(sample_commits)

        assert result.title == "October, 2026"
