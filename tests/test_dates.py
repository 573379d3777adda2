"""체인지로그 날짜/제목 계산 테스트"""

from datetime import datetime, timezone
from unittest.mock import patch
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from app.domain.changelog.dates import changelog_title, month_label, to_changelog_tz


@pytest.fixture
def seoul_settings():
    try:
        ZoneInfo("Asia/Seoul")
    except ZoneInfoNotFoundError:
        pytest.skip("타임존 데이터베이스 없음")

    with patch("app.domain.changelog.dates.settings") as mock_settings:
        mock_settings.changelog_timezone = "Asia/Seoul"
        yield mock_settings


class TestChangelogTitle:
    def test_english_month_name(self):
        assert changelog_title(datetime(2026, 3, 5, tzinfo=timezone.utc)) == "March, 2026"

    def test_naive_treated_as_utc(self):
        assert to_changelog_tz(datetime(2026, 1, 1, 12, 0)).tzinfo is not None
        assert changelog_title(datetime(2026, 1, 1, 12, 0)) == "January, 2026"

    def test_month_boundary_in_configured_timezone(self, seoul_settings):
        """UTC 기준 10월 말이 기준 타임존에서는 11월"""
        moment = datetime(2026, 10, 31, 23, 30, tzinfo=timezone.utc)

        assert changelog_title(moment) == "November, 2026"
        assert month_label(moment) == "November 2026"


class TestMonthLabel:
    def test_label_format(self):
        assert month_label(datetime(2026, 12, 24, tzinfo=timezone.utc)) == "December 2026"
