from datetime import datetime

from pydantic import BaseModel

from app.domain.changelog.schemas.base import ChangeType


class EntryView(BaseModel):
    """조회용 체인지로그 항목"""

    content: str
    position: int
    component: str | None = None
    scope: str | None = None
    impact: str | None = None
    labels: list[str] = []
    is_technical: bool = False
    is_user_facing: bool = True


class ChangelogView(BaseModel):
    """조회용 체인지로그"""

    id: int
    title: str
    type: ChangeType | str
    created_at: datetime
    badges: list[str]
    entries: list[EntryView]


class MonthGroup(BaseModel):
    """월 단위 체인지로그 묶음"""

    label: str
    changelogs: list[ChangelogView]
