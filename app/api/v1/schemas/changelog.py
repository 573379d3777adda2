"""체인지로그 API 스키마."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.domain.changelog.classifiers import detect_file_component
from app.domain.changelog.schemas import ChangeType, Commit, EntryDraft, FileChange, Impact


class FileChangePayload(BaseModel):
    """파일 변경, component 는 응답에만 의미가 있고 입력값은 경로로 다시 계산"""

    path: str = Field(min_length=1)
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    patch: str = ""
    component: str = "other"

    def to_domain(self) -> FileChange:
        return FileChange(
            path=self.path,
            additions=self.additions,
            deletions=self.deletions,
            patch=self.patch,
            component=detect_file_component(self.path),
        )


class CommitPayload(BaseModel):
    """요청/응답에 사용하는 커밋"""

    hash: str = Field(min_length=1)
    message: str
    date: datetime
    files: list[FileChangePayload] | None = None

    def to_domain(self) -> Commit:
        return Commit(
            hash=self.hash,
            message=self.message,
            date=self.date,
            files=[f.to_domain() for f in self.files] if self.files is not None else None,
        )

    @classmethod
    def from_domain(cls, commit: Commit) -> "CommitPayload":
        return cls(
            hash=commit.hash,
            message=commit.message,
            date=commit.date,
            files=[f.model_dump() for f in commit.files] if commit.files is not None else None,
        )


class EntryPayload(BaseModel):
    """사람이 검토한 체인지로그 항목"""

    content: str = Field(min_length=1)
    component: str | None = None
    scope: str | None = None
    impact: Impact = Impact.MINOR
    labels: list[str] = []
    is_technical: bool = Field(default=False, alias="isTechnical")
    is_user_facing: bool = Field(default=True, alias="isUserFacing")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("항목 내용이 비어 있습니다")
        return v.strip()

    def to_domain(self) -> EntryDraft:
        return EntryDraft(
            content=self.content,
            component=self.component,
            scope=self.scope,
            impact=self.impact,
            labels=self.labels,
            is_technical=self.is_technical,
            is_user_facing=self.is_user_facing,
        )

    @classmethod
    def from_domain(cls, entry: EntryDraft) -> "EntryPayload":
        return cls(
            content=entry.content,
            component=entry.component,
            scope=entry.scope,
            impact=entry.impact,
            labels=entry.labels,
            is_technical=entry.is_technical,
            is_user_facing=entry.is_user_facing,
        )

    class Config:
        populate_by_name = True


class CommitsRequest(BaseModel):
    """새 커밋 조회 요청."""

    repo_url: str = Field(alias="repoUrl", min_length=1)
    include_files: bool = Field(default=True, alias="includeFiles")
    github_token: str | None = Field(default=None, alias="githubToken")

    class Config:
        populate_by_name = True


class CommitsResponse(BaseModel):
    commits: list[CommitPayload]
    total_commits: int = Field(alias="totalCommits")

    class Config:
        populate_by_name = True


class GenerateRequest(BaseModel):
    """체인지로그 초안 생성 요청."""

    commits: list[CommitPayload]
    type: ChangeType = ChangeType.FEATURE

    @field_validator("commits")
    @classmethod
    def validate_commits(cls, v: list[CommitPayload]) -> list[CommitPayload]:
        if not v:
            raise ValueError("최소 1개의 커밋이 필요합니다")
        return v


class GeneratedPayload(BaseModel):
    title: str
    date: datetime
    type: ChangeType
    entries: list[EntryPayload]
    is_fallback: bool = Field(alias="isFallback")

    class Config:
        populate_by_name = True


class GenerateResponse(BaseModel):
    changelog: GeneratedPayload


class SubmitRequest(BaseModel):
    """검토된 체인지로그 저장 요청."""

    entries: list[EntryPayload]
    commits: list[CommitPayload]
    repo_url: str = Field(alias="repoUrl", min_length=1)
    type: ChangeType = ChangeType.FEATURE

    @field_validator("entries")
    @classmethod
    def validate_entries(cls, v: list[EntryPayload]) -> list[EntryPayload]:
        if not v:
            raise ValueError("최소 1개의 항목이 필요합니다")
        return v

    @field_validator("commits")
    @classmethod
    def validate_commits(cls, v: list[CommitPayload]) -> list[CommitPayload]:
        if not v:
            raise ValueError("최소 1개의 커밋이 필요합니다")
        return v

    class Config:
        populate_by_name = True


class SubmittedPayload(BaseModel):
    id: int
    title: str
    type: ChangeType
    created_at: datetime = Field(alias="createdAt")
    entry_count: int = Field(alias="entryCount")
    commit_count: int = Field(alias="commitCount")

    class Config:
        populate_by_name = True


class SubmitResponse(BaseModel):
    changelog: SubmittedPayload


class EntryViewPayload(BaseModel):
    content: str
    position: int
    component: str | None = None
    scope: str | None = None
    impact: str | None = None
    labels: list[str] = []
    is_technical: bool = Field(default=False, alias="isTechnical")
    is_user_facing: bool = Field(default=True, alias="isUserFacing")

    class Config:
        populate_by_name = True


class ChangelogPayload(BaseModel):
    id: int
    title: str
    type: str
    created_at: datetime = Field(alias="createdAt")
    badges: list[str]
    entries: list[EntryViewPayload]

    class Config:
        populate_by_name = True


class MonthGroupPayload(BaseModel):
    label: str
    changelogs: list[ChangelogPayload]


class ChangelogListResponse(BaseModel):
    groups: list[MonthGroupPayload]
