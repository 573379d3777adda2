from datetime import datetime
from enum import Enum
from typing import TypedDict

from pydantic import BaseModel, Field


class ChangeType(str, Enum):
    """체인지로그 유형"""

    FEATURE = "Feature"
    UPDATE = "Update"
    FIX = "Fix"
    BREAKING = "Breaking"
    SECURITY = "Security"


class Impact(str, Enum):
    """변경 영향도"""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


class RepositoryIdentity(BaseModel):
    """레포지토리 식별자

    remote 모드는 owner/repo, local 모드(레거시)는 정규화된 파일시스템 경로를 가진다.
    key 는 중복 제거 파티션 키로 사용된다.
    """

    model_config = {"frozen": True}

    kind: str
    owner: str | None = None
    repo: str | None = None
    path: str | None = None

    @property
    def is_remote(self) -> bool:
        return self.kind == "remote"

    @property
    def key(self) -> str:
        if self.is_remote:
            return f"{self.owner}/{self.repo}"
        return f"local:{self.path}"


class FileChange(BaseModel):
    """커밋에 포함된 파일 변경"""

    path: str
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    patch: str = ""
    component: str = "other"


class CommitStats(BaseModel):
    """파일 변경으로부터 계산되는 커밋 통계"""

    total_additions: int
    total_deletions: int
    files_changed: int


class Commit(BaseModel):
    """파이프라인을 흐르는 커밋

    files 가 None 이면 파일 단위 상세가 없는 기본 파이프라인 커밋이다.
    """

    hash: str = Field(min_length=1)
    message: str
    date: datetime
    files: list[FileChange] | None = None

    @property
    def stats(self) -> CommitStats | None:
        if self.files is None:
            return None
        return CommitStats(
            total_additions=sum(f.additions for f in self.files),
            total_deletions=sum(f.deletions for f in self.files),
            files_changed=len(self.files),
        )


class EntryDraft(BaseModel):
    """생성되었거나 사람이 수정한 체인지로그 항목"""

    content: str = Field(min_length=1)
    component: str | None = None
    scope: str | None = None
    impact: Impact = Impact.MINOR
    labels: list[str] = Field(default_factory=list)
    is_technical: bool = False
    is_user_facing: bool = True


class GeneratedChangelog(BaseModel):
    """생성 단계 결과 (제출 전 초안)"""

    title: str
    date: datetime
    type: ChangeType
    entries: list[EntryDraft]
    is_fallback: bool = False


class SubmittedChangelog(BaseModel):
    """저장 완료된 체인지로그 요약"""

    id: int
    title: str
    type: ChangeType
    created_at: datetime
    entry_count: int
    commit_count: int
    commit_hashes: list[str]


class GenerationState(TypedDict, total=False):
    """LangGraph 생성 워크플로우 상태"""

    commits: list[Commit]
    change_type: ChangeType
    session_id: str | None
    prompt: str
    response_text: str
    entries: list[EntryDraft]
    is_fallback: bool
    error_message: str
