from app.domain.changelog.schemas.base import (
    ChangeType,
    Commit,
    CommitStats,
    EntryDraft,
    FileChange,
    GeneratedChangelog,
    GenerationState,
    Impact,
    RepositoryIdentity,
    SubmittedChangelog,
)
from app.domain.changelog.schemas.github import CommitDetail, CommitInfo, FileDetail
from app.domain.changelog.schemas.views import ChangelogView, EntryView, MonthGroup

__all__ = [
    "ChangeType",
    "Impact",
    "RepositoryIdentity",
    "FileChange",
    "CommitStats",
    "Commit",
    "EntryDraft",
    "GeneratedChangelog",
    "SubmittedChangelog",
    "GenerationState",
    "CommitInfo",
    "CommitDetail",
    "FileDetail",
    "EntryView",
    "ChangelogView",
    "MonthGroup",
]
