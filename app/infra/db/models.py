"""체인지로그 저장소 ORM 모델"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Changelog(Base):
    """체인지로그 (생성 후 수정되지 않음)"""

    __tablename__ = "changelogs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    # 항목 내용을 줄바꿈으로 합친 레거시 본문
    content: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False, default="Feature")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    entries: Mapped[list["ChangelogEntry"]] = relationship(
        back_populates="changelog",
        order_by="ChangelogEntry.position",
    )


class ChangelogEntry(Base):
    __tablename__ = "changelog_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    changelog_id: Mapped[int] = mapped_column(
        ForeignKey("changelogs.id"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    component: Mapped[str | None] = mapped_column(String(64), nullable=True)
    scope: Mapped[str | None] = mapped_column(String(64), nullable=True)
    impact: Mapped[str | None] = mapped_column(String(16), nullable=True, default="minor")
    labels: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_technical: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_user_facing: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    position: Mapped[int] = mapped_column("order", Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    changelog: Mapped[Changelog] = relationship(back_populates="entries")


class ProcessedCommit(Base):
    """처리 완료된 커밋, hash 는 전역 유일"""

    __tablename__ = "processed_commits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hash: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    repo_url: Mapped[str] = mapped_column(String(512), nullable=False, index=True)
    changelog_id: Mapped[int] = mapped_column(
        ForeignKey("changelogs.id"), nullable=False, index=True
    )
    stats: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    files: Mapped[list["CommitFileChange"]] = relationship(
        back_populates="commit",
        cascade="all, delete-orphan",
    )


class CommitFileChange(Base):
    __tablename__ = "file_changes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    commit_id: Mapped[int] = mapped_column(
        ForeignKey("processed_commits.id", ondelete="CASCADE"), nullable=False, index=True
    )
    path: Mapped[str] = mapped_column("file_path", Text, nullable=False)
    additions: Mapped[int] = mapped_column(Integer, nullable=False)
    deletions: Mapped[int] = mapped_column(Integer, nullable=False)
    patch: Mapped[str] = mapped_column(Text, nullable=False)
    component: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    commit: Mapped[ProcessedCommit] = relationship(back_populates="files")


class EntryCommitLink(Base):
    __tablename__ = "entry_commit_map"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entry_id: Mapped[int] = mapped_column(
        ForeignKey("changelog_entries.id"), nullable=False, index=True
    )
    commit_id: Mapped[int] = mapped_column(
        ForeignKey("processed_commits.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
