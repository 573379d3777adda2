from datetime import datetime

from pydantic import BaseModel


class CommitInfo(BaseModel):
    """커밋 목록 조회 결과"""

    sha: str
    message: str
    date: datetime


class FileDetail(BaseModel):
    """커밋 상세 조회의 파일 단위 변경"""

    filename: str
    additions: int = 0
    deletions: int = 0
    patch: str = ""


class CommitDetail(BaseModel):
    """커밋 상세 정보"""

    sha: str
    message: str
    date: datetime
    files: list[FileDetail]
