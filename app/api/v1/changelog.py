import uuid

from fastapi import APIRouter, Depends, Query, Request

from app.api.dependencies import get_database
from app.api.v1.schemas.changelog import (
    ChangelogListResponse,
    ChangelogPayload,
    CommitPayload,
    CommitsRequest,
    CommitsResponse,
    EntryPayload,
    EntryViewPayload,
    GeneratedPayload,
    GenerateRequest,
    GenerateResponse,
    MonthGroupPayload,
    SubmitRequest,
    SubmitResponse,
    SubmittedPayload,
)
from app.core.config import settings
from app.core.context import set_repository
from app.core.limiter import limiter
from app.core.logging import get_logger
from app.domain.changelog.identity import resolve_identity
from app.domain.changelog.persistence import submit_changelog
from app.domain.changelog.presentation import browse_changelogs
from app.domain.changelog.service import fetch_new_commits
from app.domain.changelog.workflow import generate_changelog
from app.infra.db.database import Database

router = APIRouter(prefix="/changelog", tags=["changelog"])
logger = get_logger(__name__)


@router.post("/commits", response_model=CommitsResponse)
async def list_new_commits(
    request: CommitsRequest,
    database: Database = Depends(get_database),
) -> CommitsResponse:
    identity = resolve_identity(request.repo_url)
    set_repository(identity.key)

    commits = await fetch_new_commits(
        database,
        identity,
        token=request.github_token,
        include_files=request.include_files,
    )
    return CommitsResponse(
        commits=[CommitPayload.from_domain(c) for c in commits],
        total_commits=len(commits),
    )


@router.post("/generate", response_model=GenerateResponse)
@limiter.limit(settings.rate_limit_generate)
async def generate_draft(request: Request, body: GenerateRequest) -> GenerateResponse:
    session_id = str(uuid.uuid4())
    generated = await generate_changelog(
        [c.to_domain() for c in body.commits],
        change_type=body.type,
        session_id=session_id,
    )
    return GenerateResponse(
        changelog=GeneratedPayload(
            title=generated.title,
            date=generated.date,
            type=generated.type,
            entries=[EntryPayload.from_domain(e) for e in generated.entries],
            is_fallback=generated.is_fallback,
        )
    )


@router.post("/submit", response_model=SubmitResponse)
async def submit(
    request: SubmitRequest,
    database: Database = Depends(get_database),
) -> SubmitResponse:
    identity = resolve_identity(request.repo_url, allow_local=True)
    set_repository(identity.key)

    submitted = await submit_changelog(
        database,
        identity,
        entries=[e.to_domain() for e in request.entries],
        commits=[c.to_domain() for c in request.commits],
        change_type=request.type,
    )
    return SubmitResponse(
        changelog=SubmittedPayload(
            id=submitted.id,
            title=submitted.title,
            type=submitted.type,
            created_at=submitted.created_at,
            entry_count=submitted.entry_count,
            commit_count=submitted.commit_count,
        )
    )


@router.get("", response_model=ChangelogListResponse)
async def list_changelogs(
    category: str | None = Query(default=None),
    change_type: str | None = Query(default=None, alias="type"),
    database: Database = Depends(get_database),
) -> ChangelogListResponse:
    groups = await browse_changelogs(database, category=category, change_type=change_type)
    return ChangelogListResponse(
        groups=[
            MonthGroupPayload(
                label=group.label,
                changelogs=[
                    ChangelogPayload(
                        id=view.id,
                        title=view.title,
                        type=str(getattr(view.type, "value", view.type)),
                        created_at=view.created_at,
                        badges=view.badges,
                        entries=[EntryViewPayload(**e.model_dump()) for e in view.entries],
                    )
                    for view in group.changelogs
                ],
            )
            for group in groups
        ]
    )
