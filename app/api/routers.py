from fastapi import APIRouter

from app.api.v1.changelog import router as changelog_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(changelog_router)
