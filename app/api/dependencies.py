from fastapi import Request

from app.infra.db.database import Database


def get_database(request: Request) -> Database:
    """lifespan 에서 연 저장소 핸들"""
    return request.app.state.database
