from enum import Enum

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """에러 코드 열거형"""

    INVALID_INPUT = "INVALID_INPUT"
    INVALID_REPOSITORY = "INVALID_REPOSITORY"
    SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"
    GENERATION_UNAVAILABLE = "GENERATION_UNAVAILABLE"
    NO_NEW_COMMITS = "NO_NEW_COMMITS"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CustomException(Exception):
    def __init__(
        self,
        status_code: int,
        error_code: ErrorCode | str,
        message: str,
        detail: str | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.detail = detail
        super().__init__(message)


class ValidationError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=400,
            error_code=ErrorCode.INVALID_INPUT,
            message="입력값이 올바르지 않습니다",
            detail=detail,
        )


class InvalidIdentityError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=400,
            error_code=ErrorCode.INVALID_REPOSITORY,
            message="레포지토리 주소가 올바르지 않습니다",
            detail=detail,
        )


SOURCE_REASON_STATUS = {
    "unauthorized": 401,
    "not_found": 404,
    "rate_limited": 502,
    "transient": 502,
}


class SourceUnavailableError(CustomException):
    """커밋 소스(GitHub) 호출 실패

    reason 으로 인증/미존재 오류와 일시적 오류를 구분한다.
    """

    def __init__(self, reason: str = "transient", detail: str | None = None):
        self.reason = reason
        super().__init__(
            status_code=SOURCE_REASON_STATUS.get(reason, 502),
            error_code=ErrorCode.SOURCE_UNAVAILABLE,
            message="커밋 정보를 가져오지 못했습니다",
            detail=detail,
        )


class GenerationUnavailableError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=502,
            error_code=ErrorCode.GENERATION_UNAVAILABLE,
            message="LLM 호출에 실패했습니다",
            detail=detail,
        )


class NoNewCommitsError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=409,
            error_code=ErrorCode.NO_NEW_COMMITS,
            message="새로 처리할 커밋이 없습니다",
            detail=detail,
        )


class PersistenceError(CustomException):
    def __init__(self, stage: str, detail: str | None = None):
        self.stage = stage
        super().__init__(
            status_code=500,
            error_code=ErrorCode.PERSISTENCE_FAILED,
            message=f"체인지로그 저장에 실패했습니다 (stage={stage})",
            detail=detail,
        )


def _error_response(exc: CustomException) -> JSONResponse:
    content = {
        "error_code": exc.error_code,
        "message": exc.message,
    }
    if exc.detail and not settings.is_production:
        content["detail"] = exc.detail

    return JSONResponse(status_code=exc.status_code, content=content)


def register_exception_handlers(app):
    @app.exception_handler(CustomException)
    async def custom_exception_handler(request: Request, exc: CustomException):
        if exc.status_code >= 500:
            logger.error(
                "요청 처리 실패",
                path=request.url.path,
                error_code=str(exc.error_code),
                detail=exc.detail,
            )
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.info("요청 검증 실패", path=request.url.path, errors=len(errors))
        detail = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in errors
        )
        return _error_response(ValidationError(detail=detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("처리되지 않은 예외", path=request.url.path, error=type(exc).__name__)
        return _error_response(
            CustomException(
                status_code=500,
                error_code=ErrorCode.INTERNAL_ERROR,
                message="서버 내부 오류가 발생했습니다",
            )
        )
