"""전역 예외와 에러 응답 핸들러

모든 에러 응답은 같은 봉투를 사용합니다::

    {"success": false, "message": "...",
     "error": {"code": "...", "message": "...", "detail": {...}}}

도메인 예외는 상태 코드별 기본 클래스(``NotFoundException`` 등)를 상속하고
``message`` / ``error_code`` / ``detail``만 지정합니다.
"""

from enum import Enum
from typing import Any, ClassVar, Dict, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.logging import get_logger
from app.core.middlewares.context import get_request_id

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """전역 에러 코드"""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    BAD_REQUEST = "BAD_REQUEST"
    CONFLICT = "CONFLICT"

    # 인증
    INVALID_API_KEY = "INVALID_API_KEY"

    # 검색/정렬
    INVALID_SORT_KEY = "INVALID_SORT_KEY"


class BaseAPIException(HTTPException):
    """기본 API 예외

    하위 클래스는 상태 코드와 기본 메시지/에러 코드를 클래스 속성으로 둡니다.
    """

    status_code_default: ClassVar[int] = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: ClassVar[str] = "서버 내부 오류가 발생했습니다."
    default_error_code: ClassVar[str] = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: Optional[str] = None,
        detail: Optional[Dict[str, Any]] = None,
    ):
        self.error_code = error_code or self.default_error_code
        self.message = message or self.default_message
        self.detail_info = detail or {}
        super().__init__(status_code=self.status_code_default, detail=self.message)


class BadRequestException(BaseAPIException):
    """400 Bad Request"""

    status_code_default = status.HTTP_400_BAD_REQUEST
    default_message = "잘못된 요청입니다."
    default_error_code = ErrorCode.BAD_REQUEST


class UnauthorizedException(BaseAPIException):
    """401 Unauthorized"""

    status_code_default = status.HTTP_401_UNAUTHORIZED
    default_message = "인증이 필요합니다."
    default_error_code = ErrorCode.UNAUTHORIZED


class NotFoundException(BaseAPIException):
    """404 Not Found"""

    status_code_default = status.HTTP_404_NOT_FOUND
    default_message = "리소스를 찾을 수 없습니다."
    default_error_code = ErrorCode.NOT_FOUND


class ConflictException(BaseAPIException):
    """409 Conflict"""

    status_code_default = status.HTTP_409_CONFLICT
    default_message = "리소스 충돌이 발생했습니다."
    default_error_code = ErrorCode.CONFLICT


class InvalidSortKeyException(BadRequestException):
    """지원하지 않는 정렬 기준/방향"""

    def __init__(self, sort: Optional[str] = None, direction: Optional[str] = None):
        detail: Dict[str, Any] = {}
        if sort is not None:
            detail["sort"] = sort
        if direction is not None:
            detail["direction"] = direction
        super().__init__(
            message="지원하지 않는 정렬 기준입니다.",
            error_code=ErrorCode.INVALID_SORT_KEY,
            detail=detail,
        )


def error_response(
    status_code: int, code: str, message: str, detail: Any = None
) -> JSONResponse:
    """에러 봉투 응답 생성"""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "error": {"code": code, "message": message, "detail": detail},
        },
    )


async def base_exception_handler(
    request: Request, exc: BaseAPIException
) -> JSONResponse:
    """도메인/전역 API 예외"""
    return error_response(exc.status_code, exc.error_code, exc.message, exc.detail_info)


async def http_exception_handler(
    request: Request, exc: HTTPException
) -> JSONResponse:
    """FastAPI HTTPException"""
    return error_response(exc.status_code, ErrorCode.INTERNAL_ERROR, str(exc.detail))


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """요청 검증 실패 (422)"""
    return error_response(
        422,
        ErrorCode.VALIDATION_ERROR,
        "요청 값이 올바르지 않습니다.",
        {"errors": jsonable_encoder(exc.errors())},
    )


async def generic_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """처리되지 않은 예외 (500)"""
    logger.exception(
        "Unhandled exception",
        extra={
            "request_id": get_request_id(),
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.INTERNAL_ERROR,
        BaseAPIException.default_message,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """예외 핸들러 등록 (구체적인 예외부터)"""
    app.add_exception_handler(BaseAPIException, base_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
