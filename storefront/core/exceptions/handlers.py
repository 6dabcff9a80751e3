"""
Global Exception Handlers
전역 예외 핸들러
"""

import logging
from typing import Any, Dict, List

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .base import AppException
from .codes import ErrorCode
from .schemas import ErrorResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong"


def _request_id() -> str:
    return correlation_id.get() or ""


def _is_production(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return settings is None or settings.is_production


def format_validation_errors(errors: List[Dict[str, Any]]) -> str:
    """
    Pydantic 에러 목록을 단일 메시지로 변환

    예: "Validation error: password: Password must be ...; email: ..."
    """
    parts = []
    for error in errors:
        field_path = ".".join(str(loc) for loc in error["loc"] if loc != "body")
        message = error["msg"]
        # field_validator 에서 발생한 ValueError 는 "Value error, " 접두사가 붙는다
        if error.get("type") == "value_error" and "ctx" in error:
            message = str(error["ctx"].get("error", message))
        parts.append(f"{field_path}: {message}" if field_path else message)
    return "Validation error: " + "; ".join(parts)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    커스텀 애플리케이션 예외 핸들러

    Args:
        request: FastAPI Request 객체
        exc: AppException 인스턴스

    Returns:
        JSONResponse: {status, message, error_code} 응답

    5xx 예외의 메시지는 운영 모드에서 일반 메시지로 대체된다.
    """
    request_id = _request_id()
    error_code = getattr(exc.error_code, "value", exc.error_code)
    is_server_error = exc.status_code >= 500
    log = logger.error if is_server_error else logger.warning
    log(
        f"AppException occurred: [{error_code}] {exc.message}",
        extra={
            "error_code": error_code,
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
            "request_id": request_id,
            "details": exc.details,
        },
    )

    message = exc.message
    error = None
    if is_server_error:
        if _is_production(request):
            message = GENERIC_ERROR_MESSAGE
        else:
            error = {"type": type(exc).__name__, "detail": exc.message}

    error_response = ErrorResponse(
        status=exc.status,
        message=message,
        error_code=exc.error_code,
        request_id=request_id or None,
        error=error,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.to_content(),
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Pydantic 검증 에러 핸들러 (400 Bad Request)

    Args:
        request: FastAPI Request 객체
        exc: RequestValidationError 인스턴스

    Returns:
        JSONResponse: 검증 에러 응답
    """
    request_id = _request_id()
    message = format_validation_errors(exc.errors())

    # 입력값(비밀번호 등)은 로그에 남기지 않는다
    logger.warning(
        "Validation error occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "request_id": request_id,
            "fields": [".".join(str(loc) for loc in e["loc"]) for e in exc.errors()],
        },
    )

    error_response = ErrorResponse(
        status="fail",
        message=message,
        error_code=ErrorCode.VAL_INVALID_INPUT,
        request_id=request_id or None,
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.to_content(),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    FastAPI/Starlette HTTP 예외 핸들러

    기본 HTTPException(404 라우트 없음, 405 등)을 표준 포맷으로 변환
    """
    request_id = _request_id()

    error_code_map = {
        400: ErrorCode.VAL_INVALID_INPUT,
        401: ErrorCode.AUTH_TOKEN_INVALID,
        403: ErrorCode.AUTHZ_FORBIDDEN,
        404: ErrorCode.BIZ_RESOURCE_NOT_FOUND,
        500: ErrorCode.SYS_INTERNAL_ERROR,
    }
    error_code = error_code_map.get(exc.status_code, ErrorCode.SYS_INTERNAL_ERROR)

    logger.warning(
        f"HTTPException occurred: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
            "request_id": request_id,
        },
    )

    error_response = ErrorResponse(
        status="fail" if exc.status_code < 500 else "error",
        message=str(exc.detail),
        error_code=error_code,
        request_id=request_id or None,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.to_content(),
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    일반 예외 핸들러 (예상치 못한 모든 에러)

    전체 스택 트레이스를 로깅하고, 운영 모드에서는 일반 메시지만 반환한다.
    """
    request_id = _request_id()

    logger.exception(
        f"Unexpected exception occurred: {exc}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "request_id": request_id,
            "exception_type": type(exc).__name__,
        },
    )

    error = None
    if not _is_production(request):
        error = {"type": type(exc).__name__, "detail": str(exc)}

    error_response = ErrorResponse(
        status="error",
        message=GENERIC_ERROR_MESSAGE,
        error_code=ErrorCode.SYS_INTERNAL_ERROR,
        request_id=request_id or None,
        error=error,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.to_content(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """전역 예외 핸들러 등록"""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
