"""
API 예외 처리기

서비스/저장소 예외를 HTTP 응답으로 변환하는 단일 지점입니다.

- RequestValidationError → 400 + 필드별 오류 목록
- HTTPException → {"message": detail}
- StoreException, 그 외 예외 → 500 (내부 정보 노출 없음)
"""

from typing import Any, Iterable

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import StoreException
from app.schemas.common import FieldError, ValidationErrorResponse

logger = structlog.get_logger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

# 오류 위치(loc)에서 필드명이 아닌 요청 부분
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def _field_name(loc: Iterable[Any]) -> str:
    """
    ("body", "price") → "price", ("query", "pageSize") → "pageSize"

    본문 자체의 오류(본문 누락 ("body",), JSON 파싱 실패 ("body", 12))는 "body"
    """
    parts = list(loc)
    location = "body"
    if parts and parts[0] in _LOCATION_PREFIXES:
        location = parts[0]
        parts = parts[1:]
    if not parts or (len(parts) == 1 and isinstance(parts[0], int)):
        return location
    return ".".join(str(part) for part in parts)


def _error_message(error: dict) -> str:
    """Pydantic 오류 메시지 (ValueError 메시지는 "Value error, " 접두어 제거)"""
    ctx = error.get("ctx") or {}
    if error.get("type") == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return error.get("msg", "Invalid value")


def collect_field_errors(errors: Iterable[dict]) -> list[FieldError]:
    """
    Pydantic/FastAPI 검증 오류를 필드 + 메시지 목록으로 변환합니다.

    Example:
        >>> collect_field_errors([{"loc": ("body", "name"), "msg": "Field required"}])
        [FieldError(field='name', message='Field required')]
    """
    return [
        FieldError(field=_field_name(error.get("loc", ())), message=_error_message(error))
        for error in errors
    ]


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """검증 실패 → 400 Bad Request"""
    body = ValidationErrorResponse(errors=collect_field_errors(exc.errors()))
    logger.info(
        "request.validation_failed",
        path=request.url.path,
        errors=[error.model_dump() for error in body.errors],
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """HTTPException → {"message": detail}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """저장소 오류 및 예상하지 못한 예외 → 500 (상세 정보는 로그에만 기록)"""
    logger.error(
        "request.unhandled_exception",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": UNEXPECTED_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """애플리케이션에 예외 처리기를 등록합니다."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(StoreException, unexpected_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)
