# _*_ coding: utf-8 _*_
"""Global exception handlers for FastAPI application."""
import logging
import uuid
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError as HTTPRequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.background import BackgroundTask
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from ..config import settings
from ..types.response.base import ErrorResponse
from ..types.response.exceptions import (
    HandledException,
    UnHandledException,
)
from ..types.response.response_code import ResponseCode
from ..utils.logging_utils import log_error, log_warning

logger = logging.getLogger(__name__)

# HTTP 상태 코드 -> ResponseCode (프레임워크가 직접 올린 HTTPException용)
_HTTP_STATUS_CODES = {
    400: ResponseCode.VALIDATION_ERROR,
    401: ResponseCode.AUTH_TOKEN_INVALID,
    404: ResponseCode.FAIL,
    405: ResponseCode.FAIL,
}


def create_error_response(resp_code: ResponseCode, trace_id: str = None) -> ErrorResponse:
    """에러 응답 생성 (클라이언트에는 ResponseCode의 안내 메시지만 전달)"""
    return ErrorResponse(
        code=resp_code.code,
        message=resp_code.message,
        traceId=trace_id or str(uuid.uuid4()),
    )


def get_request_info(request: Request) -> str:
    """요청 정보 문자열 생성"""
    return "\n".join([
        "=" * 50,
        "Request",
        f"{{method: {request.method}}}",
        f"{{url: {request.url}}}",
        f"{{client: {request.client}}}",
        "=" * 50,
    ])


def _service_log_task(request: Request, message: str) -> Optional[BackgroundTask]:
    """응답 전송 후 실행되는 서비스 로그 저장 작업"""
    if not settings.service_log_enabled:
        return None

    from ..api.services.service_log_service import ServiceLogService
    from .dependencies import get_database

    user_name = getattr(request.state, "user_id", None)
    try:
        return BackgroundTask(ServiceLogService(get_database()).write, message, "ERROR", user_name)
    except Exception as e:
        log_warning("서비스 로그 작업 생성 실패", e)
        return None


def _error_json(request: Request, resp_code: ResponseCode, status_code: int, log_msg: str, exc: Exception) -> JSONResponse:
    trace_id = str(uuid.uuid4())
    log_error(f"[traceId={trace_id}] {log_msg}\nRequest: {get_request_info(request)}", exc)

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(create_error_response(resp_code, trace_id)),
        background=_service_log_task(request, f"[traceId={trace_id}] {log_msg}"),
    )


async def handled_exception_handler(request: Request, exc: HandledException) -> JSONResponse:
    """HandledException 처리"""
    return _error_json(
        request,
        exc.resp_code,
        exc.http_status_code,
        f"HandledException {exc.logMessage}",
        exc.cause or exc,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """예상치 못한 예외 처리"""
    managed_exc = exc if isinstance(exc, UnHandledException) else UnHandledException(e=exc)
    return _error_json(
        request,
        managed_exc.resp_code,
        500,
        f"Unexpected exception [{exc.__class__.__name__}]: {managed_exc.logMessage}",
        exc,
    )


def set_global_exception_handlers(app: FastAPI) -> FastAPI:
    """글로벌 예외 핸들러 설정"""

    @app.exception_handler(HandledException)
    async def handeled_exception_handler(request, exc):
        if isinstance(exc, UnHandledException):
            return await unhandled_exception_handler(request, exc)
        return await handled_exception_handler(request, exc)

    @app.exception_handler(HTTPException)
    async def custom_http_exception_handler(request, exc):
        resp_code = _HTTP_STATUS_CODES.get(exc.status_code, ResponseCode.FAIL)
        return _error_json(request, resp_code, exc.status_code, f"HTTPException [{exc.status_code}]: {exc.detail}", exc)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_http_exception_handler(request, exc):
        resp_code = _HTTP_STATUS_CODES.get(exc.status_code, ResponseCode.FAIL)
        return _error_json(request, resp_code, exc.status_code, f"StarletteHTTPException [{exc.status_code}]: {exc.detail}", exc)

    @app.exception_handler(HTTPRequestValidationError)
    async def validation_exception_handler(request, exc):
        return _error_json(request, ResponseCode.VALIDATION_ERROR, 400, f"ValidationError: {exc.errors()}", exc)

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request, exc):
        return _error_json(request, ResponseCode.DATABASE_QUERY_ERROR, 500, f"SQLAlchemyError: {str(exc)}", exc)

    @app.exception_handler(Exception)
    async def general_exception_handler(request, exc):
        return await unhandled_exception_handler(request, exc)

    return app
