# _*_ coding: utf-8 _*_
"""Bearer token check for the GalaxyAPI REST routes."""
import logging
from typing import List, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from galaxy_api.api.services.auth_service import decode_access_token
from galaxy_api.config import settings
from galaxy_api.core.global_exception_handlers import create_error_response
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode

logger = logging.getLogger(__name__)


def bearer_token(header_value: Optional[str]) -> Optional[str]:
    """`Bearer <token>` 형식이 아니면 None"""
    scheme, _, token = (header_value or "").strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        return None
    return token


class JWTAuthMiddleware(BaseHTTPMiddleware):
    """
    GalaxyAPI 토큰 검증 미들웨어

    제외 경로(로그인, 토큰 갱신, 서비스 로그, health 등)와 CORS preflight는 통과시킨다.
    웹소켓 연결은 HTTP 미들웨어를 거치지 않으므로 엔드포인트에서 직접 검증한다.
    """

    def __init__(self, app, exclude_paths: List[str] = None):
        super().__init__(app)
        self.exclude_paths = exclude_paths if exclude_paths is not None else settings.get_jwt_exclude_paths()
        if settings.jwt_enabled and settings.jwt_secret_key in ("", "change_me"):
            logger.warning("JWT_SECRET_KEY가 기본값입니다. 운영 환경에서는 반드시 변경하세요.")

    def _is_public(self, request: Request) -> bool:
        if request.method == "OPTIONS":
            return True
        path = request.url.path
        return any(
            path == excluded or path.startswith(excluded.rstrip("/") + "/")
            for excluded in self.exclude_paths
        )

    @staticmethod
    def _reject(resp_code: ResponseCode, status_code: int = 401) -> JSONResponse:
        return JSONResponse(status_code=status_code, content=jsonable_encoder(create_error_response(resp_code)))

    async def dispatch(self, request: Request, call_next):
        if not settings.jwt_enabled or self._is_public(request):
            return await call_next(request)

        token = bearer_token(request.headers.get("Authorization"))
        if token is None:
            return self._reject(ResponseCode.AUTH_TOKEN_MISSING)

        try:
            payload = decode_access_token(token)
        except HandledException as e:
            logger.warning(f"토큰 검증 실패: {e} path={request.url.path}")
            return self._reject(e.resp_code, e.http_status_code)

        # 라우터/예외 핸들러(서비스 로그 사용자명)에서 사용
        request.state.jwt_payload = payload
        request.state.user_id = payload.get("sub")
        return await call_next(request)
