# _*_ coding: utf-8 _*_
"""Authentication REST API endpoints."""
import logging

from fastapi import APIRouter, Depends
from galaxy_api.api.services.auth_service import AuthService
from galaxy_api.core.dependencies import get_auth_service
from galaxy_api.types.request.auth_request import LoginRequest, TokenRenewRequest
from galaxy_api.types.response.base import CommonResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


@router.post("/login", response_model=CommonResponse)
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """SSO 토큰으로 로그인하고 권한 프로필이 포함된 GalaxyAPI 토큰을 발급합니다."""
    result = await auth_service.login(request.sso_token)
    return CommonResponse(data=result.to_json_dict())


@router.post("/renew", response_model=CommonResponse)
async def renew(
    request: TokenRenewRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """기존 GalaxyAPI 토큰을 검증하고 권한 프로필을 다시 만들어 새 토큰을 발급합니다."""
    result = await auth_service.renew(request.token)
    return CommonResponse(data=result.to_json_dict())
