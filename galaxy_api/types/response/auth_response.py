# _*_ coding: utf-8 _*_
"""Authentication response models."""
from typing import Optional

from galaxy_api.types.models.base import CamelModel
from galaxy_api.types.models.security import AuthorizationProfile


class AuthenticatedUser(CamelModel):
    """인증된 사용자 정보와 권한 프로필."""

    user_id: str
    name: Optional[str] = None
    permissions: AuthorizationProfile


class TokenInfo(CamelModel):
    """발급된 GalaxyAPI 토큰 (iat/exp는 epoch seconds)."""

    iat: int
    exp: int
    token: str


class LoginResult(CamelModel):
    user: AuthenticatedUser
    token: TokenInfo
