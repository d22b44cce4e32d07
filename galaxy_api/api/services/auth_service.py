# _*_ coding: utf-8 _*_
"""Authentication service for building authorization context and issuing tokens."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt
from galaxy_api.api.services.directory_service import DirectoryService
from galaxy_api.api.services.permission_service import PermissionService
from galaxy_api.config import settings
from galaxy_api.types.models.security import AuthorizationProfile
from galaxy_api.types.response.auth_response import AuthenticatedUser, LoginResult, TokenInfo
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from galaxy_api.utils.jwt_key_manager import JWTKeyManager

logger = logging.getLogger(__name__)


def decode_access_token(token: str) -> Dict:
    """
    GalaxyAPI가 발급한 토큰 검증 후 payload 반환

    Raises:
        HandledException: 만료 시 AUTH_TOKEN_EXPIRED, 그 외 검증 실패 시 AUTH_TOKEN_INVALID
    """
    if not token:
        raise HandledException(ResponseCode.AUTH_TOKEN_MISSING)

    decode_kwargs = {
        "algorithms": [settings.jwt_algorithm],
        "options": {
            "require": ["exp", "iat", "sub"],
        },
    }
    if settings.jwt_issuer:
        decode_kwargs["issuer"] = settings.jwt_issuer

    try:
        return jwt.decode(token, settings.jwt_secret_key, **decode_kwargs)
    except jwt.ExpiredSignatureError as exc:
        raise HandledException(ResponseCode.AUTH_TOKEN_EXPIRED, e=exc)
    except jwt.InvalidTokenError as exc:
        raise HandledException(ResponseCode.AUTH_TOKEN_INVALID, e=exc)


class AuthService:
    """로그인/토큰 갱신 시 사용자 권한 컨텍스트를 만들고 토큰을 발급하는 서비스."""

    def __init__(
        self,
        directory_service: DirectoryService,
        permission_service: PermissionService,
        key_manager: Optional[JWTKeyManager] = None,
    ):
        if directory_service is None or permission_service is None:
            raise ValueError("Directory and permission services are required")

        self.directory_service = directory_service
        self.permission_service = permission_service
        self.key_manager = key_manager
        self.secret_key = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.expires_minutes = settings.jwt_access_token_expires_minutes
        self.issuer = settings.jwt_issuer

        if not self.secret_key:
            raise ValueError("JWT_SECRET_KEY 설정이 필요합니다.")

    async def build_context(self, user_id: str) -> AuthorizationProfile:
        """디렉토리 그룹 해석 후 그룹 권한을 병합한 권한 프로필"""
        group_ids = await self.directory_service.resolve_groups(user_id)
        return await self.permission_service.aggregate_permissions(group_ids, user_id=user_id)

    async def _extract_sso_payload(self, sso_token: str) -> Dict:
        """
        SSO 토큰에서 payload를 추출합니다.

        `SSO_VERIFY_SIGNATURE`가 켜져 있으면 JWKS 공개키로 서명을 검증하고,
        꺼져 있으면 서명 검증 없이 payload만 읽습니다.
        """
        try:
            if not settings.sso_verify_signature:
                return jwt.decode(sso_token, options={"verify_signature": False})

            kid = jwt.get_unverified_header(sso_token).get("kid")
            if not kid:
                raise HandledException(ResponseCode.AUTH_TOKEN_INVALID, msg="SSO 토큰에 kid가 없습니다.")

            key_manager = self.key_manager or JWTKeyManager(settings.sso_jwks_uri)
            public_key = await key_manager.get_public_key(kid)
            decode_kwargs = {"algorithms": ["RS256"]}
            if settings.sso_audience:
                decode_kwargs["audience"] = settings.sso_audience
            else:
                decode_kwargs["options"] = {"verify_aud": False}
            return jwt.decode(sso_token, public_key, **decode_kwargs)
        except HandledException:
            raise
        except jwt.ExpiredSignatureError as exc:
            raise HandledException(ResponseCode.AUTH_TOKEN_EXPIRED, e=exc, msg="SSO 토큰이 만료되었습니다.")
        except jwt.InvalidTokenError as exc:
            logger.warning(f"SSO 토큰 디코딩 실패: {str(exc)}")
            raise HandledException(ResponseCode.AUTH_TOKEN_INVALID, e=exc, msg="SSO 토큰 형식이 올바르지 않습니다.")

    async def login(self, sso_token: str) -> LoginResult:
        """SSO 토큰의 사용자로 권한 컨텍스트를 만들고 GalaxyAPI 토큰을 발급합니다."""
        try:
            sso_payload = await self._extract_sso_payload(sso_token)

            user_id = (
                sso_payload.get("upn") or
                sso_payload.get("preferred_username") or
                sso_payload.get("oid") or
                sso_payload.get("user_id") or
                sso_payload.get("sub")
            )
            if not user_id:
                raise HandledException(
                    ResponseCode.REQUIRED_FIELD_MISSING,
                    msg="SSO 토큰에서 user_id를 찾을 수 없습니다."
                )
            name = sso_payload.get("name") or sso_payload.get("displayName") or user_id

            profile = await self.build_context(user_id)
            logger.info(f"로그인: user_id={user_id}, groups={len(profile.groups)}, admin={profile.is_admin}")
            return self._issue_token(AuthenticatedUser(user_id=user_id, name=name, permissions=profile))
        except HandledException:
            raise
        except Exception as exc:
            logger.exception("SSO 토큰 기반 로그인 처리 중 오류가 발생했습니다.")
            raise HandledException(ResponseCode.UNDEFINED_ERROR, e=exc)

    async def renew(self, access_token: str) -> LoginResult:
        """기존 토큰을 검증하고 권한 컨텍스트를 다시 만들어 새 토큰을 발급합니다."""
        try:
            payload = decode_access_token(access_token)
            user_id = payload["sub"]

            profile = await self.build_context(user_id)
            return self._issue_token(
                AuthenticatedUser(user_id=user_id, name=payload.get("name") or user_id, permissions=profile)
            )
        except HandledException:
            raise
        except Exception as exc:
            logger.exception("토큰 재발급 중 오류가 발생했습니다.")
            raise HandledException(ResponseCode.UNDEFINED_ERROR, e=exc)

    def _issue_token(self, user: AuthenticatedUser) -> LoginResult:
        issued_at = datetime.now(timezone.utc)
        expires_at = issued_at + timedelta(minutes=self.expires_minutes)

        payload = {
            "token_type": "access",
            "sub": user.user_id,
            "name": user.name,
            "permissions": user.permissions.to_json_dict(),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        if self.issuer:
            payload["iss"] = self.issuer

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        return LoginResult(user=user, token=TokenInfo(iat=payload["iat"], exp=payload["exp"], token=token))
