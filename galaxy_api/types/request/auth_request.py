# _*_ coding: utf-8 _*_
"""Authentication request models."""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class LoginRequest(BaseModel):
    """로그인 요청 모델 (SSO 토큰 기반)."""

    model_config = ConfigDict(populate_by_name=True)

    sso_token: str = Field(
        ...,
        validation_alias=AliasChoices("sso_token", "ssoToken", "token"),
        description="SSO 인증 서비스에서 받은 토큰",
        min_length=10,
    )

    @field_validator("sso_token", mode="before")
    @classmethod
    def _strip_bearer(cls, value):
        if isinstance(value, str) and value.lower().startswith("bearer "):
            return value[7:].strip()
        return value


class TokenRenewRequest(BaseModel):
    """기존 GalaxyAPI 토큰으로 재발급 요청."""

    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(
        ...,
        validation_alias=AliasChoices("token", "accessToken", "access_token"),
        description="기존 GalaxyAPI 토큰",
        min_length=10,
    )
