# _*_ coding: utf-8 _*_
"""Group / Permission value types."""
from typing import List, Optional

from pydantic import Field

from .base import CamelModel
from .tag import Tag


class PermissionType(CamelModel):
    """권한 유형. `is_system_permission`이 False이면 태그 범위 권한"""

    id: str
    name: str = ""
    code: str = ""
    is_system_permission: bool = False
    system_name: Optional[str] = None


class Permission(CamelModel):
    id: Optional[str] = None
    type: PermissionType
    has_permission: bool = False


class ComponentTagPermission(CamelModel):
    tag: Tag
    permissions: List[Permission] = Field(default_factory=list)


class Group(CamelModel):
    id: Optional[str] = None
    name: Optional[str] = None
    is_admin: bool = False
    is_new: bool = False
    system_permissions: List[Permission] = Field(default_factory=list)
    component_tag_permissions: List[ComponentTagPermission] = Field(default_factory=list)


class AuthorizationProfile(CamelModel):
    """
    사용자의 유효 권한 프로필

    로그인/토큰 갱신 시 생성되어 토큰에 포함된다. 관리자 프로필은
    모든 권한을 가진 것으로 판단한다.
    """

    user_id: Optional[str] = None
    is_admin: bool = False
    groups: List[str] = Field(default_factory=list)
    system_permissions: List[Permission] = Field(default_factory=list)
    component_tag_permissions: List[ComponentTagPermission] = Field(default_factory=list)

    def has_permission(self, code: str, tag_id: Optional[str] = None) -> bool:
        """시스템 권한(`tag_id` 없음) 또는 태그 권한 보유 여부"""
        if self.is_admin:
            return True

        if tag_id is None:
            permissions = self.system_permissions
        else:
            permissions = next(
                (ctp.permissions for ctp in self.component_tag_permissions if ctp.tag.id == tag_id),
                [],
            )
        return any(p.has_permission for p in permissions if p.type.code == code)
