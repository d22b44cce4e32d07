# _*_ coding: utf-8 _*_
"""Permission CRUD operations with database."""
import logging
from typing import List, Tuple

from galaxy_api.database.models.security_models import (
    GroupSystemPermission,
    GroupTagPermission,
    Permission,
    PermissionType,
)
from galaxy_api.database.models.tag_models import Tag, TagType
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from galaxy_api.utils.uuid_gen import gen
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class PermissionCRUD:
    """권한 유형, 그룹 시스템 권한, 그룹 태그 권한 조회/저장"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_permission_types(self, system_name: str) -> List[PermissionType]:
        """시스템 이름으로 권한 유형 목록 조회"""
        try:
            result = await self.db.execute(
                select(PermissionType)
                .where(PermissionType.system_name == system_name)
                .order_by(PermissionType.code, PermissionType.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def get_system_permissions(self, group_id: str) -> List[Tuple[Permission, PermissionType]]:
        """그룹의 시스템 권한 조회"""
        try:
            result = await self.db.execute(
                select(Permission, PermissionType)
                .join(GroupSystemPermission, GroupSystemPermission.permission_id == Permission.id)
                .join(PermissionType, PermissionType.id == Permission.permission_type_id)
                .where(GroupSystemPermission.group_id == group_id)
                .order_by(PermissionType.code, Permission.id)
            )
            return [(row[0], row[1]) for row in result.all()]
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def get_tag_permissions(self, group_id: str) -> List[Tuple[Tag, str, Permission, PermissionType]]:
        """
        그룹의 컴포넌트 태그 권한 조회

        Returns:
            (Tag, 태그 유형명, Permission, PermissionType) 목록. 태그 ID 순으로 정렬된다.
        """
        try:
            result = await self.db.execute(
                select(Tag, TagType.name, Permission, PermissionType)
                .join(GroupTagPermission, GroupTagPermission.tag_id == Tag.id)
                .join(TagType, TagType.id == Tag.tag_type_id)
                .join(Permission, Permission.id == GroupTagPermission.permission_id)
                .join(PermissionType, PermissionType.id == Permission.permission_type_id)
                .where(GroupTagPermission.group_id == group_id)
                .order_by(Tag.id, PermissionType.code, Permission.id)
            )
            return [(row[0], row[1], row[2], row[3]) for row in result.all()]
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def add_system_permission(self, group_id: str, permission_type_id: str, value: bool) -> str:
        """Permission 행과 그룹 시스템 권한 연결 행 생성. 생성된 Permission ID 반환"""
        try:
            permission_id = gen()
            self.db.add(Permission(id=permission_id, permission_type_id=permission_type_id, value=bool(value)))
            await self.db.flush()
            self.db.add(GroupSystemPermission(group_id=group_id, permission_id=permission_id))
            await self.db.flush()
            return permission_id
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def add_tag_permission(self, group_id: str, tag_id: str, permission_type_id: str, value: bool) -> str:
        """Permission 행과 그룹 태그 권한 연결 행 생성. 생성된 Permission ID 반환"""
        try:
            permission_id = gen()
            self.db.add(Permission(id=permission_id, permission_type_id=permission_type_id, value=bool(value)))
            await self.db.flush()
            self.db.add(GroupTagPermission(group_id=group_id, tag_id=tag_id, permission_id=permission_id))
            await self.db.flush()
            return permission_id
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)
