# _*_ coding: utf-8 _*_
"""Group CRUD operations with database."""
import logging
from typing import Optional

from galaxy_api.database.models.security_models import (
    Group,
    GroupSystemPermission,
    GroupTagPermission,
    Permission,
)
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class GroupCRUD:
    """Group 관련 CRUD 작업을 처리하는 클래스 (커밋은 호출한 서비스가 담당)"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_group(self, group_id: str) -> Optional[Group]:
        """그룹 조회 (ID로)"""
        try:
            result = await self.db.execute(select(Group).where(Group.id == group_id))
            return result.scalars().first()
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def create_group(self, group_id: str, name: str, is_admin: bool) -> Group:
        """그룹 생성"""
        try:
            group = Group(id=group_id, name=name, is_system_admin=is_admin)
            self.db.add(group)
            await self.db.flush()
            return group
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def delete_group(self, group_id: str) -> None:
        """그룹과 그룹에 연결된 시스템/태그 권한을 함께 삭제"""
        try:
            system_ids = select(GroupSystemPermission.permission_id).where(GroupSystemPermission.group_id == group_id)
            tag_ids = select(GroupTagPermission.permission_id).where(GroupTagPermission.group_id == group_id)
            permission_ids = list((await self.db.execute(system_ids)).scalars().all())
            permission_ids += list((await self.db.execute(tag_ids)).scalars().all())

            await self.db.execute(delete(GroupSystemPermission).where(GroupSystemPermission.group_id == group_id))
            await self.db.execute(delete(GroupTagPermission).where(GroupTagPermission.group_id == group_id))
            if permission_ids:
                await self.db.execute(delete(Permission).where(Permission.id.in_(permission_ids)))
            await self.db.execute(delete(Group).where(Group.id == group_id))
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)
