# _*_ coding: utf-8 _*_
"""Permission Service for group permissions and authorization profiles."""
import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from galaxy_api.api.services.component_tag_service import ComponentTagService
from galaxy_api.config import settings
from galaxy_api.database.base import Database
from galaxy_api.database.crud.group_crud import GroupCRUD
from galaxy_api.database.crud.permission_crud import PermissionCRUD
from galaxy_api.database.transaction import transaction
from galaxy_api.types.models.security import (
    AuthorizationProfile,
    ComponentTagPermission,
    Group,
    Permission,
    PermissionType,
)
from galaxy_api.types.models.tag import Tag
from galaxy_api.types.request.security_request import GroupPermissionsUpdateRequest
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from galaxy_api.utils.uuid_gen import gen, is_uuid

logger = logging.getLogger(__name__)


def _permission_sort_key(permission: Permission) -> Tuple[str, str]:
    return permission.type.code, permission.type.id


class _GroupGrants:
    """그룹 하나에서 읽어 온 권한 (관리자 여부 포함)"""

    def __init__(self, group_id: str, is_admin: bool = False,
                 system_permissions: List[Permission] = None,
                 component_tag_permissions: List[ComponentTagPermission] = None):
        self.group_id = group_id
        self.is_admin = is_admin
        self.system_permissions = system_permissions or []
        self.component_tag_permissions = component_tag_permissions or []


class PermissionService:
    """그룹 권한 조회/저장과 사용자 권한 프로필 병합을 담당하는 서비스"""

    def __init__(self, database: Database, system_name: str = None):
        if database is None:
            raise ValueError("Database is required")

        self.database = database
        self.system_name = system_name or settings.permission_system_name

    # ------------------------------------------------------------------
    # 권한 프로필 병합
    # ------------------------------------------------------------------
    async def _load_group_grants(self, group_id: str) -> Optional[_GroupGrants]:
        """
        그룹 하나의 권한 조회 (그룹마다 별도 세션)

        저장소에 없는 그룹은 None. 관리자 그룹은 권한 조회 없이 관리자 표시만 반환한다.
        """
        async with self.database.session() as db:
            group = await GroupCRUD(db).get_group(group_id)
            if group is None:
                logger.debug(f"등록되지 않은 그룹: {group_id}")
                return None
            if group.is_system_admin:
                return _GroupGrants(group_id, is_admin=True)

            permission_crud = PermissionCRUD(db)
            system_rows = await permission_crud.get_system_permissions(group_id)
            tag_rows = await permission_crud.get_tag_permissions(group_id)

        system_permissions = [
            Permission(id=permission.id, type=PermissionType.model_validate(permission_type), has_permission=permission.value)
            for permission, permission_type in system_rows
        ]

        tag_permissions: Dict[str, ComponentTagPermission] = {}
        for tag, type_name, permission, permission_type in tag_rows:
            entry = tag_permissions.get(tag.id)
            if entry is None:
                entry = ComponentTagPermission(
                    tag=Tag(id=tag.id, name=tag.name, description=tag.description, type=type_name)
                )
                tag_permissions[tag.id] = entry
            entry.permissions.append(
                Permission(id=permission.id, type=PermissionType.model_validate(permission_type), has_permission=permission.value)
            )

        return _GroupGrants(group_id, False, system_permissions, list(tag_permissions.values()))

    @staticmethod
    def _merge_permissions(permissions: Iterable[Permission], merged: Dict[str, Permission]) -> None:
        """권한 유형별 OR 병합. 병합된 권한은 특정 그룹의 행이 아니므로 id가 없다."""
        for permission in permissions:
            current = merged.get(permission.type.id)
            if current is None:
                merged[permission.type.id] = Permission(type=permission.type, has_permission=permission.has_permission)
            elif permission.has_permission:
                current.has_permission = True

    async def _admin_profile(self, user_id: Optional[str], group_ids: List[str]) -> AuthorizationProfile:
        async with self.database.session() as db:
            permission_types = await PermissionCRUD(db).get_permission_types(self.system_name)

        system_permissions = [
            Permission(type=PermissionType.model_validate(permission_type), has_permission=True)
            for permission_type in permission_types
            if permission_type.is_system_permission
        ]
        return AuthorizationProfile(
            user_id=user_id,
            is_admin=True,
            groups=group_ids,
            system_permissions=sorted(system_permissions, key=_permission_sort_key),
        )

    async def _load_all_grants(self, group_ids: List[str]) -> List[Optional[_GroupGrants]]:
        """그룹별 권한 동시 조회. 하나가 실패하면 나머지 조회는 취소하고 세션을 반납한 뒤 예외를 전파한다."""
        tasks = [asyncio.ensure_future(self._load_group_grants(group_id)) for group_id in group_ids]
        try:
            return await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def aggregate_permissions(self, group_ids: Iterable[str], user_id: str = None) -> AuthorizationProfile:
        """
        그룹 집합의 권한을 하나의 권한 프로필로 병합

        - 시스템 권한: 권한 유형별 OR
        - 태그 권한: 태그별, 태그 안에서는 권한 유형별 OR
        - 관리자 그룹이 하나라도 있으면 모든 권한을 가진 관리자 프로필
        - 그룹이 없으면 권한 없는 빈 프로필

        그룹별 조회는 서로 독립이므로 동시에 실행하고, 모두 끝난 뒤 병합한다.
        하나라도 실패하면 전체가 실패한다.
        """
        group_ids = sorted(set(group_ids))
        if not group_ids:
            return AuthorizationProfile(user_id=user_id)

        try:
            results = await self._load_all_grants(group_ids)

            grants = [result for result in results if result is not None]
            if any(grant.is_admin for grant in grants):
                return await self._admin_profile(user_id, group_ids)

            system: Dict[str, Permission] = {}
            tags: Dict[str, Tuple[Tag, Dict[str, Permission]]] = {}
            for grant in grants:
                self._merge_permissions(grant.system_permissions, system)
                for tag_permission in grant.component_tag_permissions:
                    tag, tag_merged = tags.setdefault(tag_permission.tag.id, (tag_permission.tag, {}))
                    self._merge_permissions(tag_permission.permissions, tag_merged)

            return AuthorizationProfile(
                user_id=user_id,
                groups=group_ids,
                system_permissions=sorted(system.values(), key=_permission_sort_key),
                component_tag_permissions=[
                    ComponentTagPermission(tag=tags[tag_id][0], permissions=sorted(tags[tag_id][1].values(), key=_permission_sort_key))
                    for tag_id in sorted(tags)
                ],
            )
        except HandledException:
            raise
        except Exception as e:
            raise HandledException(ResponseCode.UNDEFINED_ERROR, e=e)

    # ------------------------------------------------------------------
    # 그룹 권한 관리
    # ------------------------------------------------------------------
    async def get_permission_types(self, system_name: str = None) -> List[PermissionType]:
        """시스템의 권한 유형 목록"""
        system_name = system_name or self.system_name
        async with self.database.session() as db:
            rows = await PermissionCRUD(db).get_permission_types(system_name)
        return [PermissionType.model_validate(row) for row in rows]

    @staticmethod
    def _expand(permissions: List[Permission], permission_types: List[PermissionType]) -> List[Permission]:
        """모든 권한 유형에 대해 권한을 채운다. 저장된 행이 없는 유형은 hasPermission=false"""
        by_type = {permission.type.id: permission for permission in permissions}
        return [
            by_type.get(permission_type.id) or Permission(type=permission_type, has_permission=False)
            for permission_type in permission_types
        ]

    async def get_group_permissions(self, group_id: str) -> Group:
        """
        그룹의 저장된 권한을 시스템의 모든 권한 유형에 맞춰 펼친 결과

        관리자 그룹이나 저장되지 않은 그룹(isNew)은 권한 목록 없이 반환한다.
        """
        if not is_uuid(group_id):
            raise HandledException(ResponseCode.VALIDATION_ERROR, msg=f'"{group_id}" is an invalid uuid.')

        async with self.database.session() as db:
            group = await GroupCRUD(db).get_group(group_id)

        if group is None:
            return Group(id=group_id, is_new=True)
        if group.is_system_admin:
            return Group(id=group_id, name=group.name, is_admin=True)

        grants = await self._load_group_grants(group_id)
        result = Group(id=group_id, name=group.name)
        if grants is None or (not grants.system_permissions and not grants.component_tag_permissions):
            return result

        permission_types = await self.get_permission_types()
        system_types = [t for t in permission_types if t.is_system_permission]
        tag_types = [t for t in permission_types if not t.is_system_permission]

        if grants.system_permissions:
            result.system_permissions = self._expand(grants.system_permissions, system_types)
        result.component_tag_permissions = [
            ComponentTagPermission(tag=entry.tag, permissions=self._expand(entry.permissions, tag_types))
            for entry in grants.component_tag_permissions
        ]
        return result

    async def update_group_permissions(self, request: GroupPermissionsUpdateRequest) -> Group:
        """
        그룹 권한 일괄 교체 (단일 트랜잭션)

        1. 유효한 id가 있으면 그룹과 권한 연결을 삭제, 없으면 새 id 발급
        2. 그룹 저장
        3. 관리자가 아니면 시스템 권한, 태그별 (태그 저장 후) 태그 권한을 순서대로 저장
        """
        group = Group(
            id=request.id if is_uuid(request.id) else None,
            name=request.name,
            is_admin=request.is_admin,
        )

        async with self.database.session() as db:
            group_crud = GroupCRUD(db)
            permission_crud = PermissionCRUD(db)
            tag_service = ComponentTagService(db)

            async with transaction(db, f"update_group_permissions group_id={group.id}"):
                if group.id is not None:
                    await group_crud.delete_group(group.id)
                else:
                    group.id = gen()

                await group_crud.create_group(group.id, group.name, group.is_admin)

                if not group.is_admin:
                    for permission in request.system_permissions or []:
                        permission_id = await permission_crud.add_system_permission(
                            group.id, permission.type.id, permission.has_permission
                        )
                        group.system_permissions.append(permission.model_copy(update={"id": permission_id}))

                    for tag_permission in request.component_tag_permissions or []:
                        tag = await tag_service.update_component_tag(tag_permission.tag)
                        saved = ComponentTagPermission(tag=tag)
                        for permission in tag_permission.permissions:
                            permission_id = await permission_crud.add_tag_permission(
                                group.id, tag.id, permission.type.id, permission.has_permission
                            )
                            saved.permissions.append(permission.model_copy(update={"id": permission_id}))
                        group.component_tag_permissions.append(saved)

        logger.info(f"그룹 권한 저장 완료: group_id={group.id}, is_admin={group.is_admin}")
        return group
