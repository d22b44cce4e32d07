# _*_ coding: utf-8 _*_
"""Group / permission REST API endpoints."""
import logging

from fastapi import APIRouter, Depends
from galaxy_api.api.services.directory_service import DirectoryService
from galaxy_api.api.services.permission_service import PermissionService
from galaxy_api.core.dependencies import get_directory_service, get_permission_service
from galaxy_api.types.request.security_request import GroupPermissionsUpdateRequest
from galaxy_api.types.response.base import CommonResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["security"])


@router.get("/security/group/get/{startsWith}", response_model=CommonResponse)
async def get_directory_groups(
    startsWith: str,
    directory_service: DirectoryService = Depends(get_directory_service),
):
    """표시 이름이 주어진 문자열로 시작하는 디렉토리 그룹을 검색합니다."""
    groups = await directory_service.search_groups(startsWith)
    return CommonResponse(data=[group.to_json_dict() for group in groups])


@router.get("/security/group/perms/get/{groupId}", response_model=CommonResponse)
async def get_group_permissions(
    groupId: str,
    permission_service: PermissionService = Depends(get_permission_service),
):
    """그룹의 시스템 권한과 컴포넌트 태그 권한을 조회합니다."""
    group = await permission_service.get_group_permissions(groupId)
    return CommonResponse(data=group.to_json_dict())


@router.post("/security/group/perms/update", response_model=CommonResponse)
async def update_group_permissions(
    request: GroupPermissionsUpdateRequest,
    permission_service: PermissionService = Depends(get_permission_service),
):
    """그룹과 그룹의 권한을 요청 내용으로 교체합니다."""
    group = await permission_service.update_group_permissions(request)
    return CommonResponse(data=group.to_json_dict())


@router.get("/permissiontypes/get/{systemName}", response_model=CommonResponse)
async def get_permission_types(
    systemName: str,
    permission_service: PermissionService = Depends(get_permission_service),
):
    """시스템의 권한 유형 목록을 조회합니다."""
    permission_types = await permission_service.get_permission_types(systemName)
    return CommonResponse(data=[permission_type.to_json_dict() for permission_type in permission_types])
