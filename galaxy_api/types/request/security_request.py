# _*_ coding: utf-8 _*_
"""Group permission request models."""
from typing import List, Optional

from pydantic import Field, StrictBool, model_validator

from galaxy_api.types.models.base import CamelModel
from galaxy_api.types.models.security import ComponentTagPermission, Permission


class GroupPermissionsUpdateRequest(CamelModel):
    """
    그룹 권한 일괄 교체 요청

    관리자 그룹이 아니면 시스템 권한과 컴포넌트 태그 권한 목록이 모두 필요하다.
    """

    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=200)
    is_admin: StrictBool
    system_permissions: Optional[List[Permission]] = None
    component_tag_permissions: Optional[List[ComponentTagPermission]] = None

    @model_validator(mode="after")
    def _require_permission_lists(self):
        if not self.is_admin:
            if self.system_permissions is None:
                raise ValueError("A valid list of System Permissions are required for the update")
            if self.component_tag_permissions is None:
                raise ValueError("A valid list of Component Tag Permissions are required for the update")
        return self
