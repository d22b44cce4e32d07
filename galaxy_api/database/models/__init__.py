# _*_ coding: utf-8 _*_
"""ORM models. Importing this package registers every table on `Base.metadata`."""
from galaxy_api.database.models.security_models import (
    Group,
    GroupSystemPermission,
    GroupTagPermission,
    Permission,
    PermissionType,
)
from galaxy_api.database.models.tag_models import Tag, TagComponent, TagType
from galaxy_api.database.models.component_models import (
    Alert,
    Category,
    Component,
    ComponentHelp,
    ComponentType,
)
from galaxy_api.database.models.message_query_models import MessageQuery
from galaxy_api.database.models.service_log_models import ServiceLog

__all__ = [
    "Group",
    "GroupSystemPermission",
    "GroupTagPermission",
    "Permission",
    "PermissionType",
    "Tag",
    "TagComponent",
    "TagType",
    "Alert",
    "Category",
    "Component",
    "ComponentHelp",
    "ComponentType",
    "MessageQuery",
    "ServiceLog",
]
