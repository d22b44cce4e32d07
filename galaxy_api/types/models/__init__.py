# _*_ coding: utf-8 _*_
"""Domain value types shared by services and routers."""
from .base import CamelModel
from .component import (
    AlertSetting,
    AlertType,
    Category,
    Component,
    ComponentAlerts,
    ComponentHelp,
    ComponentMain,
    ComponentSettings,
    default_help,
)
from .directory import DirectoryGroup, DirectoryUser
from .message_query import MessageQuery
from .security import (
    AuthorizationProfile,
    ComponentTagPermission,
    Group,
    Permission,
    PermissionType,
)
from .tag import ComponentRef, Tag

__all__ = [
    "CamelModel",
    "AlertSetting",
    "AlertType",
    "Category",
    "Component",
    "ComponentAlerts",
    "ComponentHelp",
    "ComponentMain",
    "ComponentSettings",
    "default_help",
    "DirectoryGroup",
    "DirectoryUser",
    "MessageQuery",
    "AuthorizationProfile",
    "ComponentTagPermission",
    "Group",
    "Permission",
    "PermissionType",
    "ComponentRef",
    "Tag",
]
