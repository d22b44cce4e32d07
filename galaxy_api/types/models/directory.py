# _*_ coding: utf-8 _*_
from typing import Optional

from .base import CamelModel


class DirectoryUser(CamelModel):
    id: str
    display_name: Optional[str] = None
    user_principal_name: Optional[str] = None


class DirectoryGroup(CamelModel):
    id: str
    display_name: Optional[str] = None
