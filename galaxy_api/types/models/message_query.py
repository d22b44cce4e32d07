# _*_ coding: utf-8 _*_
from typing import Any, Optional

from pydantic import Field

from .base import CamelModel


class MessageQuery(CamelModel):
    """사용자가 저장한 메시지 검색 조건"""

    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=200)
    user_id: str = Field(..., min_length=1, max_length=200)
    query_data: Any = None
