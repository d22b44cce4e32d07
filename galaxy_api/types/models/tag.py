# _*_ coding: utf-8 _*_
"""Tag value types."""
from typing import List, Optional

from pydantic import Field

from .base import CamelModel


class ComponentRef(CamelModel):
    """태그에 연결된 컴포넌트 참조"""

    id: str
    name: Optional[str] = None
    type: Optional[str] = None


class Tag(CamelModel):
    """
    태그. `id`가 유효한 UUID가 아니면 저장 시 새 식별자가 발급된다.

    `components`는 조회 시점의 TagComponent 연결을 그대로 반영한다.
    """

    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    type: Optional[str] = None
    components: List[ComponentRef] = Field(default_factory=list)
