# _*_ coding: utf-8 _*_
"""Component Service for component search."""
import logging
from typing import List

from galaxy_api.database.crud.component_crud import ComponentCRUD
from galaxy_api.types.models.component import Category, Component
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class ComponentService:
    """컴포넌트 검색 서비스"""

    def __init__(self, db: AsyncSession):
        if db is None:
            raise ValueError("Database session is required")

        self.db = db
        self.component_crud = ComponentCRUD(db)

    async def search_components(self, contains: str, no_category: bool = False, stage_only: bool = False) -> List[Component]:
        """
        이름에 문자열을 포함하는 컴포넌트 검색

        Args:
            contains: 검색 문자열 (와일드카드 문자는 이스케이프됨)
            no_category: True면 카테고리가 없는 컴포넌트만
            stage_only: True면 스테이지 상태인 컴포넌트만
        """
        try:
            rows = await self.component_crud.search_components(contains, no_category, stage_only)
            return [
                Component(
                    id=component.id,
                    name=component.name,
                    type=component_type,
                    category=Category.model_validate(category) if category is not None else None,
                    stage_status=component.stage_status,
                )
                for component, component_type, category in rows
            ]
        except HandledException:
            raise
        except Exception as e:
            raise HandledException(ResponseCode.UNDEFINED_ERROR, e=e)
