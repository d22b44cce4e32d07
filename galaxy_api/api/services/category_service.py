# _*_ coding: utf-8 _*_
"""Category Service for category lookups."""
import logging
from typing import List

from galaxy_api.database.crud.category_crud import CategoryCRUD
from galaxy_api.types.models.component import Category
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class CategoryService:
    """카테고리 조회 서비스"""

    def __init__(self, db: AsyncSession):
        if db is None:
            raise ValueError("Database session is required")

        self.db = db
        self.category_crud = CategoryCRUD(db)

    async def search_categories(self, contains: str) -> List[Category]:
        """이름에 문자열을 포함하는 카테고리 (`%`, `_`, `[`는 문자 그대로 검색)"""
        try:
            return [Category.model_validate(row) for row in await self.category_crud.search_categories(contains)]
        except HandledException:
            raise
        except Exception as e:
            raise HandledException(ResponseCode.UNDEFINED_ERROR, e=e)
