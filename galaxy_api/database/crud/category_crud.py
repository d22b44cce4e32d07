# _*_ coding: utf-8 _*_
"""Category CRUD operations with database."""
import logging
from typing import List

from galaxy_api.database.models.component_models import Category
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from galaxy_api.utils.sql_utils import ESCAPE_CHARACTER, contains_pattern
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class CategoryCRUD:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def search_categories(self, contains: str) -> List[Category]:
        """이름에 문자열을 포함하는 카테고리 검색 (대소문자 무시, 와일드카드 이스케이프)"""
        try:
            result = await self.db.execute(
                select(Category)
                .where(Category.name.ilike(contains_pattern(contains), escape=ESCAPE_CHARACTER))
                .order_by(Category.name, Category.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)
