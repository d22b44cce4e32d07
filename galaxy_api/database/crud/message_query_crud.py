# _*_ coding: utf-8 _*_
"""Saved message query CRUD operations with database."""
import logging
from typing import Any, List, Optional

from galaxy_api.database.models.message_query_models import MessageQuery
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class MessageQueryCRUD:
    """저장된 메시지 쿼리 CRUD (커밋 포함)"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_user(self, user_id: str) -> List[MessageQuery]:
        try:
            result = await self.db.execute(
                select(MessageQuery).where(MessageQuery.user_id == user_id).order_by(MessageQuery.name, MessageQuery.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def get(self, query_id: str) -> Optional[MessageQuery]:
        try:
            return await self.db.get(MessageQuery, query_id)
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def create(self, query_id: str, name: str, user_id: str, query_data: Any) -> MessageQuery:
        try:
            message_query = MessageQuery(id=query_id, name=name, user_id=user_id, query_data=query_data)
            self.db.add(message_query)
            await self.db.commit()
            return message_query
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def update(self, query_id: str, name: str, query_data: Any) -> Optional[MessageQuery]:
        try:
            message_query = await self.db.get(MessageQuery, query_id)
            if message_query:
                message_query.name = name
                message_query.query_data = query_data
                await self.db.commit()
            return message_query
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def delete(self, query_id: str) -> bool:
        try:
            message_query = await self.db.get(MessageQuery, query_id)
            if message_query:
                await self.db.delete(message_query)
                await self.db.commit()
                return True
            return False
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)
