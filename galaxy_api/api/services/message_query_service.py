# _*_ coding: utf-8 _*_
"""Message Query Service for saved message search queries."""
import logging
from typing import List

from galaxy_api.database.crud.message_query_crud import MessageQueryCRUD
from galaxy_api.types.models.message_query import MessageQuery
from galaxy_api.types.request.message_query_request import (
    SaveMessageQueryRequest,
    UpdateMessageQueryRequest,
)
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from galaxy_api.utils.uuid_gen import gen
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class MessageQueryService:
    """사용자별 저장된 메시지 검색 조건을 관리하는 서비스"""

    def __init__(self, db: AsyncSession):
        if db is None:
            raise ValueError("Database session is required")

        self.db = db
        self.message_query_crud = MessageQueryCRUD(db)

    async def get_message_queries(self, user_id: str) -> List[MessageQuery]:
        """사용자의 저장된 검색 조건 목록"""
        if not user_id or not user_id.strip():
            raise HandledException(ResponseCode.REQUIRED_FIELD_MISSING, msg="userId")

        try:
            rows = await self.message_query_crud.get_by_user(user_id.strip())
            return [MessageQuery.model_validate(row) for row in rows]
        except HandledException:
            raise
        except Exception as e:
            raise HandledException(ResponseCode.UNDEFINED_ERROR, e=e)

    async def save_message_query(self, request: SaveMessageQueryRequest) -> MessageQuery:
        """검색 조건 저장"""
        try:
            row = await self.message_query_crud.create(
                query_id=gen(),
                name=request.name,
                user_id=request.user_id,
                query_data=request.query_data,
            )
            logger.info(f"검색 조건 저장: id={row.id}, user_id={row.user_id}")
            return MessageQuery.model_validate(row)
        except HandledException:
            raise
        except Exception as e:
            raise HandledException(ResponseCode.UNDEFINED_ERROR, e=e)

    async def update_message_query(self, query_id: str, request: UpdateMessageQueryRequest) -> MessageQuery:
        """검색 조건 수정"""
        try:
            row = await self.message_query_crud.update(query_id, request.name, request.query_data)
            if row is None:
                raise HandledException(ResponseCode.MESSAGE_QUERY_NOT_FOUND, msg=f"id={query_id}")
            return MessageQuery.model_validate(row)
        except HandledException:
            raise
        except Exception as e:
            raise HandledException(ResponseCode.UNDEFINED_ERROR, e=e)

    async def delete_message_query(self, query_id: str) -> bool:
        """검색 조건 삭제"""
        try:
            if not await self.message_query_crud.delete(query_id):
                raise HandledException(ResponseCode.MESSAGE_QUERY_NOT_FOUND, msg=f"id={query_id}")
            return True
        except HandledException:
            raise
        except Exception as e:
            raise HandledException(ResponseCode.UNDEFINED_ERROR, e=e)
