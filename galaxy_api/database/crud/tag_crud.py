# _*_ coding: utf-8 _*_
"""Tag CRUD operations with database."""
import logging
from typing import List, Optional, Tuple

from galaxy_api.database.models.component_models import Component, ComponentType
from galaxy_api.database.models.tag_models import Tag, TagComponent, TagType
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from galaxy_api.utils.sql_utils import ESCAPE_CHARACTER, contains_pattern
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class TagCRUD:
    """Tag / TagType / TagComponent 관련 CRUD 작업을 처리하는 클래스"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_tag_type_by_name(self, name: str) -> Optional[TagType]:
        """태그 유형 조회 (이름으로)"""
        try:
            result = await self.db.execute(select(TagType).where(TagType.name == name))
            return result.scalars().first()
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def upsert_tag(self, tag_id: str, name: str, tag_type_id: str, description: str = None) -> Tag:
        """태그 저장 (ID 기준 insert 또는 update)"""
        try:
            tag = await self.db.get(Tag, tag_id)
            if tag is None:
                tag = Tag(id=tag_id, name=name, description=description, tag_type_id=tag_type_id)
                self.db.add(tag)
            else:
                tag.name = name
                tag.tag_type_id = tag_type_id
                if description is not None:
                    tag.description = description
            await self.db.flush()
            return tag
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def search_tags(self, contains: str, tag_type_name: str = None) -> List[Tuple[Tag, str]]:
        """이름에 문자열을 포함하는 태그 검색. (Tag, 태그 유형명) 목록 반환"""
        try:
            query = (
                select(Tag, TagType.name)
                .join(TagType, TagType.id == Tag.tag_type_id)
                .where(Tag.name.ilike(contains_pattern(contains), escape=ESCAPE_CHARACTER))
            )
            if tag_type_name is not None:
                query = query.where(TagType.name == tag_type_name)
            result = await self.db.execute(query.order_by(Tag.name, Tag.id))
            return [(row[0], row[1]) for row in result.all()]
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def get_tags_by_component(self, component_id: str) -> List[Tuple[Tag, str]]:
        """컴포넌트에 연결된 태그 조회"""
        try:
            result = await self.db.execute(
                select(Tag, TagType.name)
                .join(TagComponent, TagComponent.tag_id == Tag.id)
                .join(TagType, TagType.id == Tag.tag_type_id)
                .where(TagComponent.component_id == component_id)
                .order_by(Tag.name, Tag.id)
            )
            return [(row[0], row[1]) for row in result.all()]
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def get_components_by_tag(self, tag_id: str) -> List[Tuple[Component, Optional[str]]]:
        """태그에 연결된 컴포넌트 조회. (Component, 컴포넌트 유형명) 목록 반환"""
        try:
            result = await self.db.execute(
                select(Component, ComponentType.name)
                .join(TagComponent, TagComponent.component_id == Component.id)
                .outerjoin(ComponentType, ComponentType.id == Component.component_type_id)
                .where(TagComponent.tag_id == tag_id)
                .order_by(Component.name, Component.id)
            )
            return [(row[0], row[1]) for row in result.all()]
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def link_component(self, tag_id: str, component_id: str) -> None:
        """TagComponent 연결 행 추가"""
        try:
            self.db.add(TagComponent(tag_id=tag_id, component_id=component_id))
            await self.db.flush()
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def unlink_by_tag(self, tag_id: str) -> None:
        """태그의 모든 컴포넌트 연결 삭제"""
        try:
            await self.db.execute(delete(TagComponent).where(TagComponent.tag_id == tag_id))
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def unlink_by_component(self, component_id: str) -> None:
        """컴포넌트의 모든 태그 연결 삭제"""
        try:
            await self.db.execute(delete(TagComponent).where(TagComponent.component_id == component_id))
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)
