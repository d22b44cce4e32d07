# _*_ coding: utf-8 _*_
"""Component Tag Service for tag upsert and component linking."""
import logging
from typing import List

from galaxy_api.config import settings
from galaxy_api.database.crud.tag_crud import TagCRUD
from galaxy_api.database.models.tag_models import TagType
from galaxy_api.database.transaction import transaction
from galaxy_api.types.models.tag import ComponentRef, Tag
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from galaxy_api.utils.uuid_gen import gen, is_uuid
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class ComponentTagService:
    """컴포넌트 태그(태그 유형이 Component로 고정된 태그)를 관리하는 서비스"""

    def __init__(self, db: AsyncSession, tag_type_name: str = None):
        if db is None:
            raise ValueError("Database session is required")

        self.db = db
        self.tag_type_name = tag_type_name or settings.component_tag_type_name
        self.tag_crud = TagCRUD(db)

    async def _get_tag_type(self) -> TagType:
        """Component 태그 유형 조회. 저장소는 유형을 이름이 아닌 ID로 연결한다."""
        tag_type = await self.tag_crud.get_tag_type_by_name(self.tag_type_name)
        if tag_type is None:
            raise HandledException(ResponseCode.TAG_TYPE_NOT_FOUND, msg=f"tag_type={self.tag_type_name}")
        return tag_type

    async def _save_tag(self, tag: Tag) -> Tag:
        tag = tag.model_copy(update={"type": self.tag_type_name})
        if not is_uuid(tag.id):
            tag.id = gen()

        tag_type = await self._get_tag_type()
        await self.tag_crud.upsert_tag(tag.id, tag.name, tag_type.id, tag.description)
        return tag

    async def upsert_tag_for_component(self, tag: Tag, component_id: str) -> Tag:
        """
        태그를 저장하고 컴포넌트와 연결 행 하나를 추가한다.

        기존 연결은 삭제하지 않으므로 호출하는 쪽이 먼저 정리해야 한다.
        호출하는 쪽의 트랜잭션 안에서 실행된다.
        """
        saved = await self._save_tag(tag)
        await self.tag_crud.link_component(saved.id, component_id)
        return saved

    async def update_component_tag(self, tag: Tag) -> Tag:
        """태그를 저장하고 연결된 컴포넌트 목록을 태그의 `components`로 교체 (트랜잭션 내부용)"""
        saved = await self._save_tag(tag)
        await self.tag_crud.unlink_by_tag(saved.id)
        for component in saved.components:
            await self.tag_crud.link_component(saved.id, component.id)
        return saved

    async def update_tag(self, tag: Tag) -> Tag:
        """태그 한 개 저장 (단일 트랜잭션)"""
        async with transaction(self.db, f"update_tag tag_id={tag.id}"):
            return await self.update_component_tag(tag)

    async def update_tags(self, tags: List[Tag]) -> List[Tag]:
        """태그 목록을 순서대로 저장 (단일 트랜잭션, 하나라도 실패하면 전체 롤백)"""
        if not tags:
            raise HandledException(ResponseCode.REQUIRED_FIELD_MISSING, msg="tags")

        updated: List[Tag] = []
        async with transaction(self.db, f"update_tags count={len(tags)}"):
            for tag in tags:
                updated.append(await self.update_component_tag(tag))
        return updated

    async def search_component_tags(self, contains: str) -> List[Tag]:
        """이름에 문자열을 포함하는 Component 태그와 현재 연결된 컴포넌트 목록"""
        try:
            tags: List[Tag] = []
            for tag_row, type_name in await self.tag_crud.search_tags(contains, self.tag_type_name):
                components = [
                    ComponentRef(id=component.id, name=component.name, type=component_type)
                    for component, component_type in await self.tag_crud.get_components_by_tag(tag_row.id)
                ]
                tags.append(
                    Tag(
                        id=tag_row.id,
                        name=tag_row.name,
                        description=tag_row.description,
                        type=type_name,
                        components=components,
                    )
                )
            return tags
        except HandledException:
            raise
        except Exception as e:
            raise HandledException(ResponseCode.UNDEFINED_ERROR, e=e)
