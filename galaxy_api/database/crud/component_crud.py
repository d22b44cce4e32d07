# _*_ coding: utf-8 _*_
"""Component / ComponentHelp CRUD operations with database."""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from galaxy_api.database.models.component_models import (
    Category,
    Component,
    ComponentHelp,
    ComponentType,
)
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from galaxy_api.utils.sql_utils import ESCAPE_CHARACTER, contains_pattern
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

_HELP_FIELDS = (
    "support_group",
    "contact_name",
    "contact_phone",
    "contact_email",
    "description",
    "probable_inactivity",
    "resolution_notes",
    "additional_info",
    "help_schedule",
)


class ComponentCRUD:
    """Component 관련 CRUD 작업을 처리하는 클래스"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_component(self, component_id: str) -> Optional[Tuple[Component, Optional[str], Optional[Category]]]:
        """컴포넌트 조회. (Component, 컴포넌트 유형명, Category) 반환"""
        try:
            result = await self.db.execute(
                select(Component, ComponentType.name, Category)
                .outerjoin(ComponentType, ComponentType.id == Component.component_type_id)
                .outerjoin(Category, Category.id == Component.category_id)
                .where(Component.id == component_id)
            )
            row = result.first()
            return (row[0], row[1], row[2]) if row else None
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def search_components(
        self,
        contains: str,
        no_category: bool = False,
        stage_only: bool = False,
    ) -> List[Tuple[Component, Optional[str], Optional[Category]]]:
        """이름에 문자열을 포함하는 컴포넌트 검색"""
        try:
            query = (
                select(Component, ComponentType.name, Category)
                .outerjoin(ComponentType, ComponentType.id == Component.component_type_id)
                .outerjoin(Category, Category.id == Component.category_id)
                .where(Component.name.ilike(contains_pattern(contains), escape=ESCAPE_CHARACTER))
            )
            if no_category:
                query = query.where(Component.category_id.is_(None))
            if stage_only:
                query = query.where(Component.stage_status.is_(True))

            result = await self.db.execute(query.order_by(Component.name, Component.id))
            return [(row[0], row[1], row[2]) for row in result.all()]
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def update_settings(
        self,
        component_id: str,
        category_id: Optional[str],
        mod_date: datetime,
        alert_email: str,
        alert_phone: str,
        disable_notify: bool,
        stage_status: bool,
        auto_start: bool,
    ) -> int:
        """컴포넌트 주요 속성 수정. 수정된 행 수 반환"""
        try:
            result = await self.db.execute(
                update(Component)
                .where(Component.id == component_id)
                .values(
                    category_id=category_id,
                    mod_date=mod_date,
                    alert_email=alert_email,
                    alert_phone=alert_phone,
                    disable_notify=disable_notify,
                    stage_status=stage_status,
                    auto_start=auto_start,
                )
                .execution_options(synchronize_session=False)
            )
            return result.rowcount
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def get_help(self, component_id: str) -> Optional[ComponentHelp]:
        """컴포넌트 도움말 조회 (없으면 None)"""
        try:
            result = await self.db.execute(
                select(ComponentHelp).where(ComponentHelp.component_id == component_id).order_by(ComponentHelp.id)
            )
            return result.scalars().first()
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def insert_help(self, help_id: str, component_id: str, **fields) -> ComponentHelp:
        """컴포넌트 도움말 생성"""
        try:
            help_record = ComponentHelp(
                id=help_id,
                component_id=component_id,
                **{name: fields.get(name) for name in _HELP_FIELDS},
            )
            self.db.add(help_record)
            await self.db.flush()
            return help_record
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def update_help(self, help_id: str, component_id: str, **fields) -> int:
        """해당 컴포넌트의 도움말 수정. 수정된 행 수 반환"""
        try:
            result = await self.db.execute(
                update(ComponentHelp)
                .where(ComponentHelp.id == help_id, ComponentHelp.component_id == component_id)
                .values(**{name: fields.get(name) for name in _HELP_FIELDS})
                .execution_options(synchronize_session=False)
            )
            return result.rowcount
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)
