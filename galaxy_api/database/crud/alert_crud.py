# _*_ coding: utf-8 _*_
"""Alert CRUD operations with database."""
import logging
from typing import Any, List

from galaxy_api.database.models.component_models import Alert
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class AlertCRUD:
    """컴포넌트 알림 CRUD"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_component(self, component_id: str) -> List[Alert]:
        try:
            result = await self.db.execute(
                select(Alert).where(Alert.component_id == component_id).order_by(Alert.type, Alert.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def delete_by_component(self, component_id: str) -> None:
        try:
            await self.db.execute(delete(Alert).where(Alert.component_id == component_id))
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    async def insert_alert(
        self,
        alert_id: str,
        component_id: str,
        alert_type: str,
        severity: str,
        message_threshold: int,
        retry_wait_time: int,
        alert_schedule: Any,
        notify: bool,
    ) -> Alert:
        try:
            alert = Alert(
                id=alert_id,
                component_id=component_id,
                type=alert_type,
                severity=severity,
                message_threshold=message_threshold,
                retry_wait_time=retry_wait_time,
                alert_schedule=alert_schedule,
                notify=notify,
            )
            self.db.add(alert)
            await self.db.flush()
            return alert
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)
