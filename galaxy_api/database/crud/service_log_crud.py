# _*_ coding: utf-8 _*_
"""Service log CRUD operations with database."""
import logging
from datetime import datetime

from galaxy_api.database.models.service_log_models import ServiceLog
from galaxy_api.utils.uuid_gen import gen
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class ServiceLogCRUD:
    """서비스 로그 저장. 호출한 쪽에서 실패를 처리한다."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_log(
        self,
        system_name: str,
        system_token: str,
        user_name: str,
        log_type: str,
        is_fair_warning: bool,
        message: str,
        message_date: datetime,
    ) -> ServiceLog:
        log = ServiceLog(
            id=gen(),
            system_name=system_name,
            system_token=system_token,
            user_name=user_name,
            log_type=log_type,
            is_fair_warning=is_fair_warning,
            message=message,
            message_date=message_date,
        )
        self.db.add(log)
        await self.db.commit()
        return log
