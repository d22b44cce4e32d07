# _*_ coding: utf-8 _*_
"""Service log writer (persistent, best-effort)."""
import logging
from datetime import datetime
from typing import Optional

from galaxy_api.config import settings
from galaxy_api.database.base import Database
from galaxy_api.database.crud.service_log_crud import ServiceLogCRUD
from galaxy_api.types.request.log_request import ServiceLogRequest
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ServiceLogService:
    """
    ServiceLog 테이블에 서비스 로그를 남기는 서비스

    로그마다 별도 세션을 사용한다. `write`는 저장에 실패해도 예외를 올리지 않고
    경고 로그만 남긴다.
    """

    def __init__(self, database: Database):
        self.database = database

    async def _persist(
        self,
        system_name: str,
        system_token: str,
        user_name: str,
        log_type: str,
        is_fair_warning: bool,
        message: str,
        message_date: Optional[datetime],
    ) -> None:
        async with self.database.session() as db:
            await ServiceLogCRUD(db).create_log(
                system_name=system_name,
                system_token=system_token,
                user_name=user_name,
                log_type=log_type,
                is_fair_warning=is_fair_warning,
                message=message,
                message_date=message_date or datetime.now(),
            )

    async def write(
        self,
        message: str,
        log_type: str = "ERROR",
        user_name: Optional[str] = None,
        is_fair_warning: bool = False,
    ) -> bool:
        """GalaxyAPI 자체 서비스 로그 저장. 실패는 무시하고 성공 여부만 반환"""
        try:
            await self._persist(
                system_name=settings.service_log_system_name,
                system_token=settings.service_log_system_token,
                user_name=user_name or "",
                log_type=log_type,
                is_fair_warning=is_fair_warning,
                message=message,
                message_date=None,
            )
            return True
        except Exception as e:
            logger.warning(f"서비스 로그 저장 실패: {e.__class__.__name__}: {e}")
            return False

    async def create_entry(self, request: ServiceLogRequest) -> None:
        """클라이언트 시스템이 보낸 로그 저장"""
        try:
            await self._persist(
                system_name=request.system_name,
                system_token=request.system_token,
                user_name=request.user_name,
                log_type=request.log_type,
                is_fair_warning=request.is_fair_warning,
                message=request.message,
                message_date=request.message_date,
            )
        except SQLAlchemyError as e:
            raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)
