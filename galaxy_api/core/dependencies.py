# _*_ coding: utf-8 _*_
"""Dependency injection for FastAPI."""
import logging
from typing import AsyncIterator, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from galaxy_api.api.services.auth_service import AuthService
from galaxy_api.api.services.category_service import CategoryService
from galaxy_api.api.services.component_service import ComponentService
from galaxy_api.api.services.component_settings_service import ComponentSettingsService
from galaxy_api.api.services.component_tag_service import ComponentTagService
from galaxy_api.api.services.directory_service import DirectoryService
from galaxy_api.api.services.message_query_service import MessageQueryService
from galaxy_api.api.services.permission_service import PermissionService
from galaxy_api.api.services.service_log_service import ServiceLogService
from galaxy_api.config import settings
from galaxy_api.database.base import Database
from galaxy_api.directory import ActiveDirectoryClient, DirectoryClient
from galaxy_api.utils.jwt_key_manager import JWTKeyManager

logger = logging.getLogger(__name__)

# 전역 인스턴스들 (싱글톤)
_db_instance: Optional[Database] = None
_jwt_key_manager: Optional[JWTKeyManager] = None


def get_database() -> Database:
    """데이터베이스 의존성 주입 (싱글톤 패턴, 엔진과 커넥션 풀만 공유)"""
    global _db_instance

    if _db_instance is not None:
        return _db_instance

    logger.info("Creating new database instance")
    try:
        _db_instance = Database(settings.get_database_url(), echo=settings.database_echo)
        return _db_instance
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        raise ValueError(f"Database connection is required but failed: {e}")


async def close_database() -> None:
    """애플리케이션 종료 시 커넥션 풀 정리"""
    global _db_instance

    if _db_instance is not None:
        await _db_instance.close()
        _db_instance = None


async def get_db(database: Database = Depends(get_database)) -> AsyncIterator[AsyncSession]:
    """데이터베이스 세션 의존성 주입 (요청별 세션)"""
    async with database.session() as session:
        yield session


async def get_directory_client() -> AsyncIterator[DirectoryClient]:
    """디렉토리 클라이언트 의존성 주입 (요청별 클라이언트)"""
    async with ActiveDirectoryClient() as client:
        yield client


def get_jwt_key_manager() -> JWTKeyManager:
    """SSO JWKS 공개키 관리자 (싱글톤, 공개키 캐시 유지)"""
    global _jwt_key_manager

    if _jwt_key_manager is None:
        _jwt_key_manager = JWTKeyManager(settings.sso_jwks_uri)
    return _jwt_key_manager


def get_directory_service(directory: DirectoryClient = Depends(get_directory_client)) -> DirectoryService:
    return DirectoryService(directory)


def get_permission_service(database: Database = Depends(get_database)) -> PermissionService:
    return PermissionService(database)


def get_auth_service(
    directory_service: DirectoryService = Depends(get_directory_service),
    permission_service: PermissionService = Depends(get_permission_service),
    key_manager: JWTKeyManager = Depends(get_jwt_key_manager),
) -> AuthService:
    return AuthService(directory_service, permission_service, key_manager)


def get_component_settings_service(db: AsyncSession = Depends(get_db)) -> ComponentSettingsService:
    return ComponentSettingsService(db)


def get_component_tag_service(db: AsyncSession = Depends(get_db)) -> ComponentTagService:
    return ComponentTagService(db)


def get_component_service(db: AsyncSession = Depends(get_db)) -> ComponentService:
    return ComponentService(db)


def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


def get_message_query_service(db: AsyncSession = Depends(get_db)) -> MessageQueryService:
    return MessageQueryService(db)


def get_service_log_service(database: Database = Depends(get_database)) -> ServiceLogService:
    return ServiceLogService(database)
