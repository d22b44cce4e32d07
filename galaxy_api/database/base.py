# -*- coding: utf-8 -*-
"""Database module."""
import json
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import Text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

logger = logging.getLogger(__name__)


__all__ = [
    "Base",
    "Database",
    "JsonText",
]

Base = declarative_base()


class JsonText(TypeDecorator):
    """구조화된 값(스케줄 등)을 JSON 문자열로 저장하고 조회 시 복원하는 컬럼 타입"""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(value)

    def process_result_value(self, value, dialect):
        if value is None or value == "":
            return None
        return json.loads(value)


class Database:
    def __init__(self, database_url: str, echo: bool = False):
        """
        database_url: SQLAlchemy async URL (postgresql+asyncpg://..., sqlite+aiosqlite:///...)
        """
        self._engine = create_async_engine(database_url, echo=echo)
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

    async def create_database(self, checkfirst=True):
        """
        테이블 생성
        checkfirst: True면 기존 테이블이 있으면 건너뛰고, False면 무조건 생성 시도
        """
        # 모든 모델을 metadata에 등록
        import galaxy_api.database.models  # noqa: F401

        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all, checkfirst=checkfirst)
            logger.info("테이블 생성 완료")
        except Exception as e:
            logger.error("테이블 생성 실패: " + str(e))
            raise

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        요청 단위 세션. 세션은 요청 사이에 공유되지 않는다.
        """
        session = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def close(self):
        """데이터베이스 연결 종료"""
        await self._engine.dispose()
