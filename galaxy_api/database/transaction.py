# _*_ coding: utf-8 _*_
"""Transaction scope shared by the multi-step write services."""
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode
from galaxy_api.utils.logging_utils import log_warning


@asynccontextmanager
async def transaction(db: AsyncSession, context: str = None) -> AsyncIterator[AsyncSession]:
    """
    하나의 트랜잭션 안에서 블록을 실행한다. 블록이 정상 종료되면 커밋, 예외가 나면 전체 롤백.

    롤백 후 쿼리 오류와 예상하지 못한 예외는 DATABASE_TRANSACTION_ERROR로 바뀐다.
    그 외 HandledException(컴포넌트 없음 등)은 코드를 유지한 채 전파된다.
    세션은 트랜잭션 시작 전에 사용되지 않은 상태여야 한다.
    """
    try:
        async with db.begin():
            yield db
    except HandledException as e:
        log_warning(f"트랜잭션 롤백: {context}", e)
        if e.resp_code is ResponseCode.DATABASE_QUERY_ERROR:
            raise HandledException(ResponseCode.DATABASE_TRANSACTION_ERROR, e=e.cause, msg=context)
        raise
    except Exception as e:
        log_warning(f"트랜잭션 롤백: {context}", e)
        raise HandledException(ResponseCode.DATABASE_TRANSACTION_ERROR, e=e, msg=context)
