# _*_ coding: utf-8 _*_
"""예외 정보를 포함한 로그 기록 헬퍼.

기록 중 발생한 오류는 호출한 쪽으로 전파되지 않는다.
"""
import logging
from galaxy_api.config.simple_settings import settings

logger = logging.getLogger(__name__)


def _log(level: int, message: str, exception: Exception = None):
    try:
        if exception is None:
            logger.log(level, message)
            return
        # LOG_INCLUDE_EXC_INFO가 꺼져 있으면 스택 트레이스 없이 한 줄로 남긴다
        exc_info = exception if settings.log_include_exc_info else None
        logger.log(level, f"{message}: {exception}", exc_info=exc_info)
    except Exception:  # 로깅 실패는 무시
        pass


def log_error(message: str, exception: Exception = None):
    """
    에러 로그 기록 (전역 예외 핸들러용)

    Args:
        message: traceId가 포함된 로그 메시지
        exception: 원인 예외 (선택사항)
    """
    _log(logging.ERROR, message, exception)


def log_warning(message: str, exception: Exception = None):
    """경고 로그 기록 (롤백된 트랜잭션 등)"""
    _log(logging.WARNING, message, exception)
