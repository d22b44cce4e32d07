from typing import Optional
import logging

from fastapi.exceptions import HTTPException

from .response_code import ResponseCode

logger = logging.getLogger(__name__)


__all__ = [
    "HandledException",
    "UnHandledException",
]


# ResponseCode -> HTTP 상태 코드
_CLIENT_ERROR_CODES = {
    ResponseCode.VALIDATION_ERROR.code,
    ResponseCode.REQUIRED_FIELD_MISSING.code,
    ResponseCode.INVALID_DATA_FORMAT.code,
}
_NOT_FOUND_CODES = {
    ResponseCode.USER_NOT_FOUND.code,
    ResponseCode.GROUP_NOT_FOUND.code,
    ResponseCode.COMPONENT_NOT_FOUND.code,
    ResponseCode.TAG_TYPE_NOT_FOUND.code,
    ResponseCode.MESSAGE_QUERY_NOT_FOUND.code,
}
_UNAUTHORIZED_CODES = {
    ResponseCode.AUTH_TOKEN_MISSING.code,
    ResponseCode.AUTH_TOKEN_INVALID.code,
    ResponseCode.AUTH_TOKEN_EXPIRED.code,
}
_BAD_GATEWAY_CODES = {
    ResponseCode.DIRECTORY_ERROR.code,
}


class HandledException(HTTPException):
    """Application-managed Exception, which is an exception wrapper.

    This Exception is designed to handle the exceptions raised while the
    application API is responding. When it is raised, it is caught by the
    global exception handlers and an `ErrorResponse` is returned. Only the
    friendly message of `resp_code` reaches the client; the wrapped cause
    is kept for server-side logging.


    Parameters
    ----------
    resp_code: ResponseCode
        An application-managed error case. it has its own `code` and `msg` to logging.

    e: Exception
        An system raised exception to wrap.

    msg: str (default: None)
        Detail appended to the log message. Never sent to the client.

    http_status_code: int (default: None)
        Overrides the status code derived from `resp_code`.


    Examples
    --------
    >>> from sqlalchemy.exc import SQLAlchemyError
    >>> try:
    ...     await session.execute(stmt)
    ... except SQLAlchemyError as e:
    ...     raise HandledException(ResponseCode.DATABASE_QUERY_ERROR, e=e)

    """

    # errorCode
    code: int
    # errorMessage
    message: str
    # HTTP status code
    http_status_code: int

    def __init__(self, resp_code: ResponseCode, e: Exception = None, msg: str = None, http_status_code: int = None):
        status_code = http_status_code or self._get_http_status_code(resp_code)
        super().__init__(status_code=status_code, detail=resp_code.message)

        self.resp_code = resp_code
        self.code = resp_code.code
        self.message = resp_code.message
        self.http_status_code = status_code
        self.detail_message = msg
        self.cause = e

    @staticmethod
    def _get_http_status_code(resp_code: ResponseCode) -> int:
        """ResponseCode에 따라 적절한 HTTP 상태 코드를 반환"""
        if resp_code.code in _CLIENT_ERROR_CODES:
            return 400
        if resp_code.code in _UNAUTHORIZED_CODES:
            return 401
        if resp_code.code in _NOT_FOUND_CODES:
            return 404
        if resp_code.code in _BAD_GATEWAY_CODES:
            return 502
        return 500

    @property
    def logMessage(self) -> str:
        lines = [
            "=" * 50,
            f"CODE: {self.code}",
            f"MSG: {self.message}",
        ]
        if self.detail_message:
            lines.append(f"DETAIL: {self.detail_message}")
        if self.cause is not None:
            lines.append(f"CAUSE: {self.cause.__class__.__name__}: {self.cause}")
        return "\n".join(lines)

    def __str__(self) -> str:
        if self.detail_message:
            return f"[{self.code}] {self.message}: {self.detail_message}"
        return f"[{self.code}] {self.message}"


class UnHandledException(HandledException):
    def __init__(self, e: Exception = None, msg: Optional[str] = None):
        super().__init__(ResponseCode.UNDEFINED_ERROR, e=e, msg=msg)
