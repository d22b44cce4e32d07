from enum import Enum, unique


__all__ = [
    "ResponseCode"
]


@unique
class ResponseCode(Enum):

    SUCCESS  = (1, "성공")
    FAIL = (-1, "실패")
    UNDEFINED_ERROR = (-2, "정의되지 않은 오류입니다.")

    # AUTH_SERVICE = (-1100 ~ -1199)
    AUTH_TOKEN_MISSING = (-1101, "인증 토큰이 필요합니다.")
    AUTH_TOKEN_INVALID = (-1102, "유효하지 않은 토큰입니다.")
    AUTH_TOKEN_EXPIRED = (-1103, "토큰이 만료되었습니다.")
    AUTH_CONTEXT_ERROR = (-1104, "사용자 권한 정보를 가져오는 중 오류가 발생했습니다.")

    # USER_SERVICE = (-1200 ~ -1299)
    USER_NOT_FOUND = (-1201, "사용자를 찾을 수 없습니다.")

    # DATABASE_SERVICE = (-1400 ~ -1499)
    DATABASE_CONNECTION_ERROR = (-1401, "데이터베이스 연결 오류가 발생했습니다.")
    DATABASE_QUERY_ERROR = (-1402, "데이터베이스 쿼리 오류가 발생했습니다.")
    DATABASE_TRANSACTION_ERROR = (-1403, "데이터베이스 트랜잭션 오류가 발생했습니다.")

    # VALIDATION_ERROR = (-1600 ~ -1699)
    VALIDATION_ERROR = (-1601, "입력 데이터 검증 오류가 발생했습니다.")
    REQUIRED_FIELD_MISSING = (-1602, "필수 필드가 누락되었습니다.")
    INVALID_DATA_FORMAT = (-1603, "잘못된 데이터 형식입니다.")

    # EXTERNAL_SERVICE = (-1700 ~ -1799)
    DIRECTORY_ERROR = (-1701, "디렉토리 서비스 오류가 발생했습니다.")

    # GROUP_SERVICE = (-1900 ~ -1999)
    GROUP_NOT_FOUND = (-1901, "그룹을 찾을 수 없습니다.")

    # COMPONENT_SERVICE = (-2000 ~ -2099)
    COMPONENT_NOT_FOUND = (-2001, "컴포넌트를 찾을 수 없습니다.")
    COMPONENT_ALERT_LIMIT_EXCEEDED = (-2002, "컴포넌트 알림 개수가 허용 범위를 초과했습니다.")

    # TAG_SERVICE = (-2100 ~ -2199)
    TAG_TYPE_NOT_FOUND = (-2101, "태그 유형을 찾을 수 없습니다.")

    # MESSAGE_QUERY_SERVICE = (-2300 ~ -2399)
    MESSAGE_QUERY_NOT_FOUND = (-2301, "저장된 메시지 쿼리를 찾을 수 없습니다.")


    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
