from typing import Optional, Any
import datetime as dt

from .response_code import ResponseCode
from pydantic import BaseModel, Field, field_serializer, model_validator

__all__ = [
    "BaseResponse",
    "CommonResponse",
    "ErrorResponse",
]


def _dt_to_timemilis(time: dt.datetime):
    return round(time.timestamp() * 1000)


class BaseResponse(BaseModel):
    """성공 데이터(`data`)와 오류 정보(`code`, `message`, `traceId`)를 분리한 응답 봉투"""

    timestamp: Optional[dt.datetime] = None
    code: Optional[int] = None
    message: Optional[str] = None
    traceId: Optional[str] = None
    data: Optional[Any] = Field(
        None, title="the output",
    )

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: Optional[dt.datetime]):
        return _dt_to_timemilis(value) if value is not None else None


class CommonResponse(BaseResponse):

    @model_validator(mode='before')
    @classmethod
    def _init(cls, values):
        if isinstance(values, dict):
            values["timestamp"] = dt.datetime.now(dt.timezone.utc)
            rc = ResponseCode.SUCCESS
            values["code"] = rc.code
            values["message"] = rc.message
            values["traceId"] = None
        return values


class ErrorResponse(BaseResponse):
    """에러 응답 클래스 - data는 항상 None"""

    @model_validator(mode='before')
    @classmethod
    def _init(cls, values):
        if isinstance(values, dict):
            if values.get("code") is None:
                values["code"] = ResponseCode.UNDEFINED_ERROR.code
                values["message"] = ResponseCode.UNDEFINED_ERROR.message
            values["timestamp"] = dt.datetime.now(dt.timezone.utc)
            values["data"] = None
        return values
