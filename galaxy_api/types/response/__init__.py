# _*_ coding: utf-8 _*_
"""Response models for GalaxyAPI."""

from .base import BaseResponse, CommonResponse, ErrorResponse
from .exceptions import HandledException, UnHandledException
from .response_code import ResponseCode

__all__ = [
    "BaseResponse",
    "CommonResponse",
    "ErrorResponse",
    "HandledException",
    "UnHandledException",
    "ResponseCode"
]
