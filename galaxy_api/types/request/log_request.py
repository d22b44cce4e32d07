# _*_ coding: utf-8 _*_
"""Service log request models."""
from datetime import datetime
from typing import Optional

from pydantic import Field

from galaxy_api.types.models.base import CamelModel


class ServiceLogRequest(CamelModel):
    """클라이언트 시스템이 전달하는 서비스 로그"""

    system_name: str = Field(..., min_length=1, max_length=100)
    system_token: str = Field("", max_length=100)
    user_name: str = Field("", max_length=200)
    log_type: str = Field("INFO", max_length=20)
    is_fair_warning: bool = False
    message: str = Field(..., min_length=1)
    message_date: Optional[datetime] = None
