# _*_ coding: utf-8 _*_
"""Saved message query request models."""
from typing import Any

from pydantic import Field, field_validator

from galaxy_api.types.models.base import CamelModel


class SaveMessageQueryRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    user_id: str = Field(..., min_length=1, max_length=200)
    query_data: Any = None

    @field_validator("name", "user_id")
    @classmethod
    def _validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("값은 공백일 수 없습니다.")
        return value.strip()


class UpdateMessageQueryRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    query_data: Any = None

    @field_validator("name")
    @classmethod
    def _validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("값은 공백일 수 없습니다.")
        return value.strip()
