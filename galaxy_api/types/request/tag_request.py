# _*_ coding: utf-8 _*_
"""Component tag request models."""
from typing import List

from pydantic import Field

from galaxy_api.types.models.base import CamelModel
from galaxy_api.types.models.tag import Tag


class ComponentTagsUpdateRequest(CamelModel):
    tags: List[Tag] = Field(..., min_length=1)
