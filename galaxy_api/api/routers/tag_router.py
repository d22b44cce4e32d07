# _*_ coding: utf-8 _*_
"""Component tag REST API endpoints."""
import logging

from fastapi import APIRouter, Depends
from galaxy_api.api.services.component_tag_service import ComponentTagService
from galaxy_api.core.dependencies import get_component_tag_service
from galaxy_api.types.models.tag import Tag
from galaxy_api.types.request.tag_request import ComponentTagsUpdateRequest
from galaxy_api.types.response.base import CommonResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["tag"])


@router.post("/component/tag/update", response_model=CommonResponse)
async def update_component_tag(
    request: Tag,
    tag_service: ComponentTagService = Depends(get_component_tag_service),
):
    """컴포넌트 태그 한 개를 저장하고 연결된 컴포넌트를 교체합니다."""
    tag = await tag_service.update_tag(request)
    return CommonResponse(data=tag.to_json_dict())


@router.post("/component/tags/update", response_model=CommonResponse)
async def update_component_tags(
    request: ComponentTagsUpdateRequest,
    tag_service: ComponentTagService = Depends(get_component_tag_service),
):
    """컴포넌트 태그 목록을 하나의 트랜잭션으로 저장합니다."""
    tags = await tag_service.update_tags(request.tags)
    return CommonResponse(data=[tag.to_json_dict() for tag in tags])


@router.get("/component/tags/get/{contains}", response_model=CommonResponse)
async def get_component_tags(
    contains: str,
    tag_service: ComponentTagService = Depends(get_component_tag_service),
):
    """이름에 문자열을 포함하는 컴포넌트 태그와 연결된 컴포넌트를 조회합니다."""
    tags = await tag_service.search_component_tags(contains)
    return CommonResponse(data=[tag.to_json_dict() for tag in tags])
