# _*_ coding: utf-8 _*_
"""Component REST API endpoints."""
import logging

from fastapi import APIRouter, Depends
from galaxy_api.api.services.component_service import ComponentService
from galaxy_api.api.services.component_settings_service import ComponentSettingsService
from galaxy_api.core.dependencies import get_component_service, get_component_settings_service
from galaxy_api.types.models.component import ComponentSettings
from galaxy_api.types.response.base import CommonResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["component"])


@router.get("/component/get/{contains}", response_model=CommonResponse)
async def get_components(
    contains: str,
    component_service: ComponentService = Depends(get_component_service),
):
    """이름에 문자열을 포함하는 컴포넌트를 검색합니다."""
    components = await component_service.search_components(contains)
    return CommonResponse(data=[component.to_json_dict() for component in components])


@router.get("/component/get/{contains}/{noCategory}/{stageOnly}", response_model=CommonResponse)
async def get_components_filtered(
    contains: str,
    noCategory: bool,
    stageOnly: bool,
    component_service: ComponentService = Depends(get_component_service),
):
    """카테고리 없음/스테이지 상태 조건으로 컴포넌트를 검색합니다."""
    components = await component_service.search_components(contains, no_category=noCategory, stage_only=stageOnly)
    return CommonResponse(data=[component.to_json_dict() for component in components])


@router.get("/component/settings/get/{componentId}", response_model=CommonResponse)
async def get_component_settings(
    componentId: str,
    settings_service: ComponentSettingsService = Depends(get_component_settings_service),
):
    """컴포넌트 설정(주요 속성, 도움말, 알림, 태그)을 조회합니다."""
    component_settings = await settings_service.get_component_settings(componentId)
    return CommonResponse(data=component_settings.to_json_dict())


@router.post("/component/settings/update", response_model=CommonResponse)
async def update_component_settings(
    request: ComponentSettings,
    settings_service: ComponentSettingsService = Depends(get_component_settings_service),
):
    """컴포넌트 설정 전체를 하나의 트랜잭션으로 수정합니다."""
    # Service Layer에서 전파된 HandledException은 Global Exception Handler가 처리
    component_settings = await settings_service.update_component_settings(request)
    return CommonResponse(data=component_settings.to_json_dict())
