# _*_ coding: utf-8 _*_
"""Service log REST API endpoints."""
from fastapi import APIRouter, Depends
from galaxy_api.api.services.service_log_service import ServiceLogService
from galaxy_api.core.dependencies import get_service_log_service
from galaxy_api.types.request.log_request import ServiceLogRequest
from galaxy_api.types.response.base import CommonResponse

router = APIRouter(tags=["log"])


@router.post("/log/create", response_model=CommonResponse)
async def create_log(
    request: ServiceLogRequest,
    service_log_service: ServiceLogService = Depends(get_service_log_service),
):
    """클라이언트 시스템의 서비스 로그를 저장합니다. (토큰 불필요)"""
    await service_log_service.create_entry(request)
    return CommonResponse(data="success")
