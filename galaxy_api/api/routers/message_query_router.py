# _*_ coding: utf-8 _*_
"""Saved message query REST API endpoints."""
import logging

from fastapi import APIRouter, Depends
from galaxy_api.api.services.message_query_service import MessageQueryService
from galaxy_api.core.dependencies import get_message_query_service
from galaxy_api.types.request.message_query_request import (
    SaveMessageQueryRequest,
    UpdateMessageQueryRequest,
)
from galaxy_api.types.response.base import CommonResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["message-query"])


@router.get("/message/query/get/{userId}", response_model=CommonResponse)
async def get_message_queries(
    userId: str,
    message_query_service: MessageQueryService = Depends(get_message_query_service),
):
    """사용자가 저장한 메시지 검색 조건 목록을 조회합니다."""
    queries = await message_query_service.get_message_queries(userId)
    return CommonResponse(data=[query.to_json_dict() for query in queries])


@router.post("/message/query/save", response_model=CommonResponse)
async def save_message_query(
    request: SaveMessageQueryRequest,
    message_query_service: MessageQueryService = Depends(get_message_query_service),
):
    """메시지 검색 조건을 저장합니다."""
    query = await message_query_service.save_message_query(request)
    return CommonResponse(data=query.to_json_dict())


@router.put("/message/query/update/{id}", response_model=CommonResponse)
async def update_message_query(
    id: str,
    request: UpdateMessageQueryRequest,
    message_query_service: MessageQueryService = Depends(get_message_query_service),
):
    """저장된 메시지 검색 조건을 수정합니다."""
    query = await message_query_service.update_message_query(id, request)
    return CommonResponse(data=query.to_json_dict())


@router.delete("/message/query/delete/{id}", response_model=CommonResponse)
async def delete_message_query(
    id: str,
    message_query_service: MessageQueryService = Depends(get_message_query_service),
):
    """저장된 메시지 검색 조건을 삭제합니다."""
    await message_query_service.delete_message_query(id)
    return CommonResponse(data={"id": id, "deleted": True})
