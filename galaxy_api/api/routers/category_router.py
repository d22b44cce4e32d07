# _*_ coding: utf-8 _*_
"""Category REST API endpoints."""
from fastapi import APIRouter, Depends
from galaxy_api.api.services.category_service import CategoryService
from galaxy_api.core.dependencies import get_category_service
from galaxy_api.types.response.base import CommonResponse

router = APIRouter(tags=["category"])


@router.get("/getcategories/{contains}", response_model=CommonResponse)
async def get_categories(
    contains: str,
    category_service: CategoryService = Depends(get_category_service),
):
    """이름에 문자열을 포함하는 카테고리를 조회합니다."""
    categories = await category_service.search_categories(contains)
    return CommonResponse(data=[category.to_json_dict() for category in categories])
