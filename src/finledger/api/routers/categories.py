"""Category endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from finledger.api.deps import get_category_service, get_owner_id
from finledger.api.schemas import CategoryCreateRequest, CategoryListResponse, CategoryResponse
from finledger.domain.models import CategoryType
from finledger.services import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    request: CategoryCreateRequest,
    owner_id: str = Depends(get_owner_id),
    categories: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    category = categories.create_category(
        owner_id,
        name=request.name,
        category_type=request.category_type,
        color=request.color,
    )
    return CategoryResponse.model_validate(category)


@router.get("", response_model=CategoryListResponse)
def list_categories(
    category_type: Optional[CategoryType] = Query(None, alias="type"),
    owner_id: str = Depends(get_owner_id),
    categories: CategoryService = Depends(get_category_service),
) -> CategoryListResponse:
    items = categories.list_categories(owner_id, category_type)
    return CategoryListResponse(
        categories=[CategoryResponse.model_validate(c) for c in items],
        count=len(items),
    )


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: str,
    owner_id: str = Depends(get_owner_id),
    categories: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    return CategoryResponse.model_validate(categories.get_category(owner_id, category_id))
