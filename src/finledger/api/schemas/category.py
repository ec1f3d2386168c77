"""Pydantic schemas for category endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from finledger.domain.models.enums import CategoryType


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    category_type: CategoryType
    color: Optional[str] = Field(default=None, max_length=16)


class CategoryResponse(BaseModel):
    model_config = {"from_attributes": True}

    category_id: str
    name: str
    category_type: CategoryType
    is_default: bool
    color: Optional[str] = None


class CategoryListResponse(BaseModel):
    categories: list[CategoryResponse]
    count: int
