"""
Pydantic schemas for categories
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from datetime import datetime
from typing import Optional

from giftstore.schemas.common import Envelope


class CategoryCreate(BaseModel):
    """Schema for creating or renaming a category"""
    name: str = Field(..., min_length=1, max_length=100, description="Category name")
    
    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please provide category name")
        return value


class CategoryUpdate(CategoryCreate):
    """Schema for updating a category"""
    pass


class CategoryResponse(BaseModel):
    id: int
    name: str
    created_at: Optional[datetime] = None
    
    model_config = ConfigDict(from_attributes=True)


class CategoryEnvelope(Envelope):
    category: CategoryResponse


class CategoryListResponse(Envelope):
    count: int
    categories: list[CategoryResponse]
