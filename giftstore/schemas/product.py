"""
Pydantic schemas for products
"""
from decimal import Decimal
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Literal
from datetime import datetime

from giftstore.schemas.common import Envelope, Money


class ProductBase(BaseModel):
    """Base Product schema with common fields"""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, description="Unit price")
    category_id: int = Field(..., gt=0, description="Category ID")
    image_url: Optional[str] = Field(None, max_length=500, description="Product image URL")


class ProductCreate(ProductBase):
    """Schema for creating a product together with its first batch of gift codes"""
    gift_codes: list[str] = Field(..., min_length=1, description="Initial gift codes")
    
    @field_validator("gift_codes")
    @classmethod
    def clean_codes(cls, codes: list[str]) -> list[str]:
        cleaned = [code.strip() for code in codes]
        if any(not code for code in cleaned):
            raise ValueError("Gift codes must not be blank")
        return cleaned


class ProductUpdate(BaseModel):
    """Schema for updating a product (all fields optional)"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    category_id: Optional[int] = Field(None, gt=0)
    image_url: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None


class ProductFilter(BaseModel):
    """Catalog query parameters"""
    category_id: Optional[int] = Field(None, gt=0)
    search: Optional[str] = Field(None, max_length=255)
    min_price: Optional[Decimal] = Field(None, ge=0)
    max_price: Optional[Decimal] = Field(None, ge=0)
    sort: Optional[Literal['price_asc', 'price_desc', 'name', 'newest']] = None


class ProductResponse(BaseModel):
    """Schema for product response, including live stock"""
    id: int
    name: str
    description: Optional[str] = None
    price: Money
    category_id: int
    category_name: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool
    stock: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductEnvelope(Envelope):
    product: ProductResponse


class ProductCreatedResponse(Envelope):
    product: ProductResponse
    gift_codes_count: int


class ProductListResponse(Envelope):
    count: int
    products: list[ProductResponse]
