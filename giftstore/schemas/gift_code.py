"""
Pydantic schemas for gift-code inventory
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, Literal
from datetime import datetime

from giftstore.schemas.common import Envelope


GiftCodeStatusLiteral = Literal['available', 'reserved', 'redeemed', 'expired']


class GiftCodeBulkCreate(BaseModel):
    """Schema for restocking a product with new codes"""
    product_id: int = Field(..., gt=0, description="Product ID")
    codes: list[str] = Field(..., min_length=1, description="Codes to add")
    
    @field_validator("codes")
    @classmethod
    def clean_codes(cls, codes: list[str]) -> list[str]:
        cleaned = [code.strip() for code in codes]
        if any(not code for code in cleaned):
            raise ValueError("Gift codes must not be blank")
        return cleaned


class GiftCodeFilter(BaseModel):
    status: Optional[GiftCodeStatusLiteral] = None
    product_id: Optional[int] = Field(None, gt=0)


class GiftCodeResponse(BaseModel):
    id: int
    product_id: int
    product_name: Optional[str] = None
    code: str
    status: str
    order_id: Optional[int] = None
    created_at: Optional[datetime] = None
    redeemed_at: Optional[datetime] = None
    
    model_config = ConfigDict(from_attributes=True)


class GiftCodeListResponse(Envelope):
    count: int
    gift_codes: list[GiftCodeResponse]


class GiftCodeBulkResponse(Envelope):
    count: int
