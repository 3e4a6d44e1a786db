"""
Pydantic schemas for request/response validation
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Literal
from datetime import datetime

from giftstore.schemas.common import Envelope, Money


OrderStatusLiteral = Literal['pending', 'paid', 'cancelled', 'refunded']


class CartItem(BaseModel):
    """One cart line"""
    product_id: int = Field(..., gt=0, description="Product ID")
    quantity: int = Field(..., gt=0, description="Quantity to order")
    
    model_config = ConfigDict(extra="forbid")


class OrderCreate(BaseModel):
    """Schema for creating a new order from a cart"""
    items: list[CartItem] = Field(..., min_length=1, description="Cart lines")
    
    model_config = ConfigDict(extra="forbid")


class OrderStatusUpdate(BaseModel):
    """Schema for updating order status"""
    status: OrderStatusLiteral = Field(..., description="Order status")


class OrderSummary(BaseModel):
    order_id: int = Field(validation_alias="id")
    total_price: Money
    status: str
    
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class AssignedGiftCode(BaseModel):
    id: int
    code: str
    status: str
    redeemed_at: Optional[datetime] = None
    
    model_config = ConfigDict(from_attributes=True)


class OrderItemDetail(BaseModel):
    id: int
    product_id: int
    product_name: str
    image_url: Optional[str] = None
    quantity: int
    unit_price: Money
    subtotal: Money
    gift_codes: list[AssignedGiftCode] = []


class OrderDetail(BaseModel):
    order_id: int
    user_id: int
    total_price: Money
    status: str
    created_at: Optional[datetime] = None
    items: list[OrderItemDetail]


class OrderListItem(BaseModel):
    order_id: int
    user_id: int
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    total_price: Money
    status: str
    created_at: Optional[datetime] = None
    items_count: int


class OrderCreatedResponse(Envelope):
    order: OrderSummary


class OrderDetailResponse(Envelope):
    order: OrderDetail


class OrderStatusResponse(Envelope):
    order: OrderSummary


class OrderListResponse(Envelope):
    orders: list[OrderListItem]
    total: int
