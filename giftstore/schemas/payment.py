"""
Pydantic schemas for simulated payments
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from giftstore.schemas.common import Envelope, Money
from giftstore.schemas.order import OrderSummary


class PaymentConfirm(BaseModel):
    order_id: int = Field(..., gt=0, description="Order to pay")


class PaymentLine(BaseModel):
    product_id: int
    product_name: str
    quantity: int
    price: Money


class PaymentInfo(BaseModel):
    order_id: int
    total_price: Money
    currency: str
    status: str
    order_date: Optional[datetime] = None
    items: list[PaymentLine]


class PaymentInfoResponse(Envelope):
    payment: PaymentInfo


class PaymentConfirmResponse(Envelope):
    order: OrderSummary
