"""
Schemas package
"""
from giftstore.schemas.common import Envelope, Money
from giftstore.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryEnvelope,
    CategoryListResponse
)
from giftstore.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductFilter,
    ProductResponse,
    ProductEnvelope,
    ProductCreatedResponse,
    ProductListResponse
)
from giftstore.schemas.gift_code import (
    GiftCodeBulkCreate,
    GiftCodeFilter,
    GiftCodeResponse,
    GiftCodeListResponse,
    GiftCodeBulkResponse
)
from giftstore.schemas.order import (
    CartItem,
    OrderCreate,
    OrderStatusUpdate,
    OrderSummary,
    OrderDetail,
    OrderListItem,
    OrderCreatedResponse,
    OrderDetailResponse,
    OrderStatusResponse,
    OrderListResponse
)
from giftstore.schemas.payment import (
    PaymentConfirm,
    PaymentInfo,
    PaymentInfoResponse,
    PaymentConfirmResponse
)

__all__ = [
    "Envelope",
    "Money",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryEnvelope",
    "CategoryListResponse",
    "ProductCreate",
    "ProductUpdate",
    "ProductFilter",
    "ProductResponse",
    "ProductEnvelope",
    "ProductCreatedResponse",
    "ProductListResponse",
    "GiftCodeBulkCreate",
    "GiftCodeFilter",
    "GiftCodeResponse",
    "GiftCodeListResponse",
    "GiftCodeBulkResponse",
    "CartItem",
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderSummary",
    "OrderDetail",
    "OrderListItem",
    "OrderCreatedResponse",
    "OrderDetailResponse",
    "OrderStatusResponse",
    "OrderListResponse",
    "PaymentConfirm",
    "PaymentInfo",
    "PaymentInfoResponse",
    "PaymentConfirmResponse"
]
