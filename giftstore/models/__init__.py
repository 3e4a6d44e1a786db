"""
SQLAlchemy models
"""
from giftstore.models.user import User
from giftstore.models.category import Category
from giftstore.models.product import Product
from giftstore.models.gift_code import GiftCode, GIFT_CODE_STATUSES
from giftstore.models.order import Order, OrderItem, ORDER_STATUSES, ORDER_TRANSITIONS
from giftstore.models.payment import Payment

__all__ = [
    "User",
    "Category",
    "Product",
    "GiftCode",
    "GIFT_CODE_STATUSES",
    "Order",
    "OrderItem",
    "ORDER_STATUSES",
    "ORDER_TRANSITIONS",
    "Payment"
]
