"""
Services package
"""
from giftstore.services.order_service import OrderService
from giftstore.services.payment_service import PaymentService
from giftstore.services.product_service import ProductService
from giftstore.services.category_service import CategoryService
from giftstore.services.gift_code_service import GiftCodeService

__all__ = ["OrderService", "PaymentService", "ProductService", "CategoryService", "GiftCodeService"]
