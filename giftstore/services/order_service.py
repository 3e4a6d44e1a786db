"""
Order Service - Business Logic Layer

Order creation runs in two phases. The validation phase reads products and
stock outside any write so a bad cart fails fast. The commit phase inserts the
order, its lines and claims gift codes inside one transaction, re-checking the
number of codes actually claimed because stock can move between the phases.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple, Union

from sqlalchemy.orm import Session

from giftstore.config import settings
from giftstore.models.order import ORDER_TRANSITIONS
from giftstore.models.product import Product
from giftstore.models.user import User
from giftstore.repositories.gift_code_repository import GiftCodeRepository
from giftstore.repositories.order_repository import OrderRepository
from giftstore.repositories.payment_repository import PaymentRepository
from giftstore.repositories.product_repository import ProductRepository
from giftstore.schemas.order import (
    AssignedGiftCode,
    CartItem,
    OrderDetail,
    OrderItemDetail,
    OrderListItem,
    OrderListResponse,
    OrderSummary
)
from giftstore.services.exceptions import (
    InsufficientStockError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
    ProductInactiveError,
    ProductNotFoundError,
    ValidationError
)
from giftstore.services.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

# Largest value orders.total_price (Numeric(10, 2)) can hold
MAX_ORDER_TOTAL = Decimal("99999999.99")

CartLine = Union[CartItem, Tuple[int, int]]


@dataclass
class PricedLine:
    product: Product
    quantity: int
    unit_price: Decimal
    
    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


def normalize_cart(items: Sequence[CartLine]) -> List[Tuple[int, int]]:
    """
    Validate cart shape and merge repeated products

    Raises ValidationError for an empty cart, a non-positive id or a
    non-positive quantity. Order of first appearance is kept.
    """
    if not items:
        raise ValidationError("Cart is empty")
    
    merged = {}
    for item in items:
        if isinstance(item, CartItem):
            product_id, quantity = item.product_id, item.quantity
        else:
            product_id, quantity = item
        if not isinstance(product_id, int) or product_id <= 0:
            raise ValidationError(f"Invalid product id: {product_id}")
        if not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(f"Quantity for product {product_id} must be greater than 0")
        merged[product_id] = merged.get(product_id, 0) + quantity
    return list(merged.items())


class OrderService:
    """Service layer for order business logic"""
    
    def __init__(self, db: Session, release_codes_on_cancel: Optional[bool] = None):
        self.db = db
        self.repository = OrderRepository(db)
        self.product_repository = ProductRepository(db)
        self.gift_code_repository = GiftCodeRepository(db)
        self.payment_repository = PaymentRepository(db)
        if release_codes_on_cancel is None:
            release_codes_on_cancel = settings.RELEASE_CODES_ON_CANCEL
        self.release_codes_on_cancel = release_codes_on_cancel
    
    def price_cart(self, cart: List[Tuple[int, int]]) -> Tuple[List[PricedLine], Decimal]:
        """
        Check every line against the catalog and current stock
        
        Returns:
            Priced lines and the order total
        
        Raises:
            ProductNotFoundError: If a product does not exist
            ProductInactiveError: If a product is deactivated
            InsufficientStockError: If a product has fewer available codes than requested
            ValidationError: If the total does not fit the order total column
        """
        lines = []
        total = Decimal("0.00")
        for product_id, quantity in cart:
            product = self.product_repository.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            if not product.is_active:
                raise ProductInactiveError(product_id, product.name)
            
            available = self.product_repository.count_available(product_id)
            if available < quantity:
                raise InsufficientStockError(product_id, product.name, quantity, available)
            
            line = PricedLine(product=product, quantity=quantity, unit_price=Decimal(product.price))
            total += line.subtotal
            lines.append(line)
        
        total = total.quantize(CENT)
        if total > MAX_ORDER_TOTAL:
            raise ValidationError(f"Order total {total} exceeds the maximum of {MAX_ORDER_TOTAL}")
        return lines, total
    
    def create_order(self, user_id: int, items: Sequence[CartLine]) -> OrderSummary:
        """
        Create a pending order and reserve its gift codes
        
        Steps:
        1. Validate cart shape (no store access)
        2. Validate products and stock, compute the total
        3. In one transaction: insert order, insert lines, claim codes
        4. Roll everything back if any line cannot be fully claimed
        
        Raises:
            ValidationError, ProductNotFoundError, ProductInactiveError,
            InsufficientStockError, TransactionFailureError
        """
        cart = normalize_cart(items)
        lines, total = self.price_cart(cart)
        
        try:
            with unit_of_work(self.db, "create order"):
                order = self.repository.create(user_id, total)
                for line in lines:
                    self.repository.add_item(order.id, line.product.id, line.quantity, line.unit_price)
                    reserved = self.gift_code_repository.reserve(line.product.id, line.quantity, order.id)
                    if reserved < line.quantity:
                        raise InsufficientStockError(
                            line.product.id, line.product.name, line.quantity, reserved
                        )
        except InsufficientStockError as exc:
            logger.warning(
                "Order for user %s rolled back: product %s claimed %s of %s",
                user_id, exc.product_id, exc.available, exc.requested
            )
            raise
        
        logger.info("Order %s created for user %s, total %s", order.id, user_id, total)
        return OrderSummary.model_validate(order)
    
    def get_order_detail(self, order_id: int, user: User) -> OrderDetail:
        """Order with lines and assigned codes; visible to its owner and admins"""
        order = self.repository.get_by_id(order_id)
        if order is None or (not user.is_admin and order.user_id != user.id):
            raise OrderNotFoundError(order_id)
        
        codes = self.gift_code_repository.codes_for_order(order.id)
        items = [
            OrderItemDetail(
                id=item.id,
                product_id=item.product_id,
                product_name=item.product.name,
                image_url=item.product.image_url,
                quantity=item.quantity,
                unit_price=item.unit_price,
                subtotal=item.subtotal,
                gift_codes=[AssignedGiftCode.model_validate(c) for c in codes.get(item.product_id, [])]
            )
            for item in order.items
        ]
        return OrderDetail(
            order_id=order.id,
            user_id=order.user_id,
            total_price=order.total_price,
            status=order.status,
            created_at=order.created_at,
            items=items
        )
    
    def get_orders_for_user(self, user_id: int) -> List[OrderListItem]:
        """Get the caller's orders"""
        return [
            OrderListItem(
                order_id=order.id,
                user_id=order.user_id,
                total_price=order.total_price,
                status=order.status,
                created_at=order.created_at,
                items_count=items_count
            )
            for order, items_count in self.repository.list_for_user(user_id)
        ]
    
    def get_all_orders(self, status: Optional[str] = None, skip: int = 0, limit: int = 100) -> OrderListResponse:
        """Get all orders with pagination"""
        rows = self.repository.list_all(status=status, skip=skip, limit=limit)
        orders = [
            OrderListItem(
                order_id=order.id,
                user_id=order.user_id,
                user_name=user_name,
                user_email=user_email,
                total_price=order.total_price,
                status=order.status,
                created_at=order.created_at,
                items_count=items_count
            )
            for order, user_name, user_email, items_count in rows
        ]
        return OrderListResponse(orders=orders, total=self.repository.count(status=status))
    
    def update_order_status(self, order_id: int, new_status: str) -> OrderSummary:
        """
        Apply an administrative status change
        
        pending -> paid records a manual payment; pending -> cancelled may
        release the order's codes depending on policy.
        """
        order = self.repository.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        
        old_status = order.status
        if new_status not in ORDER_TRANSITIONS.get(old_status, ()):
            raise InvalidStatusTransitionError(
                f"Cannot change order status from {old_status} to {new_status}"
            )
        
        with unit_of_work(self.db, "update order status"):
            if not self.repository.transition_status(order_id, old_status, new_status):
                raise InvalidStatusTransitionError(
                    f"Order {order_id} is no longer {old_status}"
                )
            if new_status == 'paid':
                self.payment_repository.record(order, method='manual')
            if new_status == 'cancelled' and self.release_codes_on_cancel:
                released = self.gift_code_repository.release_for_order(order_id)
                logger.info("Released %s gift codes from cancelled order %s", released, order_id)
        
        self.db.refresh(order)
        logger.info("Order %s status changed: %s -> %s", order_id, old_status, new_status)
        return OrderSummary.model_validate(order)
