"""
Payment Service - simulated payment confirmation
"""
import logging

from sqlalchemy.orm import Session

from giftstore.config import settings
from giftstore.repositories.order_repository import OrderRepository
from giftstore.repositories.payment_repository import PaymentRepository
from giftstore.schemas.order import OrderSummary
from giftstore.schemas.payment import PaymentInfo, PaymentLine
from giftstore.services.exceptions import OrderNotFoundError, PaymentAlreadyProcessedError
from giftstore.services.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


class PaymentService:
    """Service layer for order payment"""
    
    def __init__(self, db: Session):
        self.db = db
        self.order_repository = OrderRepository(db)
        self.repository = PaymentRepository(db)
    
    def get_payment_info(self, order_id: int, user_id: int) -> PaymentInfo:
        """Summary of a pending order the caller is about to pay"""
        order = self.order_repository.get_for_user(order_id, user_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if order.status != 'pending':
            raise PaymentAlreadyProcessedError(order_id)
        
        return PaymentInfo(
            order_id=order.id,
            total_price=order.total_price,
            currency=settings.CURRENCY,
            status=order.status,
            order_date=order.created_at,
            items=[
                PaymentLine(
                    product_id=item.product_id,
                    product_name=item.product.name,
                    quantity=item.quantity,
                    price=item.unit_price
                )
                for item in order.items
            ]
        )
    
    def confirm_payment(self, order_id: int, user_id: int) -> OrderSummary:
        """
        Mark the caller's pending order as paid, exactly once
        
        The status flip is a conditional update, so a second (or concurrent)
        confirmation changes nothing and is rejected.
        
        Raises:
            OrderNotFoundError: If the order does not exist or is not the caller's
            PaymentAlreadyProcessedError: If the order is no longer pending
        """
        order = self.order_repository.get_for_user(order_id, user_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if order.status != 'pending':
            raise PaymentAlreadyProcessedError(order_id)
        
        with unit_of_work(
            self.db,
            "confirm payment",
            on_conflict=lambda exc: PaymentAlreadyProcessedError(order_id)
        ):
            if not self.order_repository.transition_status(order_id, 'pending', 'paid', user_id=user_id):
                raise PaymentAlreadyProcessedError(order_id)
            self.repository.record(order, method='simulated')
        
        self.db.refresh(order)
        logger.info("Payment confirmed for order %s (%s %s)", order_id, order.total_price, settings.CURRENCY)
        return OrderSummary.model_validate(order)
