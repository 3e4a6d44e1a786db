"""
Payment Repository - Data Access Layer
"""
from typing import Optional
from sqlalchemy.orm import Session

from giftstore.models.order import Order
from giftstore.models.payment import Payment


class PaymentRepository:
    """Repository for recorded payments"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_by_order(self, order_id: int) -> Optional[Payment]:
        return self.db.query(Payment).filter(Payment.order_id == order_id).first()
    
    def record(self, order: Order, method: str) -> Payment:
        """Record a completed payment for the full order total"""
        payment = Payment(
            order_id=order.id,
            user_id=order.user_id,
            amount=order.total_price,
            method=method,
            status='completed'
        )
        self.db.add(payment)
        self.db.flush()
        return payment
