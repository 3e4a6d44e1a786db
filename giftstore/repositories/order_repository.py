"""
Order Repository - Data Access Layer
"""
from decimal import Decimal
from typing import List, Optional, Tuple
from sqlalchemy import func, update, desc
from sqlalchemy.orm import Session

from giftstore.models.order import Order, OrderItem
from giftstore.models.user import User
from giftstore.repositories.filters import PredicateBuilder


class OrderRepository:
    """Repository for Order and OrderItem operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_by_id(self, order_id: int) -> Optional[Order]:
        """Get order by ID"""
        return self.db.query(Order).filter(Order.id == order_id).first()
    
    def get_for_user(self, order_id: int, user_id: int) -> Optional[Order]:
        return self.db.query(Order).filter(
            Order.id == order_id,
            Order.user_id == user_id
        ).first()
    
    def list_for_user(self, user_id: int) -> List[Tuple[Order, int]]:
        """Get a user's orders (newest first) with their line counts"""
        return self.db.query(Order, func.count(OrderItem.id)).outerjoin(
            OrderItem, OrderItem.order_id == Order.id
        ).filter(
            Order.user_id == user_id
        ).group_by(Order.id).order_by(desc(Order.created_at), desc(Order.id)).all()
    
    def list_all(
        self,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Tuple[Order, str, str, int]]:
        """Get all orders with owner name/email and line counts"""
        query = self.db.query(
            Order, User.name, User.email, func.count(OrderItem.id)
        ).join(
            User, User.id == Order.user_id
        ).outerjoin(
            OrderItem, OrderItem.order_id == Order.id
        )
        query = PredicateBuilder().when(status, lambda v: Order.status == v).apply(query)
        return query.group_by(Order.id, User.name, User.email).order_by(
            desc(Order.created_at), desc(Order.id)
        ).offset(skip).limit(limit).all()
    
    def count(self, status: Optional[str] = None) -> int:
        """Get total count of orders"""
        query = PredicateBuilder().when(status, lambda v: Order.status == v).apply(
            self.db.query(func.count(Order.id))
        )
        return query.scalar()
    
    def create(self, user_id: int, total_price: Decimal) -> Order:
        """Insert a pending order and assign its id"""
        order = Order(user_id=user_id, total_price=total_price, status='pending')
        self.db.add(order)
        self.db.flush()
        return order
    
    def add_item(self, order_id: int, product_id: int, quantity: int, unit_price: Decimal) -> OrderItem:
        item = OrderItem(
            order_id=order_id,
            product_id=product_id,
            quantity=quantity,
            unit_price=unit_price,
            subtotal=unit_price * quantity
        )
        self.db.add(item)
        self.db.flush()
        return item
    
    def transition_status(
        self,
        order_id: int,
        from_status: str,
        to_status: str,
        user_id: Optional[int] = None
    ) -> int:
        """
        Move an order from one status to another in a single conditional update

        Returns the number of rows changed: 0 means the order was not in
        `from_status` (or not owned by `user_id`) when the update ran.
        """
        conditions = [Order.id == order_id, Order.status == from_status]
        if user_id is not None:
            conditions.append(Order.user_id == user_id)
        result = self.db.execute(
            update(Order)
            .where(*conditions)
            .values(status=to_status, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
