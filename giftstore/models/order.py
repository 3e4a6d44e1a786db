"""
SQLAlchemy Order and OrderItem models
"""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from giftstore.database import Base


ORDER_STATUSES = ('pending', 'paid', 'cancelled', 'refunded')

# Allowed status changes; nothing ever returns to pending
ORDER_TRANSITIONS = {
    'pending': ('paid', 'cancelled'),
    'paid': ('refunded',),
    'cancelled': (),
    'refunded': (),
}


class Order(Base):
    """Order database model"""
    
    __tablename__ = "orders"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    total_price = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), nullable=False, default='pending', index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    user = relationship("User")
    items = relationship("OrderItem", back_populates="order", order_by="OrderItem.id")
    gift_codes = relationship("GiftCode", back_populates="order", order_by="GiftCode.id")
    payment = relationship("Payment", back_populates="order", uselist=False)
    
    # Constraints
    __table_args__ = (
        CheckConstraint('total_price >= 0', name='check_total_non_negative'),
        CheckConstraint(
            "status IN (%s)" % ", ".join(f"'{s}'" for s in ORDER_STATUSES),
            name='check_status_valid'
        ),
    )
    
    def __repr__(self):
        return f"<Order(id={self.id}, user_id={self.user_id}, total_price={self.total_price}, status='{self.status}')>"


class OrderItem(Base):
    """One cart line frozen at purchase time"""
    
    __tablename__ = "order_items"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)
    
    order = relationship("Order", back_populates="items")
    product = relationship("Product")
    
    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_quantity_positive'),
    )
    
    def __repr__(self):
        return f"<OrderItem(order_id={self.order_id}, product_id={self.product_id}, quantity={self.quantity})>"
