"""
SQLAlchemy GiftCode model (one sellable inventory unit)
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from giftstore.database import Base


GIFT_CODE_STATUSES = ('available', 'reserved', 'redeemed', 'expired')


class GiftCode(Base):
    """
    Redeemable voucher code

    Lifecycle: available -> reserved (bound to an order) -> redeemed.
    An available code may also end as expired.
    """
    
    __tablename__ = "gift_codes"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False)
    code = Column(String(255), nullable=False, unique=True, index=True)
    status = Column(String(20), nullable=False, default='available')
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="RESTRICT"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    redeemed_at = Column(DateTime(timezone=True), nullable=True)
    
    product = relationship("Product", back_populates="gift_codes")
    order = relationship("Order", back_populates="gift_codes")
    
    __table_args__ = (
        CheckConstraint(
            "status IN (%s)" % ", ".join(f"'{s}'" for s in GIFT_CODE_STATUSES),
            name='check_gift_code_status_valid'
        ),
        Index('ix_gift_codes_pool', 'product_id', 'status', 'order_id'),
    )
    
    def __repr__(self):
        return f"<GiftCode(id={self.id}, product_id={self.product_id}, status='{self.status}', order_id={self.order_id})>"
