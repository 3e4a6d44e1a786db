"""
Gift Code Repository - Data Access Layer
"""
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set, Tuple
from sqlalchemy import select, update, delete, desc
from sqlalchemy.orm import Session

from giftstore.models.gift_code import GiftCode
from giftstore.models.product import Product
from giftstore.repositories.filters import PredicateBuilder
from giftstore.schemas.gift_code import GiftCodeFilter


class GiftCodeRepository:
    """Repository for gift-code inventory"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def search(self, filters: GiftCodeFilter) -> List[Tuple[GiftCode, Optional[str]]]:
        """List codes (newest first) with their product name"""
        builder = (
            PredicateBuilder()
            .when(filters.status, lambda v: GiftCode.status == v)
            .when(filters.product_id, lambda v: GiftCode.product_id == v)
        )
        query = self.db.query(GiftCode, Product.name).outerjoin(
            Product, GiftCode.product_id == Product.id
        )
        return builder.apply(query).order_by(
            desc(GiftCode.created_at), desc(GiftCode.id)
        ).all()
    
    def get_by_id(self, gift_code_id: int) -> Optional[GiftCode]:
        return self.db.query(GiftCode).filter(GiftCode.id == gift_code_id).first()
    
    def existing_codes(self, codes: Iterable[str]) -> Set[str]:
        """Return which of the given codes are already stored"""
        codes = list(codes)
        if not codes:
            return set()
        rows = self.db.query(GiftCode.code).filter(GiftCode.code.in_(codes)).all()
        return {row[0] for row in rows}
    
    def add_many(self, product_id: int, codes: Iterable[str]) -> int:
        """Insert codes as available stock for the product"""
        units = [GiftCode(product_id=product_id, code=code, status='available') for code in codes]
        self.db.add_all(units)
        self.db.flush()
        return len(units)
    
    def reserve(self, product_id: int, quantity: int, order_id: int) -> int:
        """
        Claim up to `quantity` available codes for an order in one statement

        Oldest codes go first. The outer WHERE re-checks availability, so rows
        taken by a concurrent transaction are skipped rather than stolen.
        Returns the number of codes actually claimed.
        """
        candidates = (
            select(GiftCode.id)
            .where(
                GiftCode.product_id == product_id,
                GiftCode.status == 'available',
                GiftCode.order_id.is_(None)
            )
            .order_by(GiftCode.created_at, GiftCode.id)
            .limit(quantity)
            .with_for_update(skip_locked=True)
        )
        result = self.db.execute(
            update(GiftCode)
            .where(
                GiftCode.id.in_(candidates),
                GiftCode.status == 'available',
                GiftCode.order_id.is_(None)
            )
            .values(status='reserved', order_id=order_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
    
    def release_for_order(self, order_id: int) -> int:
        """Return an order's reserved (never redeemed) codes to the pool"""
        result = self.db.execute(
            update(GiftCode)
            .where(GiftCode.order_id == order_id, GiftCode.status == 'reserved')
            .values(status='available', order_id=None)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
    
    def codes_for_order(self, order_id: int) -> Dict[int, List[GiftCode]]:
        """Codes bound to an order, grouped by product id"""
        grouped = defaultdict(list)
        units = self.db.query(GiftCode).filter(
            GiftCode.order_id == order_id
        ).order_by(GiftCode.id).all()
        for unit in units:
            grouped[unit.product_id].append(unit)
        return dict(grouped)
    
    def delete(self, gift_code: GiftCode) -> None:
        self.db.delete(gift_code)
        self.db.flush()
    
    def delete_unsold_for_product(self, product_id: int) -> int:
        result = self.db.execute(
            delete(GiftCode)
            .where(GiftCode.product_id == product_id, GiftCode.order_id.is_(None))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
