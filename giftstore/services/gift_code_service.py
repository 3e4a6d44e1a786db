"""
Gift Code Service - inventory management
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from giftstore.repositories.gift_code_repository import GiftCodeRepository
from giftstore.repositories.product_repository import ProductRepository
from giftstore.schemas.gift_code import GiftCodeBulkCreate, GiftCodeFilter, GiftCodeResponse
from giftstore.services.exceptions import (
    GiftCodeConflictError,
    GiftCodeLockedError,
    GiftCodeNotFoundError,
    ProductNotFoundError
)
from giftstore.services.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


def ensure_new_codes(repository: GiftCodeRepository, codes: List[str]) -> None:
    """Reject codes repeated within the batch or already in the store"""
    if len(set(codes)) != len(codes):
        raise GiftCodeConflictError("Duplicate codes in request")
    if repository.existing_codes(codes):
        raise GiftCodeConflictError("One or more codes already exist")


class GiftCodeService:
    """Service layer for gift-code inventory"""
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = GiftCodeRepository(db)
        self.product_repository = ProductRepository(db)
    
    def get_gift_codes(self, filters: GiftCodeFilter) -> List[GiftCodeResponse]:
        return [
            GiftCodeResponse(
                id=unit.id,
                product_id=unit.product_id,
                product_name=product_name,
                code=unit.code,
                status=unit.status,
                order_id=unit.order_id,
                created_at=unit.created_at,
                redeemed_at=unit.redeemed_at
            )
            for unit, product_name in self.repository.search(filters)
        ]
    
    def add_gift_codes(self, data: GiftCodeBulkCreate) -> int:
        """
        Restock a product with new available codes
        
        Returns:
            Number of codes added
        """
        if self.product_repository.get_by_id(data.product_id) is None:
            raise ProductNotFoundError(data.product_id)
        ensure_new_codes(self.repository, data.codes)
        
        with unit_of_work(
            self.db,
            "add gift codes",
            on_conflict=lambda exc: GiftCodeConflictError("One or more codes already exist")
        ):
            added = self.repository.add_many(data.product_id, data.codes)
        
        logger.info("Restocked product %s with %s gift codes", data.product_id, added)
        return added
    
    def delete_gift_code(self, gift_code_id: int) -> None:
        """Delete an unsold code; sold or redeemed codes are kept"""
        gift_code = self.repository.get_by_id(gift_code_id)
        if gift_code is None:
            raise GiftCodeNotFoundError(gift_code_id)
        if gift_code.status == 'redeemed':
            raise GiftCodeLockedError("Cannot delete redeemed gift codes")
        if gift_code.order_id is not None:
            raise GiftCodeLockedError("Cannot delete gift codes assigned to an order")
        
        with unit_of_work(self.db, "delete gift code"):
            self.repository.delete(gift_code)
