"""
Product Service - Business Logic Layer
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from giftstore.repositories.category_repository import CategoryRepository
from giftstore.repositories.gift_code_repository import GiftCodeRepository
from giftstore.repositories.product_repository import ProductRepository, ProductRow
from giftstore.schemas.product import ProductCreate, ProductFilter, ProductResponse, ProductUpdate
from giftstore.services.exceptions import (
    CategoryNotFoundError,
    GiftCodeConflictError,
    ProductInUseError,
    ProductNotFoundError
)
from giftstore.services.gift_code_service import ensure_new_codes
from giftstore.services.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


def to_response(row: ProductRow) -> ProductResponse:
    product, stock, category_name = row
    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        category_id=product.category_id,
        category_name=category_name,
        image_url=product.image_url,
        is_active=product.is_active,
        stock=stock or 0,
        created_at=product.created_at,
        updated_at=product.updated_at
    )


class ProductService:
    """Service layer for product business logic"""
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = ProductRepository(db)
        self.category_repository = CategoryRepository(db)
        self.gift_code_repository = GiftCodeRepository(db)
    
    def get_products(self, filters: ProductFilter) -> List[ProductResponse]:
        """Active products matching the filters, with live stock"""
        return [to_response(row) for row in self.repository.search(filters)]
    
    def get_product(self, product_id: int) -> ProductResponse:
        row = self.repository.get_row(product_id)
        if row is None:
            raise ProductNotFoundError(product_id)
        return to_response(row)
    
    def create_product(self, data: ProductCreate) -> ProductResponse:
        """
        Create a product and its initial gift codes in one transaction
        
        Raises:
            CategoryNotFoundError: If the category does not exist
            GiftCodeConflictError: If any code is repeated or already stored
        """
        if self.category_repository.get_by_id(data.category_id) is None:
            raise CategoryNotFoundError(data.category_id)
        ensure_new_codes(self.gift_code_repository, data.gift_codes)
        
        with unit_of_work(
            self.db,
            "create product",
            on_conflict=lambda exc: GiftCodeConflictError("One or more gift codes already exist")
        ):
            product = self.repository.create(data.model_dump(exclude={"gift_codes"}))
            self.gift_code_repository.add_many(product.id, data.gift_codes)
        
        logger.info("Product %s created with %s gift codes", product.id, len(data.gift_codes))
        return self.get_product(product.id)
    
    def update_product(self, product_id: int, data: ProductUpdate) -> ProductResponse:
        """Update only the provided fields"""
        product = self.repository.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        
        changes = data.model_dump(exclude_unset=True)
        if changes.get("category_id") is not None and \
                self.category_repository.get_by_id(changes["category_id"]) is None:
            raise CategoryNotFoundError(changes["category_id"])
        # Columns below are NOT NULL; an explicit null means "leave as is"
        for field in ("name", "price", "category_id", "is_active"):
            if field in changes and changes[field] is None:
                del changes[field]
        
        with unit_of_work(self.db, "update product"):
            self.repository.update(product, changes)
        
        if "is_active" in changes:
            logger.info("Product %s active=%s", product_id, changes["is_active"])
        return self.get_product(product_id)
    
    def delete_product(self, product_id: int) -> None:
        """
        Delete a product that was never ordered, together with its unsold codes
        
        Raises:
            ProductNotFoundError: If the product does not exist
            ProductInUseError: If any order line references it
        """
        product = self.repository.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        if self.repository.has_orders(product_id):
            raise ProductInUseError("Cannot delete product with existing orders")
        
        with unit_of_work(self.db, "delete product"):
            removed = self.gift_code_repository.delete_unsold_for_product(product_id)
            self.repository.delete(product)
        logger.info("Product %s deleted along with %s gift codes", product_id, removed)
