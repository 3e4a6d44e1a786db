"""
Product Repository - Data Access Layer
"""
from typing import List, Optional, Tuple
from sqlalchemy import select, func, or_, asc, desc
from sqlalchemy.orm import Session

from giftstore.models.category import Category
from giftstore.models.gift_code import GiftCode
from giftstore.models.order import OrderItem
from giftstore.models.product import Product
from giftstore.repositories.filters import PredicateBuilder
from giftstore.schemas.product import ProductFilter


# (product, stock, category name)
ProductRow = Tuple[Product, int, Optional[str]]

SORT_ORDERS = {
    'price_asc': (asc(Product.price), asc(Product.id)),
    'price_desc': (desc(Product.price), asc(Product.id)),
    'name': (asc(Product.name), asc(Product.id)),
    'newest': (desc(Product.created_at), desc(Product.id)),
}


def available_stock_column():
    """Correlated count of unsold, unowned gift codes per product"""
    return (
        select(func.count(GiftCode.id))
        .where(
            GiftCode.product_id == Product.id,
            GiftCode.status == 'available',
            GiftCode.order_id.is_(None)
        )
        .correlate(Product)
        .scalar_subquery()
        .label("stock")
    )


class ProductRepository:
    """Repository for Product CRUD operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def _rows(self):
        return self.db.query(
            Product, available_stock_column(), Category.name
        ).outerjoin(Category, Product.category_id == Category.id)
    
    def search(self, filters: ProductFilter) -> List[ProductRow]:
        """List active products matching the supplied filters"""
        builder = (
            PredicateBuilder()
            .always(Product.is_active.is_(True))
            .when(filters.category_id, lambda v: Product.category_id == v)
            .when(filters.search, lambda v: or_(
                Product.name.icontains(v.strip(), autoescape=True),
                Product.description.icontains(v.strip(), autoescape=True)
            ))
            .when(filters.min_price, lambda v: Product.price >= v)
            .when(filters.max_price, lambda v: Product.price <= v)
        )
        query = builder.apply(self._rows())
        return query.order_by(*SORT_ORDERS[filters.sort or 'newest']).all()
    
    def get_row(self, product_id: int) -> Optional[ProductRow]:
        """Get product by ID with its stock and category name"""
        return self._rows().filter(Product.id == product_id).first()
    
    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Get product by ID"""
        return self.db.query(Product).filter(Product.id == product_id).first()
    
    def count_available(self, product_id: int) -> int:
        """Count gift codes that can still be sold for the product"""
        return self.db.query(func.count(GiftCode.id)).filter(
            GiftCode.product_id == product_id,
            GiftCode.status == 'available',
            GiftCode.order_id.is_(None)
        ).scalar()
    
    def create(self, product_data: dict) -> Product:
        product = Product(**product_data)
        self.db.add(product)
        self.db.flush()
        return product
    
    def update(self, product: Product, changes: dict) -> Product:
        """Apply only the provided fields"""
        for field, value in changes.items():
            setattr(product, field, value)
        self.db.flush()
        return product
    
    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.flush()
    
    def has_orders(self, product_id: int) -> bool:
        return self.db.query(OrderItem.id).filter(
            OrderItem.product_id == product_id
        ).first() is not None
