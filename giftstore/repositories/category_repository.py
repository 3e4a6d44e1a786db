"""
Category Repository - Data Access Layer
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from giftstore.models.category import Category
from giftstore.models.product import Product


class CategoryRepository:
    """Repository for Category CRUD operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_all(self) -> List[Category]:
        """Get all categories ordered by name"""
        return self.db.query(Category).order_by(Category.name).all()
    
    def get_by_id(self, category_id: int) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()
    
    def get_by_name(self, name: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.name == name).first()
    
    def create(self, name: str) -> Category:
        category = Category(name=name)
        self.db.add(category)
        self.db.flush()
        return category
    
    def rename(self, category: Category, name: str) -> Category:
        category.name = name
        self.db.flush()
        return category
    
    def delete(self, category: Category) -> None:
        self.db.delete(category)
        self.db.flush()
    
    def has_products(self, category_id: int) -> bool:
        """Check if any product (active or not) references the category"""
        return self.db.query(Product.id).filter(
            Product.category_id == category_id
        ).first() is not None
