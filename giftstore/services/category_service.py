"""
Category Service - Business Logic Layer
"""
from typing import List

from sqlalchemy.orm import Session

from giftstore.repositories.category_repository import CategoryRepository
from giftstore.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from giftstore.services.exceptions import CategoryConflictError, CategoryNotFoundError
from giftstore.services.unit_of_work import unit_of_work


def _duplicate_name(exc) -> CategoryConflictError:
    return CategoryConflictError("Category already exists")


class CategoryService:
    """Service layer for category business logic"""
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = CategoryRepository(db)
    
    def get_all_categories(self) -> List[CategoryResponse]:
        return [CategoryResponse.model_validate(c) for c in self.repository.get_all()]
    
    def get_category(self, category_id: int) -> CategoryResponse:
        category = self.repository.get_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return CategoryResponse.model_validate(category)
    
    def create_category(self, data: CategoryCreate) -> CategoryResponse:
        if self.repository.get_by_name(data.name):
            raise CategoryConflictError("Category already exists")
        with unit_of_work(self.db, "create category", on_conflict=_duplicate_name):
            category = self.repository.create(data.name)
        return CategoryResponse.model_validate(category)
    
    def update_category(self, category_id: int, data: CategoryUpdate) -> CategoryResponse:
        category = self.repository.get_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        existing = self.repository.get_by_name(data.name)
        if existing is not None and existing.id != category_id:
            raise CategoryConflictError("Category already exists")
        with unit_of_work(self.db, "update category", on_conflict=_duplicate_name):
            self.repository.rename(category, data.name)
        return CategoryResponse.model_validate(category)
    
    def delete_category(self, category_id: int) -> None:
        """Delete a category that no product references"""
        category = self.repository.get_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        if self.repository.has_products(category_id):
            raise CategoryConflictError("Cannot delete category with existing products")
        with unit_of_work(self.db, "delete category"):
            self.repository.delete(category)
