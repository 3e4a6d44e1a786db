"""
Category API endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from giftstore.api.deps import require_admin
from giftstore.database import get_db
from giftstore.models.user import User
from giftstore.services.category_service import CategoryService
from giftstore.schemas.common import Envelope
from giftstore.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryEnvelope,
    CategoryListResponse
)

router = APIRouter(prefix="/categories", tags=["categories"])


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    """Dependency to get CategoryService instance"""
    return CategoryService(db)


@router.get("", response_model=CategoryListResponse, summary="Get all categories")
def get_categories(service: CategoryService = Depends(get_category_service)):
    categories = service.get_all_categories()
    return CategoryListResponse(count=len(categories), categories=categories)


@router.get("/{category_id}", response_model=CategoryEnvelope, summary="Get category by ID")
def get_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    return CategoryEnvelope(category=service.get_category(category_id))


@router.post("", response_model=CategoryEnvelope, status_code=status.HTTP_201_CREATED, summary="Create category")
def create_category(
    category_data: CategoryCreate,
    admin: User = Depends(require_admin),
    service: CategoryService = Depends(get_category_service)
):
    """
    Create a category (admin)
    
    - **name**: unique category name
    """
    category = service.create_category(category_data)
    return CategoryEnvelope(message="Category created successfully", category=category)


@router.put("/{category_id}", response_model=CategoryEnvelope, summary="Update category")
def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    admin: User = Depends(require_admin),
    service: CategoryService = Depends(get_category_service)
):
    category = service.update_category(category_id, category_data)
    return CategoryEnvelope(message="Category updated successfully", category=category)


@router.delete("/{category_id}", response_model=Envelope, summary="Delete category")
def delete_category(
    category_id: int,
    admin: User = Depends(require_admin),
    service: CategoryService = Depends(get_category_service)
):
    """Delete a category no product uses (admin)"""
    service.delete_category(category_id)
    return Envelope(message="Category deleted successfully")
