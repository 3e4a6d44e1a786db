"""
Product API endpoints
"""
from decimal import Decimal
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Literal, Optional

from giftstore.api.deps import require_admin
from giftstore.database import get_db
from giftstore.models.user import User
from giftstore.services.product_service import ProductService
from giftstore.schemas.common import Envelope
from giftstore.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductFilter,
    ProductEnvelope,
    ProductCreatedResponse,
    ProductListResponse
)

router = APIRouter(prefix="/products", tags=["products"])


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Dependency to get ProductService instance"""
    return ProductService(db)


@router.get("", response_model=ProductListResponse, summary="Get products")
def get_products(
    category_id: Optional[int] = Query(None, gt=0, alias="category", description="Category ID"),
    search: Optional[str] = Query(None, max_length=255, description="Match in name or description"),
    min_price: Optional[Decimal] = Query(None, ge=0, alias="minPrice"),
    max_price: Optional[Decimal] = Query(None, ge=0, alias="maxPrice"),
    sort: Optional[Literal['price_asc', 'price_desc', 'name', 'newest']] = Query(None),
    service: ProductService = Depends(get_product_service)
):
    """
    Retrieve active products with their available stock
    
    - **category**: category filter
    - **search**: text filter
    - **minPrice** / **maxPrice**: price range
    - **sort**: price_asc, price_desc, name (default: newest first)
    """
    filters = ProductFilter(
        category_id=category_id,
        search=search,
        min_price=min_price,
        max_price=max_price,
        sort=sort
    )
    products = service.get_products(filters)
    return ProductListResponse(count=len(products), products=products)


@router.get("/{product_id}", response_model=ProductEnvelope, summary="Get product by ID")
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    """
    Retrieve a specific product by ID
    
    - **product_id**: Product ID
    """
    return ProductEnvelope(product=service.get_product(product_id))


@router.post("", response_model=ProductCreatedResponse, status_code=status.HTTP_201_CREATED, summary="Create product")
def create_product(
    product_data: ProductCreate,
    admin: User = Depends(require_admin),
    service: ProductService = Depends(get_product_service)
):
    """
    Create a new product with its first gift codes (admin)
    
    - **name**: Product name (required)
    - **price**: Unit price (required, must be positive)
    - **category_id**: Category (required)
    - **gift_codes**: At least one code (required)
    """
    product = service.create_product(product_data)
    return ProductCreatedResponse(
        message="Product created successfully",
        product=product,
        gift_codes_count=len(product_data.gift_codes)
    )


@router.put("/{product_id}", response_model=ProductEnvelope, summary="Update product")
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    admin: User = Depends(require_admin),
    service: ProductService = Depends(get_product_service)
):
    """
    Update an existing product (admin)
    
    All fields are optional. Only provided fields will be updated.
    Set **is_active** to false to take a product off sale.
    """
    product = service.update_product(product_id, product_data)
    return ProductEnvelope(message="Product updated successfully", product=product)


@router.delete("/{product_id}", response_model=Envelope, summary="Delete product")
def delete_product(
    product_id: int,
    admin: User = Depends(require_admin),
    service: ProductService = Depends(get_product_service)
):
    """Delete a product that has never been ordered (admin)"""
    service.delete_product(product_id)
    return Envelope(message="Product deleted successfully")
