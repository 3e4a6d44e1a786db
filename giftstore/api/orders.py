"""
Order API endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from giftstore.api.deps import get_current_user, require_admin
from giftstore.database import get_db
from giftstore.models.user import User
from giftstore.services.order_service import OrderService
from giftstore.schemas.order import (
    OrderCreate,
    OrderStatusUpdate,
    OrderStatusLiteral,
    OrderCreatedResponse,
    OrderDetailResponse,
    OrderStatusResponse,
    OrderListResponse
)

router = APIRouter(prefix="/orders", tags=["orders"])


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(db)


@router.post("", response_model=OrderCreatedResponse, status_code=status.HTTP_201_CREATED, summary="Create order")
def create_order(
    order_data: OrderCreate,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """
    Create a new order from the caller's cart
    
    Process:
    1. Validate every product exists and is active
    2. Check available gift codes per product
    3. Calculate total price
    4. Insert order and lines, reserve gift codes (one transaction)
    
    - **items**: list of {product_id, quantity}, quantity must be positive
    """
    order = service.create_order(user.id, order_data.items)
    return OrderCreatedResponse(message="Order created successfully", order=order)


@router.get("/my-orders", response_model=OrderListResponse, summary="Get my orders")
def get_my_orders(
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """Retrieve the caller's orders, newest first"""
    orders = service.get_orders_for_user(user.id)
    return OrderListResponse(orders=orders, total=len(orders))


@router.get("", response_model=OrderListResponse, summary="Get all orders")
def get_orders(
    order_status: Optional[OrderStatusLiteral] = Query(None, alias="status", description="Filter by status"),
    skip: int = Query(0, ge=0, description="Number of orders to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of orders to return"),
    admin: User = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve all orders with pagination (admin)
    
    - **status**: optional status filter
    - **skip**: Number of orders to skip (default: 0)
    - **limit**: Maximum number of orders to return (default: 100, max: 1000)
    """
    return service.get_all_orders(status=order_status, skip=skip, limit=limit)


@router.get("/{order_id}", response_model=OrderDetailResponse, summary="Get order by ID")
def get_order(
    order_id: int,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve an order with its lines and assigned gift codes
    
    Visible to the order owner and to admins.
    """
    return OrderDetailResponse(order=service.get_order_detail(order_id, user))


@router.put("/{order_id}/status", response_model=OrderStatusResponse, summary="Update order status")
def update_order_status(
    order_id: int,
    status_data: OrderStatusUpdate,
    admin: User = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    """
    Update order status (admin)
    
    - **status**: pending -> paid | cancelled, paid -> refunded
    """
    order = service.update_order_status(order_id, status_data.status)
    return OrderStatusResponse(message="Order status updated successfully", order=order)
