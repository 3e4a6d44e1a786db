"""
Payment API endpoints (simulated confirmation)
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from giftstore.api.deps import get_current_user
from giftstore.database import get_db
from giftstore.models.user import User
from giftstore.schemas.payment import PaymentConfirm, PaymentConfirmResponse, PaymentInfoResponse
from giftstore.services.payment_service import PaymentService

router = APIRouter(prefix="/payment", tags=["payment"])


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    """Dependency to get PaymentService instance"""
    return PaymentService(db)


@router.post("/confirm", response_model=PaymentConfirmResponse, summary="Confirm payment")
def confirm_payment(
    payload: PaymentConfirm,
    user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service)
):
    """
    Mark the caller's pending order as paid
    
    - **order_id**: Order ID
    """
    order = service.confirm_payment(payload.order_id, user.id)
    return PaymentConfirmResponse(message="Payment confirmed successfully", order=order)


@router.get("/{order_id}", response_model=PaymentInfoResponse, summary="Get payment info")
def get_payment_info(
    order_id: int,
    user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service)
):
    """Order summary for the payment page"""
    return PaymentInfoResponse(payment=service.get_payment_info(order_id, user.id))
