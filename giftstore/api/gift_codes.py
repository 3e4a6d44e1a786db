"""
Gift code inventory API endpoints (admin only)
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from giftstore.api.deps import require_admin
from giftstore.database import get_db
from giftstore.models.user import User
from giftstore.services.gift_code_service import GiftCodeService
from giftstore.schemas.common import Envelope
from giftstore.schemas.gift_code import (
    GiftCodeBulkCreate,
    GiftCodeFilter,
    GiftCodeStatusLiteral,
    GiftCodeListResponse,
    GiftCodeBulkResponse
)

router = APIRouter(prefix="/gift-codes", tags=["gift-codes"], dependencies=[Depends(require_admin)])


def get_gift_code_service(db: Session = Depends(get_db)) -> GiftCodeService:
    """Dependency to get GiftCodeService instance"""
    return GiftCodeService(db)


@router.get("", response_model=GiftCodeListResponse, summary="Get gift codes")
def get_gift_codes(
    code_status: Optional[GiftCodeStatusLiteral] = Query(None, alias="status"),
    product_id: Optional[int] = Query(None, gt=0),
    service: GiftCodeService = Depends(get_gift_code_service)
):
    """
    List gift codes, newest first
    
    - **status**: available, reserved, redeemed or expired
    - **product_id**: limit to one product
    """
    codes = service.get_gift_codes(GiftCodeFilter(status=code_status, product_id=product_id))
    return GiftCodeListResponse(count=len(codes), gift_codes=codes)


@router.post("/bulk", response_model=GiftCodeBulkResponse, summary="Add gift codes")
def bulk_add_gift_codes(
    payload: GiftCodeBulkCreate,
    service: GiftCodeService = Depends(get_gift_code_service)
):
    """
    Restock a product
    
    - **product_id**: Product ID
    - **codes**: new, unique codes
    """
    added = service.add_gift_codes(payload)
    return GiftCodeBulkResponse(message=f"Successfully added {added} gift codes", count=added)


@router.delete("/{gift_code_id}", response_model=Envelope, summary="Delete gift code")
def delete_gift_code(
    gift_code_id: int,
    service: GiftCodeService = Depends(get_gift_code_service)
):
    """Delete an unsold gift code"""
    service.delete_gift_code(gift_code_id)
    return Envelope(message="Gift code deleted successfully")
