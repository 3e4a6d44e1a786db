"""
Order creation: validation, pricing, reservation and all-or-nothing rollback
"""
from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from giftstore.models import GiftCode, Order
from giftstore.repositories.gift_code_repository import GiftCodeRepository
from giftstore.repositories.order_repository import OrderRepository
from giftstore.repositories.product_repository import ProductRepository
from giftstore.schemas.order import CartItem
from giftstore.services import exceptions
from giftstore.services.order_service import OrderService, normalize_cart

from tests.conftest import available_count, now_utc, snapshot


def test_order_reserves_requested_codes(db, seed):
    user = seed.user()
    product = seed.product(price="100.00", codes=3)
    
    summary = OrderService(db).create_order(user.id, [CartItem(product_id=product.id, quantity=2)])
    
    assert summary.status == "pending"
    assert summary.total_price == Decimal("200.00")
    db.expire_all()
    reserved = db.query(GiftCode).filter(GiftCode.order_id == summary.order_id).all()
    assert len(reserved) == 2
    assert all(unit.status == "reserved" for unit in reserved)
    assert available_count(db, product.id) == 1
    
    order = db.get(Order, summary.order_id)
    assert order.user_id == user.id
    assert [(item.product_id, item.quantity, item.subtotal) for item in order.items] == [
        (product.id, 2, Decimal("200.00"))
    ]


def test_total_uses_decimal_arithmetic(db, seed):
    user = seed.user()
    first = seed.product(price="19.99", codes=3)
    second = seed.product(price="0.10", codes=3)
    
    summary = OrderService(db).create_order(user.id, [(first.id, 3), (second.id, 3)])
    
    assert summary.total_price == Decimal("60.27")


def test_oldest_codes_are_reserved_first(db, seed):
    user = seed.user()
    product = seed.product(codes=0)
    now = now_utc()
    newest = seed.codes(product, 1, created_at=now)[0]
    oldest = seed.codes(product, 1, created_at=now - timedelta(days=2))[0]
    middle = seed.codes(product, 1, created_at=now - timedelta(days=1))[0]
    
    summary = OrderService(db).create_order(user.id, [(product.id, 2)])
    
    db.expire_all()
    taken = {u.id for u in db.query(GiftCode).filter(GiftCode.order_id == summary.order_id)}
    assert taken == {oldest.id, middle.id}
    assert db.get(GiftCode, newest.id).status == "available"


def test_repeated_product_lines_are_merged(db, seed):
    user = seed.user()
    product = seed.product(price="50.00", codes=3)
    
    summary = OrderService(db).create_order(user.id, [(product.id, 1), (product.id, 2)])
    
    order = db.get(Order, summary.order_id)
    assert len(order.items) == 1
    assert order.items[0].quantity == 3
    assert summary.total_price == Decimal("150.00")
    assert available_count(db, product.id) == 0


@pytest.mark.parametrize("items", [
    [],
    [(1, 0)],
    [(1, -2)],
    [(0, 1)],
    [(1, 1), (2, 0)],
])
def test_malformed_cart_rejected_before_store_access(items):
    db = MagicMock(spec=Session)
    
    with pytest.raises(exceptions.ValidationError):
        OrderService(db).create_order(1, items)
    
    assert db.method_calls == []


def test_normalize_cart_keeps_first_appearance_order():
    assert normalize_cart([(3, 1), (1, 2), (3, 4)]) == [(3, 5), (1, 2)]


def test_missing_product_rejects_whole_order(db, seed):
    user = seed.user()
    valid = seed.product(codes=5)
    before = snapshot(db)
    
    with pytest.raises(exceptions.ProductNotFoundError) as exc_info:
        OrderService(db).create_order(user.id, [(valid.id, 1), (9999, 1)])
    
    assert exc_info.value.product_id == 9999
    assert snapshot(db) == before


def test_inactive_product_rejects_whole_order(db, seed):
    user = seed.user()
    valid = seed.product(codes=5)
    retired = seed.product(codes=5, active=False)
    before = snapshot(db)
    
    with pytest.raises(exceptions.ProductInactiveError) as exc_info:
        OrderService(db).create_order(user.id, [(valid.id, 2), (retired.id, 1)])
    
    assert exc_info.value.product_id == retired.id
    assert snapshot(db) == before


def test_insufficient_stock_reports_available_count(db, seed):
    user = seed.user()
    product = seed.product(codes=2, name="Steam 500")
    before = snapshot(db)
    
    with pytest.raises(exceptions.InsufficientStockError) as exc_info:
        OrderService(db).create_order(user.id, [(product.id, 3)])
    
    assert exc_info.value.available == 2
    assert exc_info.value.requested == 3
    assert "Steam 500" in exc_info.value.message
    assert snapshot(db) == before


def test_sold_codes_do_not_count_as_stock(db, seed):
    user = seed.user()
    product = seed.product(codes=2)
    service = OrderService(db)
    service.create_order(user.id, [(product.id, 2)])
    
    with pytest.raises(exceptions.InsufficientStockError):
        service.create_order(user.id, [(product.id, 1)])


def test_stock_lost_after_validation_rolls_back_everything(db, seed, monkeypatch):
    """Pre-check passes, then a concurrent buyer takes the codes before the claim"""
    user = seed.user()
    first = seed.product(codes=2)
    second = seed.product(codes=1)
    before = snapshot(db)
    
    original_reserve = GiftCodeRepository.reserve
    
    def reserve_after_competitor(self, product_id, quantity, order_id):
        if product_id == second.id:
            # competitor's sale, visible by the time this line is claimed
            self.db.query(GiftCode).filter(GiftCode.product_id == second.id).update(
                {"status": "redeemed"}, synchronize_session=False
            )
        return original_reserve(self, product_id, quantity, order_id)
    
    monkeypatch.setattr(GiftCodeRepository, "reserve", reserve_after_competitor)
    
    with pytest.raises(exceptions.InsufficientStockError) as exc_info:
        OrderService(db).create_order(user.id, [(first.id, 2), (second.id, 1)])
    
    assert exc_info.value.product_id == second.id
    assert exc_info.value.available == 0
    assert snapshot(db) == before


def test_commit_time_recheck_catches_stale_count(db, seed, monkeypatch):
    user = seed.user()
    product = seed.product(codes=1)
    before = snapshot(db)
    monkeypatch.setattr(ProductRepository, "count_available", lambda self, product_id: 10)
    
    with pytest.raises(exceptions.InsufficientStockError) as exc_info:
        OrderService(db).create_order(user.id, [(product.id, 3)])
    
    assert exc_info.value.available == 1
    assert snapshot(db) == before


def test_store_error_during_commit_becomes_transaction_failure(db, seed, monkeypatch):
    user = seed.user()
    first = seed.product(codes=2)
    second = seed.product(codes=2)
    before = snapshot(db)
    original_add_item = OrderRepository.add_item
    
    def failing_add_item(self, order_id, product_id, quantity, unit_price):
        if product_id == second.id:
            raise OperationalError("INSERT INTO order_items", {}, Exception("connection lost"))
        return original_add_item(self, order_id, product_id, quantity, unit_price)
    
    monkeypatch.setattr(OrderRepository, "add_item", failing_add_item)
    
    with pytest.raises(exceptions.TransactionFailureError):
        OrderService(db).create_order(user.id, [(first.id, 1), (second.id, 1)])
    
    assert snapshot(db) == before


def test_codes_are_never_shared_between_orders(db, seed):
    buyers = [seed.user() for _ in range(3)]
    product = seed.product(codes=6)
    service = OrderService(db)
    
    order_ids = [service.create_order(b.id, [(product.id, 2)]).order_id for b in buyers]
    
    db.expire_all()
    owners = {}
    for unit in db.query(GiftCode).filter(GiftCode.product_id == product.id):
        assert unit.order_id in order_ids
        owners.setdefault(unit.order_id, set()).add(unit.code)
    assert [len(owners[oid]) for oid in order_ids] == [2, 2, 2]
    all_codes = [c for codes in owners.values() for c in codes]
    assert len(all_codes) == len(set(all_codes))
