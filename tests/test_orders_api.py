"""
Order endpoints
"""
from giftstore.models import GiftCode, Order
from giftstore.services.order_service import OrderService

from tests.conftest import auth_headers, available_count, snapshot


def place_order(client, user, items):
    return client.post("/orders", json={"items": items}, headers=auth_headers(user))


def test_create_order_returns_pending_summary(client, db, seed):
    user = seed.user()
    product = seed.product(price="100.00", codes=3)
    
    response = place_order(client, user, [{"product_id": product.id, "quantity": 2}])
    
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["order"]["status"] == "pending"
    assert body["order"]["total_price"] == 200.0
    assert isinstance(body["order"]["order_id"], int)
    assert available_count(db, product.id) == 1


def test_create_order_requires_token(client, seed):
    product = seed.product(codes=1)
    
    response = client.post("/orders", json={"items": [{"product_id": product.id, "quantity": 1}]})
    
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_create_order_rejects_unknown_user_token(client, seed):
    ghost = seed.user()
    headers = auth_headers(ghost)
    seed.db.delete(ghost)
    seed.db.commit()
    
    response = client.post("/orders", json={"items": [{"product_id": 1, "quantity": 1}]}, headers=headers)
    
    assert response.status_code == 401
    assert response.json()["message"] == "User not found"


def test_invalid_token_rejected(client):
    response = client.get("/orders/my-orders", headers={"Authorization": "Bearer not-a-token"})
    
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Not authorized, token failed"}


def test_empty_cart_is_400(client, db, seed):
    user = seed.user()
    before = snapshot(db)
    
    response = place_order(client, user, [])
    
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert snapshot(db) == before


def test_zero_quantity_is_400(client, db, seed):
    user = seed.user()
    product = seed.product(codes=3)
    before = snapshot(db)
    
    response = place_order(client, user, [
        {"product_id": product.id, "quantity": 1},
        {"product_id": product.id, "quantity": 0},
    ])
    
    assert response.status_code == 400
    assert snapshot(db) == before


def test_unknown_cart_fields_are_400(client, db, seed):
    user = seed.user()
    product = seed.product(price="100.00", codes=3)
    before = snapshot(db)
    
    response = place_order(client, user, [
        {"product_id": product.id, "quantity": 1, "unit_price": "0.01"},
    ])
    
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert snapshot(db) == before
    assert available_count(db, product.id) == 3


def test_total_above_column_limit_is_400(client, db, seed):
    user = seed.user()
    product = seed.product(price="99999999.99", codes=2)
    before = snapshot(db)
    
    response = place_order(client, user, [{"product_id": product.id, "quantity": 2}])
    
    assert response.status_code == 400
    assert "exceeds the maximum" in response.json()["message"]
    assert snapshot(db) == before
    assert available_count(db, product.id) == 2


def test_inactive_product_in_cart_rejects_order(client, db, seed):
    user = seed.user()
    valid = seed.product(codes=3)
    retired = seed.product(codes=3, active=False)
    before = snapshot(db)
    
    response = place_order(client, user, [
        {"product_id": valid.id, "quantity": 1},
        {"product_id": retired.id, "quantity": 1},
    ])
    
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert snapshot(db) == before


def test_unknown_product_is_404(client, seed):
    user = seed.user()
    
    response = place_order(client, user, [{"product_id": 4242, "quantity": 1}])
    
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Product 4242 not found"}


def test_insufficient_stock_is_409(client, db, seed):
    user = seed.user()
    product = seed.product(codes=1, name="Netflix 300")
    
    response = place_order(client, user, [{"product_id": product.id, "quantity": 2}])
    
    assert response.status_code == 409
    assert "Netflix 300" in response.json()["message"]
    assert db.query(Order).count() == 0


def test_order_detail_lists_codes_per_line(client, db, seed):
    user = seed.user()
    first = seed.product(price="100.00", codes=3)
    second = seed.product(price="25.50", codes=2)
    order_id = place_order(client, user, [
        {"product_id": first.id, "quantity": 2},
        {"product_id": second.id, "quantity": 1},
    ]).json()["order"]["order_id"]
    
    response = client.get(f"/orders/{order_id}", headers=auth_headers(user))
    
    assert response.status_code == 200
    order = response.json()["order"]
    assert order["total_price"] == 225.5
    lines = {item["product_id"]: item for item in order["items"]}
    assert lines[first.id]["subtotal"] == 200.0
    assert len(lines[first.id]["gift_codes"]) == 2
    assert len(lines[second.id]["gift_codes"]) == 1
    assert lines[second.id]["product_name"] == second.name
    
    db.expire_all()
    stored = {u.code for u in db.query(GiftCode).filter(GiftCode.order_id == order_id)}
    returned = {c["code"] for item in order["items"] for c in item["gift_codes"]}
    assert returned == stored


def test_order_detail_is_stable_across_reads(client, seed):
    user = seed.user()
    product = seed.product(codes=2)
    order_id = place_order(client, user, [{"product_id": product.id, "quantity": 1}]).json()["order"]["order_id"]
    
    first = client.get(f"/orders/{order_id}", headers=auth_headers(user)).json()
    second = client.get(f"/orders/{order_id}", headers=auth_headers(user)).json()
    
    assert first == second


def test_order_detail_hidden_from_other_users(client, seed):
    owner, stranger, admin = seed.user(), seed.user(), seed.admin()
    product = seed.product(codes=2)
    order_id = place_order(client, owner, [{"product_id": product.id, "quantity": 1}]).json()["order"]["order_id"]
    
    assert client.get(f"/orders/{order_id}", headers=auth_headers(stranger)).status_code == 404
    assert client.get(f"/orders/{order_id}", headers=auth_headers(admin)).status_code == 200


def test_my_orders_lists_only_callers_orders(client, seed):
    me, other = seed.user(), seed.user()
    product = seed.product(codes=5)
    place_order(client, me, [{"product_id": product.id, "quantity": 1}])
    place_order(client, me, [{"product_id": product.id, "quantity": 2}])
    place_order(client, other, [{"product_id": product.id, "quantity": 1}])
    
    response = client.get("/orders/my-orders", headers=auth_headers(me))
    
    body = response.json()
    assert body["total"] == 2
    assert {o["user_id"] for o in body["orders"]} == {me.id}
    assert all(o["items_count"] == 1 for o in body["orders"])


def test_all_orders_is_admin_only(client, seed):
    user, admin = seed.user(), seed.admin()
    product = seed.product(codes=3)
    place_order(client, user, [{"product_id": product.id, "quantity": 1}])
    
    assert client.get("/orders", headers=auth_headers(user)).status_code == 403
    
    body = client.get("/orders", headers=auth_headers(admin)).json()
    assert body["total"] == 1
    assert body["orders"][0]["user_email"] == user.email
    
    filtered = client.get("/orders", params={"status": "paid"}, headers=auth_headers(admin)).json()
    assert filtered["total"] == 0
    assert filtered["orders"] == []


def test_admin_status_transitions(client, seed):
    user, admin = seed.user(), seed.admin()
    product = seed.product(codes=3)
    order_id = place_order(client, user, [{"product_id": product.id, "quantity": 1}]).json()["order"]["order_id"]
    
    def set_status(status):
        return client.put(f"/orders/{order_id}/status", json={"status": status}, headers=auth_headers(admin))
    
    assert set_status("refunded").status_code == 400
    paid = set_status("paid")
    assert paid.status_code == 200
    assert paid.json()["order"]["status"] == "paid"
    assert set_status("pending").status_code == 400
    assert set_status("cancelled").status_code == 400
    assert set_status("refunded").json()["order"]["status"] == "refunded"


def test_status_update_rejects_unknown_status(client, seed):
    admin = seed.admin()
    
    response = client.put("/orders/1/status", json={"status": "shipped"}, headers=auth_headers(admin))
    
    assert response.status_code == 400


def test_status_update_on_missing_order_is_404(client, seed):
    admin = seed.admin()
    
    response = client.put("/orders/99/status", json={"status": "paid"}, headers=auth_headers(admin))
    
    assert response.status_code == 404


def test_cancelled_order_keeps_codes_by_default(db, seed):
    user = seed.user()
    product = seed.product(codes=2)
    service = OrderService(db, release_codes_on_cancel=False)
    order_id = service.create_order(user.id, [(product.id, 2)]).order_id
    
    service.update_order_status(order_id, "cancelled")
    
    assert available_count(db, product.id) == 0
    db.expire_all()
    assert db.query(GiftCode).filter(GiftCode.order_id == order_id).count() == 2


def test_cancel_can_release_codes_when_enabled(db, seed):
    user = seed.user()
    product = seed.product(codes=2)
    service = OrderService(db, release_codes_on_cancel=True)
    order_id = service.create_order(user.id, [(product.id, 2)]).order_id
    
    summary = service.update_order_status(order_id, "cancelled")
    
    assert summary.status == "cancelled"
    assert available_count(db, product.id) == 2
