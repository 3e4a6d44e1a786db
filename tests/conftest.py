"""
Shared fixtures: a fresh SQLite database per test, seed helpers, API client
"""
import itertools
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from giftstore.auth import create_access_token
from giftstore.database import Base, create_db_engine, get_db, make_session_factory
from giftstore.main import app
from giftstore.models import Category, GiftCode, Product, User


class Seed:
    """Small factory for test data; every helper commits"""
    
    def __init__(self, db):
        self.db = db
        self._seq = itertools.count(1)
    
    def user(self, role="user", name=None):
        n = next(self._seq)
        user = User(name=name or f"user{n}", email=f"user{n}@example.com", role=role)
        self.db.add(user)
        self.db.commit()
        return user
    
    def admin(self):
        return self.user(role="admin")
    
    def category(self, name=None):
        category = Category(name=name or f"Category {next(self._seq)}")
        self.db.add(category)
        self.db.commit()
        return category
    
    def product(self, price="100.00", codes=0, active=True, category=None, name=None):
        category = category or self.category()
        product = Product(
            name=name or f"Gift Card {next(self._seq)}",
            description="Digital gift card",
            price=Decimal(price),
            category_id=category.id,
            is_active=active
        )
        self.db.add(product)
        self.db.commit()
        if codes:
            self.codes(product, codes)
        return product
    
    def codes(self, product, count, created_at=None):
        units = []
        for _ in range(count):
            unit = GiftCode(
                product_id=product.id,
                code=f"P{product.id}-{next(self._seq):05d}",
                status="available"
            )
            if created_at is not None:
                unit.created_at = created_at
            units.append(unit)
        self.db.add_all(units)
        self.db.commit()
        return units


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


def snapshot(db):
    """Full contents of every table the order flow can touch"""
    db.expire_all()
    tables = ("orders", "order_items", "gift_codes", "payments")
    return {
        table: db.execute(text(f"SELECT * FROM {table} ORDER BY id")).all()
        for table in tables
    }


def available_count(db, product_id):
    return db.execute(
        text("SELECT COUNT(*) FROM gift_codes WHERE product_id = :p AND status = 'available' AND order_id IS NULL"),
        {"p": product_id}
    ).scalar()


def now_utc():
    return datetime.now(timezone.utc)


@pytest.fixture
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'giftstore_test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seed(db):
    return Seed(db)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()
    
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
