from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FILE"] = ""
os.environ["ENV"] = "test"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.pop("ALLOW_OVERPAYMENT", None)

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth.jwt import create_token_pair
from app.core.config import get_config
from app.core.dependencies import get_db_session
from app.database.db import build_engine
from app.models import Base
from app.services.customer_service import CustomerService
from app.services.product_service import ProductService


@pytest.fixture
def session_factory():
    engine = build_engine("sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    yield TestingSessionLocal
    engine.dispose()


@pytest.fixture
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def customer(session):
    return CustomerService(db=session).create_customer(name="Sharma Traders", phone="9820000000")


@pytest.fixture
def product(session):
    return ProductService(db=session).create_product(name="Steel Bottle", price=Decimal("100.00"), gst_rate=18)


@pytest.fixture
def auth_header():
    def _build(role: str = "admin", user_id: int = 1, email: str = "owner@example.com") -> dict[str, str]:
        cfg = get_config()
        tokens = create_token_pair(
            user_id=user_id,
            email=email,
            role=role,
            secret=cfg.JWT_SECRET,
            permissions_version=cfg.JWT_PERMISSIONS_VERSION,
        )
        return {"Authorization": f"Bearer {tokens.access_token}"}

    return _build


@pytest.fixture
def client(session_factory):
    from app.main import create_app

    app = create_app()

    def _override_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db_session] = _override_db
    return TestClient(app)
