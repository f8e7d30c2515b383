from __future__ import annotations

import os

# Settings are read once (lru_cache); configure before anything imports app.*
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["ORDER_HASH_SECRET"] = "test-order-hash-secret"
os.environ["JWT_EXPIRY_MINUTES"] = "60"
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.core.rate_limit import limiter
from app.database import get_session
from app.main import app
from app.models.product import Product


@pytest.fixture(autouse=True)
def reset_rate_limits():
    # Limiter counters live in process memory and would leak across tests
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture()
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture()
def client(engine):
    def _get_test_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _get_test_session
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def catalog(session) -> dict[str, Product]:
    rows = [
        Product(product_code="A1", product_name="Linen Shirt", product_price=800, product_imageurl="https://cdn.test/a1.jpg"),
        Product(product_code="B2", product_name="Denim Jacket", product_price=500, product_imageurl="https://cdn.test/b2.jpg"),
        Product(product_code="C3", product_name="Silk Scarf", product_price=120.5, product_imageurl=None),
        Product(product_code="NOPRICE", product_name="Sample", product_price=None),
    ]
    session.add_all(rows)
    session.commit()
    for p in rows:
        session.refresh(p)
    return {p.product_code: p for p in rows}


@pytest.fixture()
def token(client) -> str:
    resp = client.post("/api/get-token")
    assert resp.status_code == 200
    return resp.json()["token"]


@pytest.fixture()
def auth_headers(token) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
