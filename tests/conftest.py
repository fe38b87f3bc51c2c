import os

# Must be set before order_service.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_orders.db")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from order_service.main import app as fastapi_app
from order_service.database import Base
from order_service.dependencies import get_gateway

SQLALCHEMY_DATABASE_URL = "sqlite:///./test_orders.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={
                       "check_same_thread": False})
TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db():
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def gateway(mocker):
    return mocker.Mock()


@pytest.fixture
def client(monkeypatch, gateway):
    # Route every request to the test database and the fake gateway
    monkeypatch.setattr("order_service.dependencies.SessionLocal", TestingSessionLocal)
    fastapi_app.dependency_overrides[get_gateway] = lambda: gateway
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def session_factory():
    return TestingSessionLocal
