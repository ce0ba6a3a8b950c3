"""
Test configuration and shared fixtures for the eshop test suite.
Provides database setup, the reference dataset and an API test client.
"""

import pytest
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from eshop.app import create_app
from eshop.core.database import Base, create_sample_data, get_db
from eshop.query.engine import OrderSearchEngine


# ===== DATABASE SETUP =====

@pytest.fixture(scope="session")
def shop_engine():
    """Create in-memory SQLite engine for the shop database"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    # Import all shop models to register them
    from eshop.shop.models import Customer, Order, OrderItem, Payment, Product  # noqa: F401
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture(scope="function")
def db_session(shop_engine) -> Generator[Session, None, None]:
    """Create an empty database session"""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=shop_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()  # Rollback any uncommitted changes
        session.close()
        # Clean up all data after each test
        Base.metadata.drop_all(bind=shop_engine)
        Base.metadata.create_all(bind=shop_engine)


# ===== SAMPLE DATA FIXTURES =====

@pytest.fixture
def sample_data(db_session) -> Session:
    """Seed the reference dataset: 2 customers, 3 products, 3 orders, 4 items, 2 payments"""
    create_sample_data(db_session)
    return db_session


@pytest.fixture
def search_engine(sample_data) -> OrderSearchEngine:
    """Order search engine over the reference dataset"""
    return OrderSearchEngine(sample_data)


# ===== API CLIENT =====

@pytest.fixture
def client(sample_data):
    """Create FastAPI test client with database overrides"""
    app = create_app(init_db=False)

    def override_get_db():
        try:
            yield sample_data
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()
