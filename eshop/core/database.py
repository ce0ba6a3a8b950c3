# eshop/core/database.py
"""Database configuration, session generator and reference data seeding."""

import logging
import os
from datetime import date, datetime
from decimal import Decimal

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./eshop.db")

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# ===== SESSION GENERATORS =====


def get_db():
    """Get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ===== TABLE CREATION =====


def create_all_tables(bind=None):
    """Create all shop tables."""
    # Import models to ensure they're registered with Base
    from eshop.shop.models import Customer, Order, OrderItem, Payment, Product  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Shop tables created")


def drop_all_tables(bind=None):
    """Drop all shop tables (use with caution!)."""
    from eshop.shop.models import Customer, Order, OrderItem, Payment, Product  # noqa: F401

    Base.metadata.drop_all(bind=bind or engine)
    logger.info("Shop tables dropped")


# ===== SAMPLE DATA CREATION =====


def create_sample_data(db=None):
    """Seed the reference dataset: two customers, three products, three orders, two payments.

    Order 2 has no payment row, which makes it the reference "unpaid" order.
    """
    from eshop.shop.mapping import record_from_schema
    from eshop.shop.models import (
        Customer, Order, OrderItem, OrderStatus, Payment, PaymentMethod, PaymentStatus, Product,
    )
    from eshop.shop.schemas import (
        CustomerCreate, OrderCreate, OrderItemCreate, PaymentCreate, ProductCreate,
    )

    owns_session = db is None
    db = db or SessionLocal()

    try:
        if db.query(Order).count() > 0:
            logger.info("Sample data already exists. Skipping creation.")
            return

        customers = [
            CustomerCreate(id=1, name="John Doe", email="john@example.com",
                           address="123 Main St, Seoul", registered_date=date(2024, 1, 1)),
            CustomerCreate(id=2, name="Jane Smith", email="jane@example.com",
                           address="456 Oak Ave, Busan", registered_date=date(2024, 6, 1)),
        ]
        products = [
            ProductCreate(id=1, name="Laptop", price=Decimal("1000.00"), stock=10, category="Electronics"),
            ProductCreate(id=2, name="Mouse", price=Decimal("50.00"), stock=100, category="Electronics"),
            ProductCreate(id=3, name="Book", price=Decimal("30.00"), stock=50, category="Books"),
        ]
        orders = [
            OrderCreate(id=1, customer_id=1, order_date=datetime(2024, 10, 1, 10, 0),
                        total_amount=Decimal("1050.00"), status=OrderStatus.DELIVERED),
            OrderCreate(id=2, customer_id=2, order_date=datetime(2024, 10, 15, 14, 30),
                        total_amount=Decimal("30.00"), status=OrderStatus.PENDING),
            OrderCreate(id=3, customer_id=1, order_date=datetime(2024, 11, 1, 9, 15),
                        total_amount=Decimal("50.00"), status=OrderStatus.DELIVERED),
        ]
        items = [
            OrderItemCreate(id=1, order_id=1, product_id=1, quantity=1, price=Decimal("1000.00")),
            OrderItemCreate(id=2, order_id=1, product_id=2, quantity=1, price=Decimal("50.00")),
            OrderItemCreate(id=3, order_id=2, product_id=3, quantity=1, price=Decimal("30.00")),
            OrderItemCreate(id=4, order_id=3, product_id=2, quantity=1, price=Decimal("50.00")),
        ]
        # Order 2 stays unpaid
        payments = [
            PaymentCreate(id=1, order_id=1, amount=Decimal("1050.00"), payment_date=datetime(2024, 10, 1, 10, 5),
                          method=PaymentMethod.CREDIT_CARD, status=PaymentStatus.COMPLETED),
            PaymentCreate(id=3, order_id=3, amount=Decimal("50.00"), payment_date=datetime(2024, 11, 1, 9, 20),
                          method=PaymentMethod.BANK_TRANSFER, status=PaymentStatus.COMPLETED),
        ]

        for model, rows in ((Customer, customers), (Product, products), (Order, orders),
                            (OrderItem, items), (Payment, payments)):
            db.add_all([record_from_schema(model, row) for row in rows])
            db.flush()

        db.commit()
        logger.info("Sample data created: 2 customers, 3 products, 3 orders, 4 order items, 2 payments")

    except Exception:
        db.rollback()
        logger.exception("Error creating sample data")
        raise

    finally:
        if owns_session:
            db.close()


# ===== INITIALIZATION FUNCTION =====


def initialize_database(force_recreate: bool = False, seed: bool = False):
    """Create tables and optionally seed the reference dataset."""
    if force_recreate:
        logger.warning("Force recreate mode: dropping existing tables")
        drop_all_tables()

    create_all_tables()

    if seed:
        create_sample_data()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    initialize_database(seed=True)
