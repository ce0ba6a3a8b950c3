"""Data Access Objects for the shop tables."""

import logging
from typing import Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from eshop.core.base_dao import BaseDAO
from eshop.shop.mapping import order_from_row, to_enum, to_optional_enum
from eshop.shop.models import (
    Customer,
    Order,
    OrderItem,
    OrderStatus,
    Payment,
    PaymentStatus,
    Product,
)
from eshop.shop.schemas import OrderWithCustomer, OrderWithDetails

logger = logging.getLogger(__name__)


class CustomerDAO(BaseDAO[Customer]):
    def __init__(self, db: Session):
        super().__init__(Customer, db)


class ProductDAO(BaseDAO[Product]):
    def __init__(self, db: Session):
        super().__init__(Product, db)


class OrderDAO(BaseDAO[Order]):
    def __init__(self, db: Session):
        super().__init__(Order, db)


class OrderItemDAO(BaseDAO[OrderItem]):
    def __init__(self, db: Session):
        super().__init__(OrderItem, db)

    def get_by_order_id(self, order_id: int) -> List[OrderItem]:
        """Get the items of one order."""
        stmt = select(OrderItem).where(OrderItem.order_id == order_id).order_by(OrderItem.id)
        return list(self.db.execute(stmt).scalars().all())


class PaymentDAO(BaseDAO[Payment]):
    def __init__(self, db: Session):
        super().__init__(Payment, db)

    def get_by_order_id(self, order_id: int) -> Optional[Payment]:
        """Get the payment of an order, if any."""
        return self.get_by_field("order_id", order_id)


class OrderReportDAO:
    """Fixed-shape order reports. None of these take search criteria."""

    def __init__(self, db: Session):
        self.db = db

    def find_orders_with_details(self, customer_id: int) -> List[OrderWithDetails]:
        """Orders of one customer with payment status and item count."""
        item_count = func.count(OrderItem.id).label("item_count")
        stmt = (
            select(
                Order.id, Order.customer_id, Order.order_date, Order.total_amount, Order.status,
                Customer.name.label("customer_name"),
                Payment.status.label("payment_status"),
                item_count,
            )
            .select_from(Order)
            .join(Customer, Order.customer_id == Customer.id)
            .outerjoin(Payment, Order.id == Payment.order_id)
            .outerjoin(OrderItem, Order.id == OrderItem.order_id)
            .where(Order.customer_id == customer_id)
            .group_by(
                Order.id, Order.customer_id, Order.order_date, Order.total_amount, Order.status,
                Customer.name, Payment.status,
            )
            .order_by(Order.id)
        )

        results = [
            OrderWithDetails(
                order=order_from_row(row),
                customer_name=row.customer_name,
                payment_status=to_optional_enum(PaymentStatus, row.payment_status, "payment.status"),
                item_count=row.item_count,
            )
            for row in self.db.execute(stmt)
        ]
        logger.debug("Found %d orders with details for customer %s", len(results), customer_id)
        return results

    def find_unpaid_orders(self) -> List[OrderWithCustomer]:
        """Orders without a payment row or with a PENDING payment."""
        stmt = (
            select(
                Order.id, Order.customer_id, Order.order_date, Order.total_amount, Order.status,
                Customer.name.label("customer_name"),
                Customer.email.label("customer_email"),
            )
            .select_from(Order)
            .join(Customer, Order.customer_id == Customer.id)
            .outerjoin(Payment, Order.id == Payment.order_id)
            .where(or_(Payment.id.is_(None), Payment.status == PaymentStatus.PENDING.name))
            .order_by(Order.id)
        )
        return [
            OrderWithCustomer(
                order=order_from_row(row),
                customer_name=row.customer_name,
                customer_email=row.customer_email,
            )
            for row in self.db.execute(stmt)
        ]

    def count_orders_by_status(self) -> Dict[OrderStatus, int]:
        """Number of orders per status. Statuses without orders are omitted."""
        stmt = select(Order.status, func.count(Order.id)).group_by(Order.status)
        return {
            to_enum(OrderStatus, status, "orders.status"): count
            for status, count in self.db.execute(stmt)
        }
