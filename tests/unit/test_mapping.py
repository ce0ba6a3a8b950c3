"""
Unit tests for row mapping helpers.
"""

import pytest
from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

from eshop.core.exceptions import EshopError, RecordMappingError
from eshop.shop.mapping import order_from_row, to_enum, to_optional_enum
from eshop.shop.models import OrderStatus, PaymentMethod, PaymentStatus


class TestEnumMapping:

    def test_known_name(self):
        assert to_enum(OrderStatus, "SHIPPED", "orders.status") is OrderStatus.SHIPPED

    def test_unknown_name_raises(self):
        with pytest.raises(RecordMappingError) as exc_info:
            to_enum(PaymentMethod, "BITCOIN", "payment.method")

        assert exc_info.value.column == "payment.method"
        assert exc_info.value.value == "BITCOIN"
        assert isinstance(exc_info.value, EshopError)

    def test_lowercase_name_is_unknown(self):
        with pytest.raises(RecordMappingError):
            to_enum(OrderStatus, "delivered", "orders.status")

    def test_missing_value_raises(self):
        with pytest.raises(RecordMappingError):
            to_enum(OrderStatus, None, "orders.status")

    def test_optional_null(self):
        assert to_optional_enum(PaymentStatus, None, "payment.status") is None
        assert to_optional_enum(PaymentStatus, "REFUNDED", "payment.status") is PaymentStatus.REFUNDED

    def test_error_context_defaults_to_none(self):
        error = RecordMappingError("unmappable row")

        assert error.column is None
        assert error.value is None
        assert str(error) == "unmappable row"


class TestOrderFromRow:

    def test_maps_columns(self):
        row = SimpleNamespace(
            id=7, customer_id=2, order_date=datetime(2024, 10, 15, 14, 30),
            total_amount=Decimal("30.00"), status="PENDING",
        )
        order = order_from_row(row)

        assert order.id == 7
        assert order.status is OrderStatus.PENDING
        assert order.total_amount == Decimal("30.00")

    def test_bad_status_raises(self):
        row = SimpleNamespace(
            id=7, customer_id=2, order_date=datetime(2024, 10, 15),
            total_amount=Decimal("30.00"), status="LOST",
        )
        with pytest.raises(RecordMappingError):
            order_from_row(row)
