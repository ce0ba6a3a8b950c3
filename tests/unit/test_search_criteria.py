"""
Unit tests for order search criteria.
Tests paging validation, filter detection and page copies.
"""

import pytest
from decimal import Decimal
from pydantic import ValidationError

from eshop.query.schemas import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    OrderSearchCriteria,
    OrderSearchPage,
    OrderSortField,
    SortDirection,
)
from eshop.shop.models import OrderStatus, PaymentMethod


class TestCriteriaDefaults:
    """Test default values of a fresh criteria"""

    def test_defaults(self):
        criteria = OrderSearchCriteria()

        assert criteria.offset == 0
        assert criteria.limit == DEFAULT_LIMIT == 20
        assert criteria.sort_by == OrderSortField.ORDER_DATE
        assert criteria.sort_direction == SortDirection.DESC
        assert criteria.customer_name is None
        assert criteria.order_statuses is None

    def test_sets_accept_lists(self):
        criteria = OrderSearchCriteria(order_statuses=["DELIVERED", "PENDING"])

        assert criteria.order_statuses == frozenset({OrderStatus.DELIVERED, OrderStatus.PENDING})

    def test_criteria_is_immutable(self):
        criteria = OrderSearchCriteria()

        with pytest.raises(ValidationError):
            criteria.customer_name = "John"


class TestPagingValidation:
    """Test that invalid paging is rejected on construction"""

    def test_negative_offset_rejected(self):
        with pytest.raises(ValidationError):
            OrderSearchCriteria(offset=-1)

    def test_zero_limit_rejected(self):
        with pytest.raises(ValidationError):
            OrderSearchCriteria(limit=0)

    def test_limit_above_maximum_rejected(self):
        with pytest.raises(ValidationError):
            OrderSearchCriteria(limit=MAX_LIMIT + 1)

    def test_limit_at_maximum_accepted(self):
        assert OrderSearchCriteria(limit=MAX_LIMIT).limit == 1000

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            OrderSearchCriteria(offset=-5)

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            OrderSearchCriteria(customerName="John")

    def test_money_with_three_decimals_rejected(self):
        with pytest.raises(ValidationError):
            OrderSearchCriteria(min_total_amount=Decimal("10.005"))


class TestHasAnyFilter:
    """Test detection of active filters"""

    def test_no_filters(self):
        assert OrderSearchCriteria().has_any_filter() is False

    def test_paging_and_sorting_are_not_filters(self):
        criteria = OrderSearchCriteria(
            offset=10, limit=5, sort_by=OrderSortField.TOTAL_AMOUNT, sort_direction=SortDirection.ASC
        )
        assert criteria.has_any_filter() is False

    def test_blank_string_is_not_a_filter(self):
        assert OrderSearchCriteria(customer_name="   ").has_any_filter() is False
        assert OrderSearchCriteria(product_category="").has_any_filter() is False

    def test_empty_set_is_not_a_filter(self):
        assert OrderSearchCriteria(order_statuses=[]).has_any_filter() is False

    @pytest.mark.parametrize("field, value", [
        ("customer_name", "John"),
        ("order_statuses", [OrderStatus.DELIVERED]),
        ("payment_methods", [PaymentMethod.CASH]),
        ("min_product_price", Decimal("10.00")),
    ])
    def test_single_filter(self, field, value):
        assert OrderSearchCriteria(**{field: value}).has_any_filter() is True


class TestWithPage:
    """Test page copies of a criteria"""

    def test_copy_keeps_filters(self):
        criteria = OrderSearchCriteria(customer_name="John", limit=1)
        next_page = criteria.with_page(1)

        assert next_page.offset == 1
        assert next_page.limit == 1
        assert next_page.customer_name == "John"
        assert criteria.offset == 0

    def test_copy_revalidates(self):
        with pytest.raises(ValidationError):
            OrderSearchCriteria().with_page(-1)


class TestSearchPage:
    """Test page metadata"""

    def test_first_of_three_pages(self):
        criteria = OrderSearchCriteria(limit=1)
        page = OrderSearchPage.of([], criteria, total_elements=3)

        assert page.total_pages == 3
        assert page.page_number == 0
        assert page.has_previous is False

    def test_empty_result(self):
        page = OrderSearchPage.of([], OrderSearchCriteria(), total_elements=0)

        assert page.total_pages == 0
        assert page.has_next is False
        assert page.has_previous is False
