"""
Unit tests for the predicate compiler.
Each active criteria field must yield exactly one clause on the right relation.
"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from sqlalchemy.dialects import sqlite

from eshop.query.predicates import RULES, compile_predicates
from eshop.query.schemas import OrderSearchCriteria, Relation
from eshop.shop.models import OrderStatus, PaymentMethod, PaymentStatus


def render(clause) -> str:
    return str(clause.compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True}))


class TestPredicateSelection:
    """Test which criteria fields produce predicates"""

    def test_empty_criteria_yields_nothing(self):
        predicates = compile_predicates(OrderSearchCriteria())

        assert len(predicates) == 0
        assert predicates.active_relations == frozenset()

    def test_blank_and_empty_values_are_skipped(self):
        criteria = OrderSearchCriteria(
            customer_name="  ",
            product_name="",
            order_statuses=[],
            payment_methods=[],
        )
        assert len(compile_predicates(criteria)) == 0

    def test_one_predicate_per_field(self):
        criteria = OrderSearchCriteria(
            order_date_from=datetime(2024, 10, 1),
            order_date_to=datetime(2024, 10, 31, 23, 59),
            customer_name="John",
        )
        predicates = compile_predicates(criteria)

        assert [p.criterion for p in predicates] == ["order_date_from", "order_date_to", "customer_name"]

    def test_predicates_follow_group_order(self):
        criteria = OrderSearchCriteria(
            payment_statuses=[PaymentStatus.COMPLETED],
            product_category="Electronics",
            customer_email="example.com",
            min_total_amount=Decimal("10.00"),
        )
        relations = [p.relation for p in compile_predicates(criteria)]

        assert relations == [Relation.ORDER, Relation.CUSTOMER, Relation.PRODUCT, Relation.PAYMENT]

    def test_every_filter_field_has_a_rule(self):
        filter_fields = set(OrderSearchCriteria.model_fields) - {"offset", "limit", "sort_by", "sort_direction"}

        assert {name for _, name, _ in RULES} == filter_fields

    def test_for_relation(self):
        criteria = OrderSearchCriteria(customer_name="John", customer_address="Seoul", product_name="Laptop")
        predicates = compile_predicates(criteria)

        assert [p.criterion for p in predicates.for_relation(Relation.CUSTOMER)] == ["customer_name", "customer_address"]
        assert predicates.active_relations == frozenset({Relation.CUSTOMER, Relation.PRODUCT})


class TestPredicateClauses:
    """Test the SQL rendered for each kind of rule"""

    def test_string_filter_is_case_insensitive_substring(self):
        (predicate,) = compile_predicates(OrderSearchCriteria(customer_name="John"))
        sql = render(predicate.clause)

        assert "lower(customer.name)" in sql
        assert "LIKE" in sql
        assert "john" in sql.lower()

    def test_like_wildcards_are_escaped(self):
        (predicate,) = compile_predicates(OrderSearchCriteria(customer_address="50%_off"))
        sql = render(predicate.clause)

        assert "50/%/_off" in sql
        assert "ESCAPE '/'" in sql

    def test_product_category_is_exact(self):
        (predicate,) = compile_predicates(OrderSearchCriteria(product_category="Electronics"))

        assert predicate.relation is Relation.PRODUCT
        assert render(predicate.clause) == "matched_product.category = 'Electronics'"

    def test_range_bounds_are_inclusive(self):
        criteria = OrderSearchCriteria(min_product_price=Decimal("10.00"), max_product_price=Decimal("100.00"))
        low, high = compile_predicates(criteria)

        assert ">=" in render(low.clause)
        assert "<=" in render(high.clause)
        assert render(low.clause).startswith("matched_product.price")

    def test_date_range_on_customer(self):
        criteria = OrderSearchCriteria(customer_registered_date_from=date(2024, 1, 1))
        (predicate,) = compile_predicates(criteria)

        assert predicate.relation is Relation.CUSTOMER
        assert predicate.criterion == "customer_registered_date_from"

    def test_sets_use_enum_names(self):
        criteria = OrderSearchCriteria(order_statuses=[OrderStatus.PENDING, OrderStatus.DELIVERED])
        (predicate,) = compile_predicates(criteria)
        sql = render(predicate.clause)

        assert sql.startswith("orders.status IN")
        assert sql.index("'DELIVERED'") < sql.index("'PENDING'")

    @pytest.mark.parametrize("field, value, column", [
        ("payment_methods", [PaymentMethod.CREDIT_CARD], "payment.method"),
        ("payment_statuses", [PaymentStatus.COMPLETED], "payment.status"),
        ("payment_date_from", datetime(2024, 10, 1), "payment.payment_date"),
    ])
    def test_payment_filters(self, field, value, column):
        (predicate,) = compile_predicates(OrderSearchCriteria(**{field: value}))

        assert predicate.relation is Relation.PAYMENT
        assert str(predicate.clause.compile(dialect=sqlite.dialect())).startswith(column)
