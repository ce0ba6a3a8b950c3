"""
Unit tests for the join planner.
"""

from decimal import Decimal

from eshop.query.joins import plan_joins
from eshop.query.predicates import compile_predicates
from eshop.query.schemas import JoinKind, OrderSearchCriteria, Relation
from eshop.shop.models import PaymentStatus


def plan_for(**filters):
    return plan_joins(compile_predicates(OrderSearchCriteria(**filters)))


class TestJoinPlanner:
    """Test join kinds and filtered relations"""

    def test_join_order(self):
        plan = plan_for()

        assert plan.relations == (Relation.CUSTOMER, Relation.ORDER_ITEM, Relation.PRODUCT, Relation.PAYMENT)

    def test_customer_is_inner_and_the_rest_left(self):
        plan = plan_for()

        assert plan.kind_of(Relation.CUSTOMER) is JoinKind.INNER
        assert plan.kind_of(Relation.ORDER_ITEM) is JoinKind.LEFT
        assert plan.kind_of(Relation.PRODUCT) is JoinKind.LEFT
        assert plan.kind_of(Relation.PAYMENT) is JoinKind.LEFT
        assert plan.kind_of(Relation.ORDER) is None

    def test_no_filters_no_filtered_relations(self):
        plan = plan_for()

        assert plan.filtered == frozenset()
        assert plan.filters_products is False

    def test_order_filters_are_not_join_filters(self):
        assert plan_for(min_total_amount=Decimal("1.00")).filtered == frozenset()

    def test_payment_filter_keeps_left_join(self):
        plan = plan_for(payment_statuses=[PaymentStatus.COMPLETED])

        assert plan.kind_of(Relation.PAYMENT) is JoinKind.LEFT
        assert plan.filtered == frozenset({Relation.PAYMENT})

    def test_product_filter_keeps_left_join(self):
        plan = plan_for(product_name="Laptop")

        assert plan.kind_of(Relation.PRODUCT) is JoinKind.LEFT
        assert plan.filters_products is True

    def test_plan_is_independent_of_filters(self):
        assert plan_for().steps == plan_for(customer_name="John", product_category="Books").steps
