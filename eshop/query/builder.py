"""
Query builder for order searches.

Turns OrderSearchCriteria into SQLAlchemy statements. The search statement and
the count statement are built from the same predicate set and join plan, so a
count always agrees with the rows a search can page through.
"""

from typing import Dict, List

from sqlalchemy import JSON, String, distinct, func, select, type_coerce
from sqlalchemy.dialects import postgresql
from sqlalchemy.engine import Dialect
from sqlalchemy.sql import Select

from eshop.core.exceptions import UnsupportedDialectError
from eshop.query.joins import plan_joins
from eshop.query.predicates import compile_predicates
from eshop.query.relations import ENTITIES, JOIN_CONDITIONS, MatchedItem, MatchedProduct
from eshop.query.schemas import (
    JoinKind,
    JoinPlan,
    OrderSearchCriteria,
    OrderSortField,
    PredicateSet,
    Relation,
    SearchPreview,
    SortDirection,
)
from eshop.shop.models import Customer, Order, OrderItem, Payment, Product

SORT_COLUMNS: Dict[OrderSortField, object] = {
    OrderSortField.ORDER_DATE: Order.order_date,
    OrderSortField.TOTAL_AMOUNT: Order.total_amount,
    OrderSortField.CUSTOMER_NAME: Customer.name,
    OrderSortField.ORDER_STATUS: Order.status,
}

# Non-aggregated columns of the search projection
GROUPED_COLUMNS = (
    Order.id,
    Order.customer_id,
    Order.order_date,
    Order.total_amount,
    Order.status,
    Customer.name.label("customer_name"),
    Customer.email.label("customer_email"),
    Payment.status.label("payment_status"),
)

GROUP_BY = (
    Order.id,
    Order.customer_id,
    Order.order_date,
    Order.total_amount,
    Order.status,
    Customer.name,
    Customer.email,
    Payment.status,
)


class OrderSearchQueryBuilder:
    """
    Builds the search and count statements for order searches.

    The builder is bound to a SQL dialect because the distinct product-name
    collection has no portable spelling.
    """

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    @property
    def dialect_name(self) -> str:
        return self.dialect.name

    def build_search_query(self, criteria: OrderSearchCriteria) -> Select:
        """
        Build the grouped, sorted and paged search statement.

        One row per order: the order columns, customer name and email, the
        payment status (NULL without a payment), the number of order items and
        the distinct product names.
        """
        predicates = compile_predicates(criteria)
        plan = plan_joins(predicates)

        stmt = select(
            *GROUPED_COLUMNS,
            func.count(OrderItem.id).label("item_count"),
            self.product_names_aggregate().label("product_names"),
        ).select_from(Order)
        stmt = self._apply_joins(stmt, plan)
        stmt = self._apply_filters(stmt, predicates, plan)
        stmt = stmt.group_by(*GROUP_BY)

        sort_column = SORT_COLUMNS[criteria.sort_by]
        if criteria.sort_direction is SortDirection.ASC:
            stmt = stmt.order_by(sort_column.asc(), Order.id.asc())
        else:
            stmt = stmt.order_by(sort_column.desc(), Order.id.asc())

        return stmt.offset(criteria.offset).limit(criteria.limit)

    def build_count_query(self, criteria: OrderSearchCriteria) -> Select:
        """Build COUNT(DISTINCT orders.id) over the same joins and filters, unsorted and unpaged."""
        predicates = compile_predicates(criteria)
        plan = plan_joins(predicates)

        stmt = select(func.count(distinct(Order.id)).label("total")).select_from(Order)
        stmt = self._apply_joins(stmt, plan)
        return self._apply_filters(stmt, predicates, plan)

    def build_preview(self, criteria: OrderSearchCriteria) -> SearchPreview:
        """Render both statements together with the filters and joins they use."""
        predicates = compile_predicates(criteria)
        plan = plan_joins(predicates)
        return SearchPreview(
            sql=self.compile_sql(self.build_search_query(criteria)),
            count_sql=self.compile_sql(self.build_count_query(criteria)),
            active_filters=[p.criterion for p in predicates],
            joins=[f"{step.kind.value} {step.relation.value}" for step in plan.steps],
        )

    def product_names_aggregate(self):
        """Distinct product names of the joined items as a list-valued column."""
        if self.dialect_name == "postgresql":
            return func.array_agg(distinct(Product.name), type_=postgresql.ARRAY(String))
        if self.dialect_name == "sqlite":
            return type_coerce(func.json_group_array(distinct(Product.name)), JSON)
        raise UnsupportedDialectError(
            f"Cannot collect product names on dialect '{self.dialect_name}'"
        )

    def compile_sql(self, stmt: Select) -> str:
        """Compile a statement to a SQL string with literal values, for logging."""
        return str(stmt.compile(
            dialect=self.dialect,
            compile_kwargs={"literal_binds": True}
        ))

    def _apply_joins(self, stmt: Select, plan: JoinPlan) -> Select:
        for step in plan.steps:
            stmt = stmt.join(
                ENTITIES[step.relation],
                JOIN_CONDITIONS[step.relation],
                isouter=step.kind is JoinKind.LEFT,
            )
        return stmt

    def _apply_filters(self, stmt: Select, predicates: PredicateSet, plan: JoinPlan) -> Select:
        clauses: List = predicates.clauses(Relation.ORDER, Relation.CUSTOMER, Relation.PAYMENT)
        if plan.filters_products:
            clauses.append(self._product_match(predicates))
        if clauses:
            stmt = stmt.where(*clauses)
        return stmt

    def _product_match(self, predicates: PredicateSet):
        # All product conditions must hold for the same item of the order
        return (
            select(MatchedItem.id)
            .join(MatchedProduct, MatchedItem.product_id == MatchedProduct.id)
            .where(MatchedItem.order_id == Order.id, *predicates.clauses(Relation.PRODUCT))
            .exists()
        )
