"""
Predicate compiler for order searches.

Each optional criteria field maps to exactly one rule. A rule turns the
field's value into a boolean clause on one relation. Fields that are unset,
blank or empty produce nothing. The resulting predicates are independent of
the join shape and are combined with AND by the query builder.
"""

from typing import Any, Callable, Optional, Tuple

from sqlalchemy.sql.elements import ColumnElement

from eshop.query.relations import MatchedProduct
from eshop.query.schemas import OrderSearchCriteria, Predicate, PredicateSet, Relation, is_set
from eshop.shop.models import Customer, Order, Payment

ClauseFactory = Callable[[Any], ColumnElement]


def _at_least(column) -> ClauseFactory:
    return lambda value: column >= value


def _at_most(column) -> ClauseFactory:
    return lambda value: column <= value


def _contains(column) -> ClauseFactory:
    # Case-insensitive substring; % and _ in the value match literally
    return lambda value: column.icontains(value, autoescape=True)


def _equals(column) -> ClauseFactory:
    return lambda value: column == value


def _one_of(column) -> ClauseFactory:
    # Enum members are stored by name; sorted for a stable statement
    return lambda members: column.in_(sorted(member.name for member in members))


RULES: Tuple[Tuple[Relation, str, ClauseFactory], ...] = (
    # Order
    (Relation.ORDER, "order_date_from", _at_least(Order.order_date)),
    (Relation.ORDER, "order_date_to", _at_most(Order.order_date)),
    (Relation.ORDER, "min_total_amount", _at_least(Order.total_amount)),
    (Relation.ORDER, "max_total_amount", _at_most(Order.total_amount)),
    (Relation.ORDER, "order_statuses", _one_of(Order.status)),
    # Customer
    (Relation.CUSTOMER, "customer_name", _contains(Customer.name)),
    (Relation.CUSTOMER, "customer_email", _contains(Customer.email)),
    (Relation.CUSTOMER, "customer_address", _contains(Customer.address)),
    (Relation.CUSTOMER, "customer_registered_date_from", _at_least(Customer.registered_date)),
    (Relation.CUSTOMER, "customer_registered_date_to", _at_most(Customer.registered_date)),
    # Product, matched through any one of the order's items
    (Relation.PRODUCT, "product_name", _contains(MatchedProduct.name)),
    (Relation.PRODUCT, "product_category", _equals(MatchedProduct.category)),
    (Relation.PRODUCT, "min_product_price", _at_least(MatchedProduct.price)),
    (Relation.PRODUCT, "max_product_price", _at_most(MatchedProduct.price)),
    # Payment
    (Relation.PAYMENT, "payment_methods", _one_of(Payment.method)),
    (Relation.PAYMENT, "payment_statuses", _one_of(Payment.status)),
    (Relation.PAYMENT, "payment_date_from", _at_least(Payment.payment_date)),
    (Relation.PAYMENT, "payment_date_to", _at_most(Payment.payment_date)),
)


def compile_predicate(criteria: OrderSearchCriteria, relation: Relation, name: str,
                      factory: ClauseFactory) -> Optional[Predicate]:
    value = getattr(criteria, name)
    if not is_set(value):
        return None
    return Predicate(relation=relation, criterion=name, clause=factory(value))


def compile_predicates(criteria: OrderSearchCriteria) -> PredicateSet:
    """Compile every active filter of the criteria, in rule order."""
    compiled = (compile_predicate(criteria, relation, name, factory) for relation, name, factory in RULES)
    return PredicateSet(tuple(p for p in compiled if p is not None))
