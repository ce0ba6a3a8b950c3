"""Join planner for order searches."""

from eshop.query.schemas import JoinKind, JoinPlan, JoinStep, PredicateSet, Relation

# Relation -> join kind. Every order has exactly one customer. Items, their
# products and the payment are optional, so they are LEFT joined and never
# drop an order on their own.
JOIN_KINDS = {
    Relation.CUSTOMER: JoinKind.INNER,
    Relation.ORDER_ITEM: JoinKind.LEFT,
    Relation.PRODUCT: JoinKind.LEFT,
    Relation.PAYMENT: JoinKind.LEFT,
}

# Relations the grouped projection always reads from
PROJECTED_RELATIONS = (Relation.CUSTOMER, Relation.ORDER_ITEM, Relation.PRODUCT, Relation.PAYMENT)


def plan_joins(predicates: PredicateSet) -> JoinPlan:
    """Build the join graph for a predicate set.

    The join kinds do not depend on the filters. A payment filter stays a
    WHERE condition on the LEFT joined payment columns, so it excludes
    orders without a payment even though the join is LEFT. Product filters
    are marked as filtered and applied by the builder as a semi-join on the
    order's items. The item/product join feeding the aggregates is never
    narrowed by them.
    """
    steps = tuple(JoinStep(relation=r, kind=JOIN_KINDS[r]) for r in PROJECTED_RELATIONS)
    filtered = frozenset(predicates.active_relations - {Relation.ORDER})
    return JoinPlan(steps=steps, filtered=filtered)
