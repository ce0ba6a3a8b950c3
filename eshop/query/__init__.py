"""
Order search module.

Compiles OrderSearchCriteria into SQL and runs it.

Main Components:
- compile_predicates: one clause per active filter
- plan_joins: the join graph around the orders table
- OrderSearchQueryBuilder: search and count statements
- OrderSearchEngine: execution, row mapping and paging
"""

from .builder import OrderSearchQueryBuilder
from .engine import OrderSearchEngine
from .joins import plan_joins
from .predicates import compile_predicates
from .schemas import (
    # Criteria
    OrderSearchCriteria,
    OrderSortField,
    SortDirection,
    # Compiled parts
    Predicate,
    PredicateSet,
    JoinKind,
    JoinPlan,
    JoinStep,
    Relation,
    # Results
    OrderSearchPage,
    OrderSearchResult,
    SearchPreview,
)

__all__ = [
    # Main classes
    "OrderSearchQueryBuilder",
    "OrderSearchEngine",
    "compile_predicates",
    "plan_joins",
    # Criteria
    "OrderSearchCriteria",
    "OrderSortField",
    "SortDirection",
    # Compiled parts
    "Predicate",
    "PredicateSet",
    "JoinKind",
    "JoinPlan",
    "JoinStep",
    "Relation",
    # Results
    "OrderSearchPage",
    "OrderSearchResult",
    "SearchPreview",
]
