"""
Order search schemas and types.

This module defines the criteria accepted by the order search, the
intermediate predicate and join plan descriptions produced while compiling
it, and the result values returned to callers.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.sql.elements import ColumnElement

from eshop.shop.models import OrderStatus, PaymentMethod, PaymentStatus
from eshop.shop.schemas import OrderRead, validate_money

DEFAULT_LIMIT = 20
MAX_LIMIT = 1000


class OrderSortField(str, Enum):
    """Columns an order search can be sorted by."""

    ORDER_DATE = "ORDER_DATE"
    TOTAL_AMOUNT = "TOTAL_AMOUNT"
    CUSTOMER_NAME = "CUSTOMER_NAME"
    ORDER_STATUS = "ORDER_STATUS"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class Relation(str, Enum):
    """Relations taking part in an order search, relative to the orders table."""

    ORDER = "orders"
    CUSTOMER = "customer"
    ORDER_ITEM = "order_item"
    PRODUCT = "product"  # reached through order_item
    PAYMENT = "payment"


class JoinKind(str, Enum):
    INNER = "INNER"
    LEFT = "LEFT"


# ===== CRITERIA =====


class OrderSearchCriteria(BaseModel):
    """Optional filters over orders, customers, products and payments plus paging and sorting.

    Blank strings and empty sets mean "no filter". Paging values are checked on
    construction: offset >= 0 and 0 < limit <= 1000.
    """

    # Order filters
    order_date_from: Optional[datetime] = None
    order_date_to: Optional[datetime] = None
    min_total_amount: Optional[Decimal] = None
    max_total_amount: Optional[Decimal] = None
    order_statuses: Optional[FrozenSet[OrderStatus]] = None

    # Customer filters
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_address: Optional[str] = None
    customer_registered_date_from: Optional[date] = None
    customer_registered_date_to: Optional[date] = None

    # Product filters (through order items)
    product_name: Optional[str] = None
    product_category: Optional[str] = None
    min_product_price: Optional[Decimal] = None
    max_product_price: Optional[Decimal] = None

    # Payment filters
    payment_methods: Optional[FrozenSet[PaymentMethod]] = None
    payment_statuses: Optional[FrozenSet[PaymentStatus]] = None
    payment_date_from: Optional[datetime] = None
    payment_date_to: Optional[datetime] = None

    # Paging and sorting
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=DEFAULT_LIMIT, gt=0, le=MAX_LIMIT)
    sort_by: OrderSortField = OrderSortField.ORDER_DATE
    sort_direction: SortDirection = SortDirection.DESC

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("min_total_amount", "max_total_amount", "min_product_price", "max_product_price")
    @classmethod
    def check_money(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        return validate_money(value)

    def has_any_filter(self) -> bool:
        """Whether any optional filter is set. Paging and sorting do not count."""
        return any(
            is_set(getattr(self, name))
            for name in type(self).model_fields
            if name not in PAGING_FIELDS
        )

    def with_page(self, offset: int, limit: Optional[int] = None) -> "OrderSearchCriteria":
        """Copy of these criteria for another page. The new paging values are validated."""
        data = self.model_dump()
        data["offset"] = offset
        if limit is not None:
            data["limit"] = limit
        return OrderSearchCriteria(**data)


PAGING_FIELDS = frozenset({"offset", "limit", "sort_by", "sort_direction"})


def is_set(value) -> bool:
    """Whether a filter value constrains anything. Blank strings and empty collections do not."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (set, frozenset, list, tuple)):
        return len(value) > 0
    return True


# ===== COMPILED QUERY PARTS =====


@dataclass(frozen=True)
class Predicate:
    """One boolean condition produced from one criteria field (`criterion`)."""

    relation: Relation
    criterion: str
    clause: ColumnElement = field(compare=False, repr=False)


@dataclass(frozen=True)
class PredicateSet:
    """Ordered predicates of one criteria, grouped by relation on demand."""

    predicates: Tuple[Predicate, ...] = ()

    def for_relation(self, relation: Relation) -> Tuple[Predicate, ...]:
        return tuple(p for p in self.predicates if p.relation is relation)

    def clauses(self, *relations: Relation) -> List[ColumnElement]:
        return [p.clause for p in self.predicates if p.relation in relations]

    @property
    def active_relations(self) -> FrozenSet[Relation]:
        return frozenset(p.relation for p in self.predicates)

    def __len__(self) -> int:
        return len(self.predicates)

    def __iter__(self):
        return iter(self.predicates)


@dataclass(frozen=True)
class JoinStep:
    """Join of one relation onto the orders table."""

    relation: Relation
    kind: JoinKind


@dataclass(frozen=True)
class JoinPlan:
    """Declarative join graph: which relations are joined, how, and which are filtered."""

    steps: Tuple[JoinStep, ...]
    filtered: FrozenSet[Relation] = frozenset()

    def kind_of(self, relation: Relation) -> Optional[JoinKind]:
        for step in self.steps:
            if step.relation is relation:
                return step.kind
        return None

    @property
    def relations(self) -> Tuple[Relation, ...]:
        return tuple(step.relation for step in self.steps)

    @property
    def filters_products(self) -> bool:
        """Product predicates are applied as a semi-join on the order's items."""
        return Relation.PRODUCT in self.filtered


# ===== RESULTS =====


class OrderSearchResult(BaseModel):
    """One matched order with its customer, payment status and item aggregates."""

    order: OrderRead
    customer_name: str
    customer_email: str
    item_count: int = Field(ge=0)
    product_names: List[str] = []
    payment_status: Optional[PaymentStatus] = None

    model_config = ConfigDict(frozen=True)


class OrderSearchPage(BaseModel):
    """A page of search results together with the total number of matching orders."""

    content: List[OrderSearchResult]
    offset: int
    limit: int
    total_elements: int
    total_pages: int
    page_number: int
    has_next: bool
    has_previous: bool

    @classmethod
    def of(cls, content: List[OrderSearchResult], criteria: OrderSearchCriteria, total_elements: int) -> "OrderSearchPage":
        return cls(
            content=content,
            offset=criteria.offset,
            limit=criteria.limit,
            total_elements=total_elements,
            total_pages=math.ceil(total_elements / criteria.limit),
            page_number=criteria.offset // criteria.limit,
            has_next=criteria.offset + len(content) < total_elements,
            has_previous=criteria.offset > 0,
        )


class SearchPreview(BaseModel):
    """Rendered SQL of a search without executing it."""

    sql: str
    count_sql: str
    active_filters: List[str]
    joins: List[str]
