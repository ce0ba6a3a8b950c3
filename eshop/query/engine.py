"""Order search engine: executes built statements and maps rows to results."""

import logging
from typing import List

from sqlalchemy.orm import Session

from eshop.query.builder import OrderSearchQueryBuilder
from eshop.query.schemas import OrderSearchCriteria, OrderSearchPage, OrderSearchResult, SearchPreview
from eshop.shop.mapping import order_from_row, to_optional_enum
from eshop.shop.models import PaymentStatus

logger = logging.getLogger(__name__)


class OrderSearchEngine:
    """Runs order searches and counts against one session."""

    def __init__(self, db: Session):
        self.db = db
        self.builder = OrderSearchQueryBuilder(db.get_bind().dialect)

    # ===== EXECUTION =====

    def search(self, criteria: OrderSearchCriteria) -> List[OrderSearchResult]:
        """Return one page of matching orders, sorted as requested."""
        stmt = self.builder.build_search_query(criteria)
        self._log_statement("search", stmt)

        results = [self._map_row(row) for row in self.db.execute(stmt)]
        logger.debug("Order search returned %d rows (offset=%d, limit=%d)",
                     len(results), criteria.offset, criteria.limit)
        return results

    def count(self, criteria: OrderSearchCriteria) -> int:
        """Count all orders matching the filters. Paging and sorting are ignored."""
        stmt = self.builder.build_count_query(criteria)
        self._log_statement("count", stmt)
        return self.db.execute(stmt).scalar_one()

    def search_page(self, criteria: OrderSearchCriteria) -> OrderSearchPage:
        """Search and count together, returned as a page."""
        content = self.search(criteria)
        return OrderSearchPage.of(content, criteria, self.count(criteria))

    def preview(self, criteria: OrderSearchCriteria) -> SearchPreview:
        """Render the statements a search would run, without running them."""
        return self.builder.build_preview(criteria)

    def _log_statement(self, kind: str, stmt) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            compiled = stmt.compile(dialect=self.builder.dialect)
            logger.debug("Order %s SQL: %s params=%s", kind, compiled, compiled.params)

    # ===== ROW MAPPING =====

    def _map_row(self, row) -> OrderSearchResult:
        return OrderSearchResult(
            order=order_from_row(row),
            customer_name=row.customer_name,
            customer_email=row.customer_email,
            item_count=row.item_count,
            product_names=sorted(name for name in (row.product_names or []) if name is not None),
            payment_status=to_optional_enum(PaymentStatus, row.payment_status, "payment.status"),
        )
