# eshop/orders/service.py
"""Service layer for order searches and fixed order reports."""

import logging
from typing import Dict, List

from eshop.query.engine import OrderSearchEngine
from eshop.query.schemas import OrderSearchCriteria, OrderSearchPage, OrderSearchResult, SearchPreview
from eshop.shop.dao import OrderReportDAO
from eshop.shop.schemas import OrderWithCustomer, OrderWithDetails

logger = logging.getLogger(__name__)


class OrderSearchService:
    """Service for criteria based order searches."""

    def __init__(self, engine: OrderSearchEngine):
        self.engine = engine

    def search(self, criteria: OrderSearchCriteria) -> List[OrderSearchResult]:
        self._log_criteria(criteria)
        return self.engine.search(criteria)

    def count(self, criteria: OrderSearchCriteria) -> int:
        self._log_criteria(criteria)
        return self.engine.count(criteria)

    def search_page(self, criteria: OrderSearchCriteria) -> OrderSearchPage:
        """Search one page and count the full match set."""
        self._log_criteria(criteria)
        page = self.engine.search_page(criteria)
        logger.info("Order search matched %d orders, returning page %d of %d",
                    page.total_elements, page.page_number + 1, max(page.total_pages, 1))
        return page

    def preview(self, criteria: OrderSearchCriteria) -> SearchPreview:
        return self.engine.preview(criteria)

    def _log_criteria(self, criteria: OrderSearchCriteria) -> None:
        if not criteria.has_any_filter():
            # No filters: every order matches, paging still applies
            logger.info("Order search without filters (offset=%d, limit=%d)", criteria.offset, criteria.limit)


class OrderReportService:
    """Service for the fixed-shape order reports."""

    def __init__(self, report_dao: OrderReportDAO):
        self.report_dao = report_dao

    def get_orders_with_details(self, customer_id: int) -> List[OrderWithDetails]:
        return self.report_dao.find_orders_with_details(customer_id)

    def get_unpaid_orders(self) -> List[OrderWithCustomer]:
        return self.report_dao.find_unpaid_orders()

    def get_status_counts(self) -> Dict[str, int]:
        """Order counts keyed by status name."""
        counts = self.report_dao.count_orders_by_status()
        return {status.value: count for status, count in sorted(counts.items(), key=lambda item: item[0].value)}
