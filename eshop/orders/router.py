# eshop/orders/router.py
"""API router for order searches and order reports."""

from typing import Dict, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from eshop.core.dependencies import SessionDep
from eshop.orders.service import OrderReportService, OrderSearchService
from eshop.query.engine import OrderSearchEngine
from eshop.query.schemas import OrderSearchCriteria, OrderSearchPage, SearchPreview
from eshop.shop.dao import OrderReportDAO
from eshop.shop.schemas import OrderWithCustomer, OrderWithDetails

router = APIRouter(prefix="/orders", tags=["Orders"])


class OrderCount(BaseModel):
    count: int


# ===== DEPENDENCY INJECTION =====

def get_order_search_engine(db: SessionDep) -> OrderSearchEngine:
    """Get OrderSearchEngine instance."""
    return OrderSearchEngine(db)

def get_order_report_dao(db: SessionDep) -> OrderReportDAO:
    """Get OrderReportDAO instance."""
    return OrderReportDAO(db)

def get_order_search_service(engine: OrderSearchEngine = Depends(get_order_search_engine)) -> OrderSearchService:
    """Get OrderSearchService instance."""
    return OrderSearchService(engine)

def get_order_report_service(dao: OrderReportDAO = Depends(get_order_report_dao)) -> OrderReportService:
    """Get OrderReportService instance."""
    return OrderReportService(dao)


# ===== SEARCH ENDPOINTS =====

@router.post("/search", response_model=OrderSearchPage)
def search_orders(
    criteria: OrderSearchCriteria,
    service: OrderSearchService = Depends(get_order_search_service)
) -> OrderSearchPage:
    """Search orders by any combination of filters, one page at a time."""
    return service.search_page(criteria)


@router.post("/search/count", response_model=OrderCount)
def count_orders(
    criteria: OrderSearchCriteria,
    service: OrderSearchService = Depends(get_order_search_service)
) -> OrderCount:
    """Count all orders matching the filters."""
    return OrderCount(count=service.count(criteria))


@router.post("/search/preview", response_model=SearchPreview)
def preview_order_search(
    criteria: OrderSearchCriteria,
    service: OrderSearchService = Depends(get_order_search_service)
) -> SearchPreview:
    """Show the SQL a search would run."""
    return service.preview(criteria)


# ===== REPORT ENDPOINTS =====

@router.get("/reports/by-status", response_model=Dict[str, int])
def get_order_counts_by_status(
    service: OrderReportService = Depends(get_order_report_service)
) -> Dict[str, int]:
    """Number of orders per status."""
    return service.get_status_counts()


@router.get("/reports/unpaid", response_model=List[OrderWithCustomer])
def get_unpaid_orders(
    service: OrderReportService = Depends(get_order_report_service)
) -> List[OrderWithCustomer]:
    """Orders without a payment or with a pending payment."""
    return service.get_unpaid_orders()


@router.get("/customers/{customer_id}", response_model=List[OrderWithDetails])
def get_customer_orders(
    customer_id: int,
    service: OrderReportService = Depends(get_order_report_service)
) -> List[OrderWithDetails]:
    """Orders of one customer with payment status and item count."""
    return service.get_orders_with_details(customer_id)
