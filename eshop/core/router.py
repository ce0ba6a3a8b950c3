# eshop/core/router.py
"""
Module for registering routes in the FastAPI application.
"""

from fastapi import FastAPI

from eshop.orders.router import router as orders_router


def register_routes(app: FastAPI) -> None:
    """
    Registers all the routes for the FastAPI application.

    Args:
        app (FastAPI): The FastAPI application instance.
    """
    app.include_router(orders_router, prefix="/api")
