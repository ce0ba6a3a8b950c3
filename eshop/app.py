"""FastAPI application entry point for the eshop order search service."""

import logging
import os

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from pydantic import ValidationError

from eshop.core.database import create_all_tables, create_sample_data
from eshop.core.exception_handlers import (
    eshop_exception_handler,
    general_exception_handler,
    http_exception_handler,
    record_mapping_exception_handler,
    request_validation_exception_handler,
    response_validation_exception_handler,
    validation_exception_handler,
)
from eshop.core.exceptions import EshopError, RecordMappingError
from eshop.core.router import register_routes

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging() -> None:
    level = os.getenv("ESHOP_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)


def create_app(init_db: bool = True) -> FastAPI:

    configure_logging()
    app = FastAPI(docs_url="/api/docs", redoc_url="/api/redoc", openapi_url="/api/openapi.json")

    if init_db:
        create_all_tables()
        if os.getenv("ESHOP_SEED_SAMPLE_DATA", "false").lower() == "true":
            create_sample_data()

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(ResponseValidationError, response_validation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(RecordMappingError, record_mapping_exception_handler)
    app.add_exception_handler(EshopError, eshop_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    register_routes(app)

    return app
