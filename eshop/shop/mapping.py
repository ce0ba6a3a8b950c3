"""Row-to-schema mapping shared by the search engine and the report DAO."""

import logging
from enum import Enum
from typing import Optional, Type, TypeVar

from eshop.core.exceptions import RecordMappingError
from eshop.shop.models import OrderStatus
from eshop.shop.schemas import OrderRead

logger = logging.getLogger(__name__)

EnumType = TypeVar("EnumType", bound=Enum)


def to_enum(enum_cls: Type[EnumType], value: Optional[str], column: str) -> EnumType:
    """Convert a stored enum name, failing loudly on unknown or missing values."""
    try:
        return enum_cls[value]
    except KeyError:
        logger.error("Unknown %s value %r in column %s", enum_cls.__name__, value, column)
        raise RecordMappingError(
            f"Invalid {enum_cls.__name__} value {value!r} in column '{column}'",
            column=column,
            value=value,
        ) from None


def to_optional_enum(enum_cls: Type[EnumType], value: Optional[str], column: str) -> Optional[EnumType]:
    """Like to_enum, but NULL maps to None."""
    if value is None:
        return None
    return to_enum(enum_cls, value, column)


def order_from_row(row) -> OrderRead:
    """Build an OrderRead from a row exposing the Order column keys."""
    return OrderRead(
        id=row.id,
        customer_id=row.customer_id,
        order_date=row.order_date,
        total_amount=row.total_amount,
        status=to_enum(OrderStatus, row.status, "orders.status"),
    )


def record_from_schema(model, schema):
    """Build an ORM row from a *Create schema. Enum fields are stored by name."""
    data = {
        key: value.name if isinstance(value, Enum) else value
        for key, value in schema.model_dump(exclude_none=True).items()
    }
    return model(**data)
