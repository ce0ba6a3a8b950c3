"""Pydantic schemas for the shop entities."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eshop.shop.models import OrderStatus, PaymentMethod, PaymentStatus


def validate_money(value: Optional[Decimal]) -> Optional[Decimal]:
    """Reject amounts with more than two decimal places."""
    if value is None:
        return value
    if value != value.quantize(Decimal("0.01")):
        raise ValueError("Money amount cannot have more than 2 decimal places")
    return value


# Customer Schemas
class CustomerBase(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(pattern=r".+@.+")
    address: str = Field(min_length=1)
    registered_date: date

    model_config = ConfigDict(from_attributes=True, extra="forbid")


class CustomerCreate(CustomerBase):
    id: Optional[int] = None


class CustomerRead(CustomerBase):
    id: int


# Product Schemas
class ProductBase(BaseModel):
    name: str = Field(min_length=1)
    price: Decimal = Field(gt=0)
    stock: int = Field(ge=0)
    category: str = Field(min_length=1)

    model_config = ConfigDict(from_attributes=True, extra="forbid")

    @field_validator("price")
    @classmethod
    def check_price(cls, value: Decimal) -> Decimal:
        return validate_money(value)


class ProductCreate(ProductBase):
    id: Optional[int] = None


class ProductRead(ProductBase):
    id: int


# Order Schemas
class OrderRead(BaseModel):
    """Order header as returned by searches and reports."""

    id: int
    customer_id: int
    order_date: datetime
    total_amount: Decimal = Field(ge=0)
    status: OrderStatus

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("total_amount")
    @classmethod
    def check_total_amount(cls, value: Decimal) -> Decimal:
        return validate_money(value)


class OrderCreate(BaseModel):
    id: Optional[int] = None
    customer_id: int
    order_date: datetime
    total_amount: Decimal = Field(ge=0)
    status: OrderStatus = OrderStatus.PENDING

    model_config = ConfigDict(extra="forbid")

    @field_validator("total_amount")
    @classmethod
    def check_total_amount(cls, value: Decimal) -> Decimal:
        return validate_money(value)


# OrderItem Schemas
class OrderItemCreate(BaseModel):
    id: Optional[int] = None
    order_id: int
    product_id: int
    quantity: int = Field(gt=0)
    price: Decimal = Field(gt=0)

    model_config = ConfigDict(extra="forbid")

    @field_validator("price")
    @classmethod
    def check_price(cls, value: Decimal) -> Decimal:
        return validate_money(value)


# Payment Schemas
class PaymentCreate(BaseModel):
    id: Optional[int] = None
    order_id: int
    amount: Decimal = Field(gt=0)
    payment_date: datetime
    method: PaymentMethod
    status: PaymentStatus = PaymentStatus.PENDING

    model_config = ConfigDict(extra="forbid")

    @field_validator("amount")
    @classmethod
    def check_amount(cls, value: Decimal) -> Decimal:
        return validate_money(value)


# Report Schemas
class OrderWithDetails(BaseModel):
    """Order of a customer with its payment status and item count."""
    order: OrderRead
    customer_name: str
    payment_status: Optional[PaymentStatus] = None
    item_count: int


class OrderWithCustomer(BaseModel):
    """Order together with the customer's contact details."""
    order: OrderRead
    customer_name: str
    customer_email: str
