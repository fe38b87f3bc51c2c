import math
import re
from datetime import datetime
from numbers import Real
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from order_service.errors import InvalidInput, RepositoryError

ORDER_STATUSES = ("pending", "processing", "shipped", "completed", "failed")

ORDER_KEY_PATTERN = re.compile(r"^[0-9a-f]{24}$")


class CheckoutSessionRequest(BaseModel):
    products: Any = None


class ConfirmPaymentRequest(BaseModel):
    session_id: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    status: Optional[str] = None


class OrderProduct(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: str
    quantity: int


class OrderOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    order_id: str
    products: List[OrderProduct]
    amount: float
    email: str
    status: str
    created_at: datetime
    updated_at: datetime


def serialize_order(order):
    return OrderOut.model_validate(order).model_dump(by_alias=True, mode="json")


def _is_number(value):
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _is_positive_int(value):
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def to_minor_units(price):
    """Convert a decimal price to cents, rounding halves up."""
    return math.floor(price * 100 + 0.5)


def validate_checkout_products(products):
    if not products or not isinstance(products, list):
        raise InvalidInput("Invalid or missing products")

    for product in products:
        if not isinstance(product, dict):
            raise InvalidInput("Invalid or missing products")
        name = product.get("name")
        price = product.get("price")
        if not isinstance(name, str) or not name.strip():
            raise InvalidInput("Invalid or missing products")
        if not _is_number(price) or price < 0:
            raise InvalidInput("Invalid or missing products")
        if not _is_positive_int(product.get("quantity")):
            raise InvalidInput("Invalid or missing products")
    return products


def validate_order_key(key):
    if not isinstance(key, str) or not ORDER_KEY_PATTERN.match(key):
        raise RepositoryError(reason=f"malformed order id {key!r}")
    return key


def validate_status(status):
    if status not in ORDER_STATUSES:
        raise RepositoryError(reason=f"status {status!r} is not one of {ORDER_STATUSES}")
    return status


def validate_order(order):
    """Check an Order row against its schema constraints before it is written."""
    if not isinstance(order.order_id, str) or not order.order_id:
        raise RepositoryError(reason="order_id is required")
    if not isinstance(order.email, str) or not order.email:
        raise RepositoryError(reason="email is required")
    if not _is_number(order.amount) or order.amount < 0:
        raise RepositoryError(reason=f"invalid amount {order.amount!r}")
    if not isinstance(order.products, list):
        raise RepositoryError(reason="products must be a list")
    for product in order.products:
        if not isinstance(product, dict) or not product.get("productId"):
            raise RepositoryError(reason=f"invalid product entry {product!r}")
        if not _is_positive_int(product.get("quantity")):
            raise RepositoryError(reason=f"invalid quantity in {product!r}")
    validate_status(order.status)
    return order
