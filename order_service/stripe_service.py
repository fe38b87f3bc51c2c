import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple

import stripe

from order_service.config import CANCEL_URL, STRIPE_SECRET_KEY, SUCCESS_URL
from order_service.errors import GatewayError
from order_service.schemas import to_minor_units

logger = logging.getLogger(__name__)

stripe.api_key = STRIPE_SECRET_KEY


@dataclass
class CheckoutSession:
    """The parts of a retrieved Stripe checkout session the order routes use."""

    id: str
    payment_intent_id: Optional[str]
    payment_intent_status: Optional[str]
    amount_total: int
    customer_email: Optional[str]
    line_items: List[Tuple[str, int]] = field(default_factory=list)


class PaymentGateway(Protocol):
    def create_checkout_session(self, line_items: list) -> str: ...

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession: ...


class StripeGateway:
    """Hosted checkout sessions through the Stripe SDK."""

    def __init__(self, success_url: str = SUCCESS_URL, cancel_url: str = CANCEL_URL):
        self.success_url = success_url
        self.cancel_url = cancel_url

    def create_checkout_session(self, line_items: list) -> str:
        try:
            session = stripe.checkout.Session.create(
                payment_method_types=["card"],
                line_items=line_items,
                mode="payment",
                success_url=self.success_url,
                cancel_url=self.cancel_url,
            )
        except stripe.StripeError as exc:
            raise GatewayError(reason=str(exc)) from exc
        logger.info("Created checkout session %s", session.id)
        return session.id

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.retrieve(
                session_id,
                expand=["line_items", "payment_intent"],
            )
        except stripe.StripeError as exc:
            raise GatewayError(reason=str(exc)) from exc

        try:
            line_items = session.line_items
            if getattr(line_items, "has_more", False):
                line_items = stripe.checkout.Session.list_line_items(session_id, limit=100).auto_paging_iter()
            else:
                line_items = line_items.data
            return to_checkout_session(session, line_items)
        except stripe.StripeError as exc:
            raise GatewayError(reason=str(exc)) from exc
        except (AttributeError, KeyError, TypeError) as exc:
            raise GatewayError(reason=f"unexpected session payload: {exc}") from exc


def to_checkout_session(session, line_items=None) -> CheckoutSession:
    if line_items is None:
        line_items = session.line_items.data

    intent = session.payment_intent
    # payment_intent is an id string unless it was expanded
    if isinstance(intent, str):
        intent_id, intent_status = intent, None
    elif intent is not None:
        intent_id, intent_status = intent.id, intent.status
    else:
        intent_id = intent_status = None

    customer = session.customer_details
    return CheckoutSession(
        id=session.id,
        payment_intent_id=intent_id,
        payment_intent_status=intent_status,
        amount_total=session.amount_total,
        customer_email=customer.email if customer is not None else None,
        line_items=[(item.price.product, item.quantity) for item in line_items],
    )


def build_line_item(product: dict, currency: str) -> dict:
    product_data = {"name": product["name"]}
    if product.get("image"):
        product_data["images"] = [product["image"]]
    return {
        "price_data": {
            "currency": currency,
            "product_data": product_data,
            "unit_amount": to_minor_units(product["price"]),
        },
        "quantity": product["quantity"],
    }
