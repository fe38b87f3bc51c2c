import logging

from fastapi import APIRouter, Depends

from order_service.config import CHECKOUT_CURRENCY, ORDERS_API_PREFIX
from order_service.dependencies import get_gateway, get_repository
from order_service.errors import GatewayError, InvalidInput, NotFound, failure_reported
from order_service.models import Order
from order_service.schemas import (
    CheckoutSessionRequest,
    ConfirmPaymentRequest,
    OrderStatusUpdate,
    serialize_order,
    validate_checkout_products,
)
from order_service.stripe_service import build_line_item

logger = logging.getLogger(__name__)

router = APIRouter(prefix=ORDERS_API_PREFIX, tags=["orders"])

# An empty query result is reported as 404, not as an empty 200 list.
EMPTY_RESULT_IS_NOT_FOUND = True


def require_results(orders, message):
    if EMPTY_RESULT_IS_NOT_FOUND and not orders:
        raise NotFound(message)
    return orders


def order_status_for(payment_intent_status):
    return "pending" if payment_intent_status == "succeeded" else "failed"


@router.post("/create-checkout-session")
def create_checkout_session(request: CheckoutSessionRequest, gateway=Depends(get_gateway)):
    products = validate_checkout_products(request.products)

    with failure_reported("Failed to create checkout session"):
        line_items = [build_line_item(product, CHECKOUT_CURRENCY) for product in products]
        session_id = gateway.create_checkout_session(line_items)

    return {"id": session_id}


@router.post("/confirm-payment")
def confirm_payment(
    request: ConfirmPaymentRequest,
    gateway=Depends(get_gateway),
    repo=Depends(get_repository),
):
    if not request.session_id:
        raise InvalidInput("Session ID is required")

    with failure_reported("Failed to confirm payment"):
        session = gateway.retrieve_checkout_session(request.session_id)
        if not session.payment_intent_id:
            raise GatewayError(reason=f"session {session.id} has no payment intent")

        status = order_status_for(session.payment_intent_status)
        order = repo.find_by_order_id(session.payment_intent_id)

        if order is None:
            order = repo.insert_or_set_status(Order(
                order_id=session.payment_intent_id,
                products=[
                    {"productId": product_id, "quantity": quantity}
                    for product_id, quantity in session.line_items
                ],
                amount=session.amount_total / 100,
                email=session.customer_email,
                status=status,
            ))
        else:
            order.status = status
            order = repo.save(order)

    logger.info("Confirmed payment %s as %s", order.order_id, order.status)
    return {"order": serialize_order(order)}


@router.get("/")
def list_orders(repo=Depends(get_repository)):
    with failure_reported("Failed to fetch all orders"):
        orders = repo.list_newest_first()

    require_results(orders, "No orders found")
    return [serialize_order(order) for order in orders]


@router.get("/order/{order_key}")
def get_order(order_key: str, repo=Depends(get_repository)):
    with failure_reported("Failed to fetch order by ID"):
        order = repo.find_by_id(order_key)

    if order is None:
        raise NotFound("Order not found")
    return serialize_order(order)


@router.patch("/update-order-status/{order_key}")
def update_order_status(order_key: str, request: OrderStatusUpdate, repo=Depends(get_repository)):
    if not request.status:
        raise InvalidInput("Status is required")

    with failure_reported("Failed to update order status"):
        order = repo.update_status(order_key, request.status)

    if order is None:
        raise NotFound("Order not found")

    logger.info("Order %s status set to %s", order.id, order.status)
    return {"message": "Order status updated successfully", "order": serialize_order(order)}


@router.delete("/delete-order/{order_key}")
def delete_order(order_key: str, repo=Depends(get_repository)):
    with failure_reported("Failed to delete order"):
        order = repo.find_by_id(order_key)
        if order is None:
            raise NotFound("Order not found")
        deleted = serialize_order(order)
        repo.delete(order)

    return {"message": "Order deleted successfully", "order": deleted}


# Registered last so the fixed paths above take precedence.
@router.get("/{email}")
def list_orders_by_email(email: str, repo=Depends(get_repository)):
    if not email.strip():
        raise InvalidInput("Email is required")

    with failure_reported("Failed to fetch orders by email"):
        orders = repo.find_by_email(email)

    require_results(orders, "No orders found for this email")
    return {"orders": [serialize_order(order) for order in orders]}
