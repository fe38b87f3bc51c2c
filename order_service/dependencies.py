from order_service.database import SessionLocal
from order_service.repository import OrderRepository
from order_service.stripe_service import PaymentGateway, StripeGateway


def get_repository():
    db = SessionLocal()
    try:
        yield OrderRepository(db)
    finally:
        db.close()


def get_gateway() -> PaymentGateway:
    return StripeGateway()
