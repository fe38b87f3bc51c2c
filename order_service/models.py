import secrets
from datetime import datetime, timezone

from sqlalchemy import Column, String, Numeric, DateTime, JSON
from order_service.database import Base


def new_order_key():
    # 24 hex chars, same shape as a document-store object id
    return secrets.token_hex(12)


def utcnow():
    return datetime.now(timezone.utc)


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(24), primary_key=True, default=new_order_key)
    order_id = Column(String, unique=True, index=True, nullable=False)  # Stripe PaymentIntent ID
    products = Column(JSON, nullable=False, default=list)               # [{"productId", "quantity"}]
    amount = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    email = Column(String, index=True, nullable=False)
    status = Column(String, nullable=False, default="pending")          # see schemas.ORDER_STATUSES
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
