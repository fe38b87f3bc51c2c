import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from order_service.errors import RepositoryError
from order_service.models import Order, utcnow
from order_service.schemas import validate_order, validate_order_key, validate_status

logger = logging.getLogger(__name__)


class OrderRepository:
    """Order queries and writes over one SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _store_call(self):
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise RepositoryError(reason=str(exc)) from exc

    def find_by_order_id(self, order_id):
        with self._store_call():
            return self.db.query(Order).filter_by(order_id=order_id).first()

    def find_by_email(self, email):
        with self._store_call():
            return self.db.query(Order).filter_by(email=email).all()

    def find_by_id(self, key):
        validate_order_key(key)
        with self._store_call():
            return self.db.get(Order, key)

    def list_newest_first(self):
        with self._store_call():
            return self.db.query(Order).order_by(Order.created_at.desc()).all()

    def save(self, order):
        validate_order(order)
        with self._store_call():
            self.db.add(order)
            self.db.commit()
            self.db.refresh(order)
        return order

    def insert_or_set_status(self, order):
        """Insert a new order; if its order_id was inserted concurrently, update that row's status instead."""
        validate_order(order)
        try:
            self.db.add(order)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            existing = self.find_by_order_id(order.order_id)
            if existing is None:
                raise RepositoryError(reason=f"insert of {order.order_id} rejected")
            logger.info("Order %s was inserted concurrently; updating its status", order.order_id)
            existing.status = order.status
            return self.save(existing)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise RepositoryError(reason=str(exc)) from exc
        self.db.refresh(order)
        return order

    def update_status(self, key, status):
        order = self.find_by_id(key)
        if order is None:
            return None
        validate_status(status)
        order.status = status
        order.updated_at = utcnow()
        return self.save(order)

    def delete(self, order):
        with self._store_call():
            self.db.delete(order)
            self.db.commit()
        return order
