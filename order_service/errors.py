"""HTTP error taxonomy for the order routes.

Every error is an ``HTTPException`` so FastAPI renders it as
``{"detail": <message>}``. The ``reason`` attribute holds internal detail
that is logged and never sent to the caller.
"""

import logging
from contextlib import contextmanager

from fastapi import HTTPException

logger = logging.getLogger(__name__)


class OrderServiceError(HTTPException):
    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail=None, reason=None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)
        self.reason = reason


class InvalidInput(OrderServiceError):
    status_code = 400
    default_detail = "Invalid input"


class NotFound(OrderServiceError):
    status_code = 404
    default_detail = "Not found"


class GatewayError(OrderServiceError):
    default_detail = "Payment gateway error"


class RepositoryError(OrderServiceError):
    default_detail = "Order store error"


@contextmanager
def failure_reported(message):
    """Log gateway/repository failures and hide their detail behind ``message``."""
    try:
        yield
    except (GatewayError, RepositoryError) as exc:
        logger.error("%s: %s", message, exc.reason or exc.detail)
        raise type(exc)(message, reason=exc.reason) from exc
