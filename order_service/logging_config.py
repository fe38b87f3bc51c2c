"""JSON logging for the order service process."""

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from order_service.config import LOG_LEVEL, SERVICE_NAME


class ServiceNameFilter(logging.Filter):
    """Stamp every record with the service name."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = SERVICE_NAME
        return True


def configure_logging() -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(ServiceNameFilter())
    handler.setFormatter(
        JsonFormatter("%(asctime)s %(levelname)s %(service_name)s %(name)s %(message)s")
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(LOG_LEVEL)
