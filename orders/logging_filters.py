"""Logging setup and filters for enriching log records with request context.

``REQUEST_ID_CTX`` carries the id of the request being served. The API layer
(or a test) binds it with ``bind_request_id``; ``RequestIdFilter`` then copies
it onto every record so formatters can reference ``%(request_id)s`` without
individual log statements passing it around.
"""

import contextvars
import logging
import uuid

from pythonjsonlogger import jsonlogger

from .settings import Settings

REQUEST_ID_CTX = contextvars.ContextVar("request_id", default="-")

JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s"


def bind_request_id(rid: str | None = None) -> str:
    """Set the current request id, generating a UUID4 when none is given.

    Returns:
        str: The id now stored in ``REQUEST_ID_CTX``.
    """
    rid = rid or str(uuid.uuid4())
    REQUEST_ID_CTX.set(rid)
    return rid


class RequestIdFilter(logging.Filter):
    """Attach a ``request_id`` attribute to log records.

    If no id is bound a hyphen ("-") is used so formatters can always
    reference ``%(request_id)s``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Populate ``record.request_id`` and allow the record to be logged.

        Args:
            record: The log record to enrich.

        Returns:
            bool: Always True.
        """
        record.request_id = REQUEST_ID_CTX.get()
        return True


def configure_logging(settings: Settings) -> logging.Logger:
    """Install a single stream handler on the ``orders`` logger.

    JSON output uses ``pythonjsonlogger``; plain text is used when
    ``settings.log_json`` is false. Calling this again replaces the handler
    instead of adding a second one.

    Returns:
        logging.Logger: The configured ``orders`` logger.
    """
    logger = logging.getLogger("orders")
    for existing in list(logger.handlers):
        if getattr(existing, "_orders_handler", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler()
    handler._orders_handler = True
    if settings.log_json:
        handler.setFormatter(jsonlogger.JsonFormatter(JSON_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    handler.addFilter(RequestIdFilter())

    logger.addHandler(handler)
    logger.setLevel(settings.log_level)
    return logger
