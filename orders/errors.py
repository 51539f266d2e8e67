"""Error values shared by the orders domain, use cases and ports.

Errors are plain frozen dataclasses returned inside ``returns.result.Failure``
instead of being raised. Each family (money, shipping address, create-order,
...) subclasses ``DomainError`` so callers can branch on the Python type and on
the ``type`` tag, which carries the precise kind (``NEGATIVE_AMOUNT``,
``EMPTY_FIELD``, ``PRODUCT_NOT_FOUND``...).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DomainError:
    """Base error value.

    Attributes:
        type: Upper snake-case kind, e.g. ``'INVALID_POSTAL_CODE'``.
        message: Human readable description, safe to show to API clients.
    """

    type: str
    message: str


# Kinds the HTTP boundary turns into client errors. Everything not listed
# here is a server error.
_STATUS_BY_TYPE = {
    "VALIDATION_ERROR": 400,
    "PRODUCT_NOT_FOUND": 400,
    "INVALID_PARAMETER": 400,
    "INVALID_REQUEST": 400,
    "NOT_FOUND": 404,
    "CONFLICT": 409,
}


def http_status_for(error_type: str) -> int:
    """Map an error kind to the HTTP status the API layer should use.

    Args:
        error_type: The ``type`` tag of a ``DomainError``.

    Returns:
        int: 400, 404 or 409 for the known client-side kinds, 500 otherwise.
    """
    return _STATUS_BY_TYPE.get(error_type, 500)


def error_to_dict(error: DomainError) -> dict:
    """Render an error as the ``{"type", "message"}`` body used by the API."""
    return {"type": error.type, "message": error.message}
