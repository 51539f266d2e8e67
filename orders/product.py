"""Product catalog aggregate and its value objects."""

from dataclasses import dataclass

from returns.result import Failure, Result, Success

from .errors import DomainError
from .value_objects import is_integral, is_number


@dataclass(frozen=True)
class ProductIdError(DomainError):
    """INVALID_ID"""


@dataclass(frozen=True)
class ProductId:
    value: int


def create_product_id(value) -> Result[ProductId, ProductIdError]:
    if not is_integral(value) or value <= 0:
        return Failure(ProductIdError("INVALID_ID", "ProductId must be a positive integer"))
    return Success(ProductId(int(value)))


@dataclass(frozen=True)
class PriceError(DomainError):
    """INVALID_PRICE | NEGATIVE_PRICE"""


@dataclass(frozen=True)
class Price:
    """Catalog price as published by the source; may carry decimals."""

    value: float


def create_price(value) -> Result[Price, PriceError]:
    """Wrap a catalog price; Decimals are stored as float.

    Returns:
        Success(Price), or Failure(PriceError) with ``INVALID_PRICE`` for
        non-numeric input or ``NEGATIVE_PRICE``.
    """
    if not is_number(value):
        return Failure(PriceError("INVALID_PRICE", "Price must be a number"))
    if value < 0:
        return Failure(PriceError("NEGATIVE_PRICE", "Price must be 0 or greater"))
    return Success(Price(float(value)))


@dataclass(frozen=True)
class ProductError(DomainError):
    """EMPTY_TITLE"""


@dataclass(frozen=True)
class ProductInput:
    id: int
    title: str
    price: float
    description: str = ""


@dataclass(frozen=True)
class Product:
    id: ProductId
    title: str
    price: Price
    description: str


def create_product(data: ProductInput) -> Result[Product, DomainError]:
    """Build a Product from raw catalog data.

    The title is checked first, then the id, then the price. An empty
    description is allowed.

    Returns:
        Success(Product), or Failure with ``EMPTY_TITLE``, ``INVALID_ID``,
        ``INVALID_PRICE`` or ``NEGATIVE_PRICE``.
    """
    if not isinstance(data.title, str) or not data.title.strip():
        return Failure(ProductError("EMPTY_TITLE", "Title is required"))
    return create_product_id(data.id).bind(
        lambda product_id: create_price(data.price).map(
            lambda price: Product(
                id=product_id,
                title=data.title,
                price=price,
                description=data.description,
            )
        )
    )


def get_id(product: Product) -> int:
    return product.id.value


def get_title(product: Product) -> str:
    return product.title


def get_price(product: Product) -> float:
    return product.price.value


def get_description(product: Product) -> str:
    return product.description
