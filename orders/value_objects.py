"""Shared value objects with smart constructors.

Every ``create_*`` function takes raw input and returns
``Result[ValueObject, Error]``; none of them raise for invalid data. String
inputs are trimmed once, before any other rule. These are the single source of
field rules: the order and user validators compose them instead of keeping
their own copies.
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from numbers import Real

from returns.pipeline import is_successful
from returns.result import Failure, Result, Success

from .errors import DomainError


def is_number(value) -> bool:
    """True for real numbers and ``Decimal`` values (bools excluded)."""
    if isinstance(value, bool):
        return False
    return isinstance(value, (Real, Decimal))


def is_integral(value) -> bool:
    """True for ints and for floats or Decimals without a fractional part (bools excluded)."""
    if not is_number(value):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, Decimal):
        return value.is_finite() and value % 1 == 0
    return float(value).is_integer()


def _strip_separators(raw: str) -> str:
    return re.sub(r"[-\s]", "", raw.strip())


# ---- Money ----
@dataclass(frozen=True)
class MoneyError(DomainError):
    """NEGATIVE_AMOUNT | NON_INTEGER_AMOUNT | NEGATIVE_MULTIPLIER | NON_INTEGER_MULTIPLIER"""


@dataclass(frozen=True)
class Money:
    """Non-negative integer amount of yen. Build it with ``create_money``."""

    value: int


def create_money(amount) -> Result[Money, MoneyError]:
    """Validate an amount and wrap it as ``Money``.

    Args:
        amount: Raw amount. Integral floats (``1000.0``) are accepted and
            stored as ``int``.

    Returns:
        Success(Money) or Failure(MoneyError) with ``NEGATIVE_AMOUNT`` or
        ``NON_INTEGER_AMOUNT``. The sign is checked first; non-numeric input
        (``"100"``, ``None``) is ``NON_INTEGER_AMOUNT``.
    """
    if is_number(amount) and amount < 0:
        return Failure(MoneyError("NEGATIVE_AMOUNT", "Amount must be 0 or greater"))
    if not is_integral(amount):
        return Failure(MoneyError("NON_INTEGER_AMOUNT", "Amount must be an integer"))
    return Success(Money(int(amount)))


ZERO = create_money(0).unwrap()


def get_money(money: Money) -> int:
    return money.value


def add_money(a: Money, b: Money) -> Money:
    # the sum of two valid amounts is always valid
    return Money(a.value + b.value)


def multiply_money(money: Money, multiplier) -> Result[Money, MoneyError]:
    """Multiply by a non-negative integer.

    Returns:
        Success(Money) or Failure(MoneyError) with ``NEGATIVE_MULTIPLIER`` or
        ``NON_INTEGER_MULTIPLIER``.
    """
    if is_number(multiplier) and multiplier < 0:
        return Failure(MoneyError("NEGATIVE_MULTIPLIER", "Multiplier must be 0 or greater"))
    if not is_integral(multiplier):
        return Failure(MoneyError("NON_INTEGER_MULTIPLIER", "Multiplier must be an integer"))
    return Success(Money(money.value * int(multiplier)))


# ---- PostalCode ----
@dataclass(frozen=True)
class PostalCodeValidationError(DomainError):
    """INVALID_POSTAL_CODE"""


@dataclass(frozen=True)
class PostalCode:
    value: str  # always "xxx-xxxx"


def create_postal_code(raw: str) -> Result[PostalCode, PostalCodeValidationError]:
    """Accept ``1234567`` or ``123-4567`` and normalize to ``123-4567``."""
    cleaned = _strip_separators(raw)
    if not re.fullmatch(r"[0-9]{7}", cleaned):
        return Failure(PostalCodeValidationError(
            "INVALID_POSTAL_CODE",
            "Postal code must be 7 digits (e.g. 1234567 or 123-4567)",
        ))
    return Success(PostalCode(f"{cleaned[:3]}-{cleaned[3:]}"))


# ---- Bounded text fields ----
def _bounded_text(raw: str, max_length: int, label: str, prefix: str, error_cls):
    trimmed = raw.strip()
    if not trimmed:
        return Failure(error_cls(f"EMPTY_{prefix}", f"{label} must not be empty"))
    if len(trimmed) > max_length:
        return Failure(error_cls(
            f"{prefix}_TOO_LONG", f"{label} must be at most {max_length} characters"
        ))
    return Success(trimmed)


@dataclass(frozen=True)
class PrefectureValidationError(DomainError):
    """EMPTY_PREFECTURE | PREFECTURE_TOO_LONG"""


@dataclass(frozen=True)
class Prefecture:
    value: str


def create_prefecture(raw: str) -> Result[Prefecture, PrefectureValidationError]:
    return _bounded_text(raw, 10, "Prefecture", "PREFECTURE", PrefectureValidationError).map(Prefecture)


@dataclass(frozen=True)
class CityValidationError(DomainError):
    """EMPTY_CITY | CITY_TOO_LONG"""


@dataclass(frozen=True)
class City:
    value: str


def create_city(raw: str) -> Result[City, CityValidationError]:
    return _bounded_text(raw, 50, "City", "CITY", CityValidationError).map(City)


@dataclass(frozen=True)
class AddressLineValidationError(DomainError):
    """EMPTY_ADDRESS_LINE | ADDRESS_LINE_TOO_LONG"""


@dataclass(frozen=True)
class AddressLine:
    value: str


def create_address_line(raw: str) -> Result[AddressLine, AddressLineValidationError]:
    return _bounded_text(raw, 100, "Address line", "ADDRESS_LINE", AddressLineValidationError).map(AddressLine)


@dataclass(frozen=True)
class PersonNameValidationError(DomainError):
    """EMPTY_NAME | NAME_TOO_LONG"""


@dataclass(frozen=True)
class PersonName:
    value: str


def create_person_name(raw: str) -> Result[PersonName, PersonNameValidationError]:
    return _bounded_text(raw, 100, "Name", "NAME", PersonNameValidationError).map(PersonName)


# ---- PhoneNumber ----
@dataclass(frozen=True)
class PhoneNumberValidationError(DomainError):
    """INVALID_PHONE"""


@dataclass(frozen=True)
class PhoneNumber:
    value: str  # "xx-xxxx-xxxx" or "xxx-xxxx-xxxx"


def create_phone_number(raw: str) -> Result[PhoneNumber, PhoneNumberValidationError]:
    """Normalize a 10 or 11 digit number, ignoring hyphens and spaces.

    ``0312345678`` becomes ``03-1234-5678`` and ``09012345678`` becomes
    ``090-1234-5678``.
    """
    cleaned = _strip_separators(raw)
    if not re.fullmatch(r"[0-9]{10,11}", cleaned):
        return Failure(PhoneNumberValidationError(
            "INVALID_PHONE",
            "Phone number must be 10 or 11 digits (e.g. 09012345678 or 090-1234-5678)",
        ))
    if len(cleaned) == 10:
        return Success(PhoneNumber(f"{cleaned[:2]}-{cleaned[2:6]}-{cleaned[6:]}"))
    return Success(PhoneNumber(f"{cleaned[:3]}-{cleaned[3:7]}-{cleaned[7:]}"))


# ---- Email ----
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class EmailError(DomainError):
    """EMPTY | INVALID_FORMAT"""


@dataclass(frozen=True)
class Email:
    value: str


def create_email(raw: str) -> Result[Email, EmailError]:
    trimmed = raw.strip()
    if not trimmed:
        return Failure(EmailError("EMPTY", "Email address must not be empty"))
    if not EMAIL_RE.match(trimmed):
        return Failure(EmailError("INVALID_FORMAT", "Email address format is invalid"))
    return Success(Email(trimmed))


# ---- PasswordHash ----
BCRYPT_HASH_RE = re.compile(r"^\$2[abxy]\$(0[4-9]|[12][0-9]|3[01])\$[./A-Za-z0-9]{53}$")


@dataclass(frozen=True)
class PasswordHashValidationError(DomainError):
    """EMPTY_PASSWORD_HASH | INVALID_PASSWORD_HASH_FORMAT"""


@dataclass(frozen=True)
class PasswordHash:
    value: str


def create_password_hash(raw: str) -> Result[PasswordHash, PasswordHashValidationError]:
    """Accept a bcrypt modular-crypt string (``$2b$10$...``). Not trimmed."""
    if not raw:
        return Failure(PasswordHashValidationError(
            "EMPTY_PASSWORD_HASH", "Password hash must not be empty"
        ))
    if not BCRYPT_HASH_RE.match(raw):
        return Failure(PasswordHashValidationError(
            "INVALID_PASSWORD_HASH_FORMAT",
            "Password hash must be in bcrypt format (e.g. $2a$10$...)",
        ))
    return Success(PasswordHash(raw))


# ---- Address ----
@dataclass(frozen=True)
class Address:
    postal_code: PostalCode
    prefecture: Prefecture
    city: City
    address_line: AddressLine


AddressValidationError = (
    PostalCodeValidationError
    | PrefectureValidationError
    | CityValidationError
    | AddressLineValidationError
)


def create_address(
    postal_code: str, prefecture: str, city: str, address_line: str
) -> Result[Address, AddressValidationError]:
    """Build an Address, stopping at the first invalid field.

    Fields are checked in order: postal code, prefecture, city, address line.
    """
    postal_code_result = create_postal_code(postal_code)
    if not is_successful(postal_code_result):
        return postal_code_result
    prefecture_result = create_prefecture(prefecture)
    if not is_successful(prefecture_result):
        return prefecture_result
    city_result = create_city(city)
    if not is_successful(city_result):
        return city_result
    address_line_result = create_address_line(address_line)
    if not is_successful(address_line_result):
        return address_line_result

    return Success(Address(
        postal_code=postal_code_result.unwrap(),
        prefecture=prefecture_result.unwrap(),
        city=city_result.unwrap(),
        address_line=address_line_result.unwrap(),
    ))
