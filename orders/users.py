"""Customer accounts: profile validation, the User entity and password policy.

Password hashing itself belongs to an adapter; the domain only checks the
plain-text policy and the shape of a stored hash (``PasswordHash``).
"""

from dataclasses import dataclass, replace

from returns.pipeline import is_successful
from returns.result import Failure, Result, Success

from .domain import as_field_error
from .errors import DomainError
from .value_objects import (
    Email,
    PasswordHash,
    create_address_line,
    create_city,
    create_person_name,
    create_phone_number,
    create_postal_code,
    create_prefecture,
)

MIN_PASSWORD_LENGTH = 8


@dataclass(frozen=True)
class PasswordValidationError(DomainError):
    """EMPTY | TOO_SHORT"""


def validate_password(plain: str) -> Result[str, PasswordValidationError]:
    if not plain.strip():
        return Failure(PasswordValidationError("EMPTY", "Password must not be empty"))
    if len(plain) < MIN_PASSWORD_LENGTH:
        return Failure(PasswordValidationError(
            "TOO_SHORT", f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        ))
    return Success(plain)


@dataclass
class UnvalidatedProfileAddress:
    postal_code: str
    prefecture: str
    city: str
    address_line: str


@dataclass
class UnvalidatedUserProfile:
    name: str
    address: UnvalidatedProfileAddress
    phone: str


@dataclass(frozen=True)
class ProfileAddress:
    postal_code: str
    prefecture: str
    city: str
    address_line: str


@dataclass(frozen=True)
class ValidatedUserProfile:
    name: str
    address: ProfileAddress
    phone: str


@dataclass(frozen=True)
class UserProfileValidationError(DomainError):
    """EMPTY_FIELD | FIELD_TOO_LONG | INVALID_POSTAL_CODE | INVALID_PHONE"""


def validate_user_profile(
    unvalidated: UnvalidatedUserProfile,
) -> Result[ValidatedUserProfile, UserProfileValidationError]:
    """Validate a profile, returning the first failing field.

    Order: name, postal code, prefecture, city, address line, phone. Uses the
    same field rules as shipping addresses and customer info.
    """
    address = unvalidated.address
    steps = (
        ("name", create_person_name, unvalidated.name),
        ("postal_code", create_postal_code, address.postal_code),
        ("prefecture", create_prefecture, address.prefecture),
        ("city", create_city, address.city),
        ("address_line", create_address_line, address.address_line),
        ("phone", create_phone_number, unvalidated.phone),
    )
    values = {}
    for field_name, create, raw in steps:
        result = create(raw)
        if not is_successful(result):
            return Failure(as_field_error(result.failure(), UserProfileValidationError))
        values[field_name] = result.unwrap().value

    return Success(ValidatedUserProfile(
        name=values["name"],
        address=ProfileAddress(
            postal_code=values["postal_code"],
            prefecture=values["prefecture"],
            city=values["city"],
            address_line=values["address_line"],
        ),
        phone=values["phone"],
    ))


@dataclass(frozen=True)
class User:
    email: Email
    password_hash: PasswordHash
    profile: ValidatedUserProfile | None = None


def create_user(email: Email, password_hash: PasswordHash) -> User:
    return User(email=email, password_hash=password_hash)


def update_profile(user: User, profile: ValidatedUserProfile) -> User:
    return replace(user, profile=profile)
