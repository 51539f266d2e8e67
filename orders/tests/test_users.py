"""Tests for password policy, user profiles and the User entity."""

import pytest

from orders.users import (
    UnvalidatedProfileAddress,
    UnvalidatedUserProfile,
    create_user,
    update_profile,
    validate_password,
    validate_user_profile,
)
from orders.value_objects import create_email, create_password_hash


@pytest.fixture
def raw_profile():
    return UnvalidatedUserProfile(
        name="Hanako",
        address=UnvalidatedProfileAddress(
            postal_code="1500001", prefecture="Tokyo", city="Shibuya", address_line="4-5-6"
        ),
        phone="0312345678",
    )


def test_password_policy():
    assert validate_password("correct horse").unwrap() == "correct horse"
    assert validate_password("   ").failure().type == "EMPTY"
    assert validate_password("short").failure().type == "TOO_SHORT"


def test_validate_user_profile(raw_profile):
    profile = validate_user_profile(raw_profile).unwrap()
    assert profile.address.postal_code == "150-0001"
    assert profile.phone == "03-1234-5678"


@pytest.mark.parametrize(
    "mutate, expected",
    [
        (lambda p: setattr(p, "name", ""), "EMPTY_FIELD"),
        (lambda p: setattr(p.address, "postal_code", "1"), "INVALID_POSTAL_CODE"),
        (lambda p: setattr(p.address, "city", "x" * 51), "FIELD_TOO_LONG"),
        (lambda p: setattr(p, "phone", "123"), "INVALID_PHONE"),
    ],
)
def test_user_profile_errors(raw_profile, mutate, expected):
    mutate(raw_profile)
    assert validate_user_profile(raw_profile).failure().type == expected


def test_create_user_and_update_profile(raw_profile):
    user = create_user(
        create_email("hanako@example.com").unwrap(),
        create_password_hash("$2a$12$" + "b" * 53).unwrap(),
    )
    assert user.profile is None
    profile = validate_user_profile(raw_profile).unwrap()
    updated = update_profile(user, profile)
    assert updated.profile == profile
    assert user.profile is None
