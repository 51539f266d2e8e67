"""Unit tests for the shared value objects and their smart constructors."""

from decimal import Decimal

import pytest
from returns.pipeline import is_successful

from orders.value_objects import (
    ZERO,
    Money,
    add_money,
    create_address,
    create_address_line,
    create_city,
    create_email,
    create_money,
    create_password_hash,
    create_person_name,
    create_phone_number,
    create_postal_code,
    create_prefecture,
    get_money,
    multiply_money,
)

VALID_BCRYPT = "$2b$10$" + "a" * 53


# ---- Money ----
def test_create_money_ok():
    result = create_money(1000)
    assert is_successful(result)
    assert get_money(result.unwrap()) == 1000


def test_create_money_accepts_zero():
    assert create_money(0).unwrap() == ZERO


def test_create_money_integral_float_is_stored_as_int():
    money = create_money(1500.0).unwrap()
    assert money.value == 1500 and isinstance(money.value, int)


def test_create_money_negative():
    assert create_money(-1).failure().type == "NEGATIVE_AMOUNT"


def test_create_money_fractional():
    assert create_money(99.99).failure().type == "NON_INTEGER_AMOUNT"


def test_create_money_negative_fraction_reports_sign_first():
    assert create_money(-0.5).failure().type == "NEGATIVE_AMOUNT"


def test_add_money():
    a, b = create_money(300).unwrap(), create_money(200).unwrap()
    assert add_money(a, b) == Money(500)


@pytest.mark.parametrize("multiplier, expected", [(0, 0), (1, 1000), (3, 3000)])
def test_multiply_money(multiplier, expected):
    money = create_money(1000).unwrap()
    assert multiply_money(money, multiplier).unwrap().value == expected


def test_multiply_money_rejects_negative_and_fractional():
    money = create_money(1000).unwrap()
    assert multiply_money(money, -2).failure().type == "NEGATIVE_MULTIPLIER"
    assert multiply_money(money, 1.5).failure().type == "NON_INTEGER_MULTIPLIER"


# ---- PostalCode ----
def test_postal_code_with_and_without_hyphen_normalize_the_same():
    plain = create_postal_code("1234567").unwrap()
    hyphenated = create_postal_code("123-4567").unwrap()
    assert plain == hyphenated
    assert plain.value == "123-4567"


def test_postal_code_is_trimmed():
    assert create_postal_code("  123-4567 ").unwrap().value == "123-4567"


@pytest.mark.parametrize("raw", ["", "123456", "12345678", "12a4567", "１２３４５６７"])
def test_postal_code_invalid(raw):
    error = create_postal_code(raw).failure()
    assert error.type == "INVALID_POSTAL_CODE"
    assert "7 digits" in error.message


# ---- Bounded text fields ----
@pytest.mark.parametrize(
    "create, limit, empty_type, long_type",
    [
        (create_prefecture, 10, "EMPTY_PREFECTURE", "PREFECTURE_TOO_LONG"),
        (create_city, 50, "EMPTY_CITY", "CITY_TOO_LONG"),
        (create_address_line, 100, "EMPTY_ADDRESS_LINE", "ADDRESS_LINE_TOO_LONG"),
        (create_person_name, 100, "EMPTY_NAME", "NAME_TOO_LONG"),
    ],
)
def test_bounded_text_rules(create, limit, empty_type, long_type):
    assert create("   ").failure().type == empty_type
    assert create("x" * (limit + 1)).failure().type == long_type
    assert create("x" * limit).unwrap().value == "x" * limit
    # trimming happens before the length check
    assert create("  " + "x" * limit + "  ").unwrap().value == "x" * limit


# ---- PhoneNumber ----
def test_phone_number_11_digits_is_hyphenated():
    assert create_phone_number("09012345678").unwrap().value == "090-1234-5678"


def test_phone_number_10_digits_is_hyphenated():
    assert create_phone_number("0312345678").unwrap().value == "03-1234-5678"


def test_phone_number_ignores_existing_hyphens_and_spaces():
    assert create_phone_number(" 090 1234-5678 ").unwrap().value == "090-1234-5678"


@pytest.mark.parametrize("raw", ["090123456", "090123456789", "090abcd5678", ""])
def test_phone_number_invalid(raw):
    assert create_phone_number(raw).failure().type == "INVALID_PHONE"


# ---- Email ----
def test_email_ok_and_trimmed():
    assert create_email(" taro@example.com ").unwrap().value == "taro@example.com"


def test_email_errors():
    assert create_email("  ").failure().type == "EMPTY"
    assert create_email("taro@example").failure().type == "INVALID_FORMAT"
    assert create_email("taro example@x.com").failure().type == "INVALID_FORMAT"


# ---- PasswordHash ----
def test_password_hash_ok():
    assert create_password_hash(VALID_BCRYPT).unwrap().value == VALID_BCRYPT


def test_password_hash_errors():
    assert create_password_hash("").failure().type == "EMPTY_PASSWORD_HASH"
    assert create_password_hash("plaintext").failure().type == "INVALID_PASSWORD_HASH_FORMAT"
    assert create_password_hash("$2b$03$" + "a" * 53).failure().type == "INVALID_PASSWORD_HASH_FORMAT"


# ---- Address ----
def test_create_address_ok():
    address = create_address("1500001", " Tokyo ", "Shibuya", "1-2-3").unwrap()
    assert address.postal_code.value == "150-0001"
    assert address.prefecture.value == "Tokyo"


def test_create_address_reports_first_invalid_field():
    result = create_address("bad", "", "", "")
    assert result.failure().type == "INVALID_POSTAL_CODE"
    result = create_address("1500001", "Tokyo", "", "")
    assert result.failure().type == "EMPTY_CITY"


# ---- Wrong-typed and Decimal input ----
@pytest.mark.parametrize("raw", ["100", None, "abc", True])
def test_create_money_non_number_is_a_failure(raw):
    assert create_money(raw).failure().type == "NON_INTEGER_AMOUNT"


@pytest.mark.parametrize("raw", ["2", None])
def test_multiply_money_non_number_is_a_failure(raw):
    assert multiply_money(Money(1), raw).failure().type == "NON_INTEGER_MULTIPLIER"


def test_whole_decimal_is_accepted():
    assert create_money(Decimal("100")).unwrap() == Money(100)
    assert multiply_money(Money(10), Decimal("3")).unwrap() == Money(30)


def test_fractional_and_negative_decimals():
    assert create_money(Decimal("99.5")).failure().type == "NON_INTEGER_AMOUNT"
    assert create_money(Decimal("-1")).failure().type == "NEGATIVE_AMOUNT"
