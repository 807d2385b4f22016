from __future__ import annotations

from decimal import Decimal, InvalidOperation

import pytest

from app.core.exceptions import ValidationError
from app.utils.money import to_decimal, to_money
from app.utils.validators import contains_pattern, require_text, sanitize_text, validate_email, validate_gst_number


def test_sanitize_text_strips_null_and_trims():
    assert sanitize_text("  hello\x00world  ") == "helloworld"


def test_require_text_rejects_blank():
    with pytest.raises(ValidationError, match="Name is required"):
        require_text("   ", "Name")


def test_email_and_gst_are_normalized():
    assert validate_email(" Accounts@Example.COM ") == "accounts@example.com"
    assert validate_email("") is None
    assert validate_gst_number("27abcde1234f1z5") == "27ABCDE1234F1Z5"
    with pytest.raises(ValidationError):
        validate_gst_number("27ABCDE1234F1X5")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2.675", Decimal("2.68")),
        (2.675, Decimal("2.68")),
        ("0.005", Decimal("0.01")),
        (10, Decimal("10.00")),
    ],
)
def test_to_money_rounds_half_up(value, expected):
    assert to_money(value) == expected


@pytest.mark.parametrize("value", [True, "nan", "inf", "twelve"])
def test_to_decimal_rejects_non_numbers(value):
    with pytest.raises(InvalidOperation):
        to_decimal(value)


def test_contains_pattern_escapes_like_wildcards():
    assert contains_pattern("50%_off") == r"%50\%\_off%"
    assert contains_pattern("a\\b") == r"%a\\b%"
