from __future__ import annotations

from decimal import Decimal

import pytest

from app.core.enums import PaymentStatus
from app.core.exceptions import InconsistentStateError, InvalidAmount, ValidationError
from app.ledger import (
    LineItem,
    ProductSnapshot,
    add_line,
    assert_consistent,
    derive_balance,
    derive_payment_status,
    edit_line,
    reconcile,
    recompute_aggregates,
    validate_payment_amount,
)

BOTTLE = ProductSnapshot.of(product_id=1, name="Steel Bottle", price="100", tax_rate=18)


def _line(total: str, rate: str) -> LineItem:
    return LineItem.create(product_id=1, product_name="Item", quantity=1, unit_price=total, tax_rate=rate)


def test_worked_example_payment_then_edit():
    items = add_line((), BOTTLE, 3)
    figures = reconcile(items, [])
    assert (figures.subtotal, figures.tax_amount, figures.total_amount) == (
        Decimal("300.00"),
        Decimal("54.00"),
        Decimal("354.00"),
    )
    assert figures.payment_status is PaymentStatus.UNPAID

    figures = reconcile(items, [Decimal("150")])
    assert figures.payment_status is PaymentStatus.PARTIAL
    assert figures.balance_amount == Decimal("204.00")

    figures = reconcile(items, [Decimal("150"), Decimal("204")])
    assert figures.payment_status is PaymentStatus.PAID
    assert figures.balance_amount == Decimal("0.00")

    items = edit_line(items, 0, quantity=5)
    figures = reconcile(items, [Decimal("150"), Decimal("204")])
    assert figures.total_amount == Decimal("590.00")
    assert figures.paid_amount == Decimal("354.00")
    assert figures.balance_amount == Decimal("236.00")
    assert figures.payment_status is PaymentStatus.PARTIAL


def test_mixed_rates_are_summed_then_rounded_once():
    # Per-line rounding would give 0.01 + 0.01 = 0.02.
    items = (_line("0.05", "10"), _line("0.05", "10"))
    totals = recompute_aggregates(items)
    assert totals.tax_amount == Decimal("0.01")
    assert totals.total_amount == Decimal("0.11")


def test_mixed_tax_rates():
    items = (_line("100", "18"), _line("200", "5"), _line("50", "0"))
    totals = recompute_aggregates(items)
    assert totals.subtotal == Decimal("350.00")
    assert totals.tax_amount == Decimal("28.00")
    assert totals.total_amount == Decimal("378.00")


def test_aggregates_do_not_depend_on_line_order():
    items = (_line("10.33", "18"), _line("7.77", "12"), _line("1.01", "28"))
    assert recompute_aggregates(items) == recompute_aggregates(tuple(reversed(items)))


def test_empty_items_rejected():
    with pytest.raises(ValidationError):
        recompute_aggregates(())


def test_payment_order_does_not_matter():
    items = add_line((), BOTTLE, 3)
    forward = reconcile(items, [Decimal("100"), Decimal("54.50")])
    backward = reconcile(items, [Decimal("54.50"), Decimal("100")])
    assert forward == backward


@pytest.mark.parametrize(
    ("paid", "total", "expected"),
    [
        ("0", "100", PaymentStatus.UNPAID),
        ("0.01", "100", PaymentStatus.PARTIAL),
        ("100", "100", PaymentStatus.PAID),
        ("120", "100", PaymentStatus.PAID),
        ("0", "0", PaymentStatus.PAID),
    ],
)
def test_derive_payment_status(paid, total, expected):
    assert derive_payment_status(Decimal(paid), Decimal(total)) is expected


def test_overpayment_floors_balance_and_keeps_raw_paid_amount():
    figures = reconcile(add_line((), BOTTLE, 1), [Decimal("200")])
    assert figures.paid_amount == Decimal("200.00")
    assert figures.balance_amount == Decimal("0.00")
    assert figures.payment_status is PaymentStatus.PAID
    assert derive_balance(Decimal("10"), Decimal("25")) == Decimal("0.00")


@pytest.mark.parametrize("amount", [0, -5, "-0.01", "abc", None])
def test_validate_payment_amount_rejects(amount):
    with pytest.raises(InvalidAmount):
        validate_payment_amount(amount)


def test_validate_payment_amount_rounds_to_cents():
    assert validate_payment_amount("10.005") == Decimal("10.01")


def test_assert_consistent_accepts_fresh_figures():
    items = add_line((), BOTTLE, 2)
    figures = reconcile(items, [Decimal("50")])
    assert assert_consistent(figures, items, [Decimal("50")]) == figures


def test_assert_consistent_flags_stale_status():
    items = add_line((), BOTTLE, 2)
    stored = reconcile(items, [])
    with pytest.raises(InconsistentStateError, match="payment_status"):
        assert_consistent(stored, items, [Decimal("50")])


def test_assert_consistent_flags_bad_line_total():
    good = add_line((), BOTTLE, 2)
    broken = (LineItem(**{**good[0].__dict__, "line_total": Decimal("1.00")}),)
    with pytest.raises(InconsistentStateError, match="Line 0"):
        assert_consistent(reconcile(good, []), broken, [])
