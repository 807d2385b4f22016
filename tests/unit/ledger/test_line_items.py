from __future__ import annotations

from decimal import Decimal

import pytest

from app.core.exceptions import IndexOutOfRange, InvalidAmount, InvalidQuantity, ValidationError
from app.ledger import LineItem, ProductSnapshot, add_line, edit_line, remove_line

BOTTLE = ProductSnapshot.of(product_id=1, name="Steel Bottle", price="100", tax_rate=18)
NOTEBOOK = ProductSnapshot.of(product_id=2, name="Notebook", price="45.50", tax_rate=12)


def test_add_line_snapshots_product_and_derives_total():
    items = add_line((), BOTTLE, 3)
    assert len(items) == 1
    line = items[0]
    assert line.product_name == "Steel Bottle"
    assert line.unit_price == Decimal("100.00")
    assert line.tax_rate == Decimal("18.00")
    assert line.line_total == Decimal("300.00")


def test_add_line_never_merges_duplicate_products():
    items = add_line(add_line((), BOTTLE, 1), BOTTLE, 2)
    assert [line.quantity for line in items] == [Decimal("1.000"), Decimal("2.000")]


def test_add_line_does_not_mutate_input():
    original = add_line((), BOTTLE, 1)
    updated = add_line(original, NOTEBOOK, 1)
    assert len(original) == 1
    assert len(updated) == 2


@pytest.mark.parametrize("quantity", [0, -1, "0", "abc"])
def test_add_line_rejects_non_positive_or_malformed_quantity(quantity):
    with pytest.raises(InvalidQuantity):
        add_line((), BOTTLE, quantity)


def test_snapshot_rejects_negative_price():
    with pytest.raises(InvalidAmount):
        ProductSnapshot.of(product_id=3, name="Refund", price="-1", tax_rate=0)


def test_fractional_quantity_rounds_line_total_half_up():
    line = LineItem.create(product_id=1, product_name="Rice", quantity="1.005", unit_price="10", tax_rate=5)
    assert line.line_total == Decimal("10.05")


def test_float_input_does_not_drift():
    line = LineItem.create(product_id=1, product_name="Pen", quantity=3, unit_price=0.1, tax_rate=0)
    assert line.unit_price == Decimal("0.10")
    assert line.line_total == Decimal("0.30")


def test_edit_line_quantity_re_derives_total_and_keeps_tax_rate():
    items = add_line((), BOTTLE, 3)
    edited = edit_line(items, 0, quantity=5)
    assert edited[0].line_total == Decimal("500.00")
    assert edited[0].tax_rate == Decimal("18.00")
    assert items[0].line_total == Decimal("300.00")


def test_edit_line_price_only():
    items = add_line((), NOTEBOOK, 2)
    edited = edit_line(items, 0, price="40")
    assert edited[0].unit_price == Decimal("40.00")
    assert edited[0].line_total == Decimal("80.00")


def test_edit_line_allows_zero_price():
    edited = edit_line(add_line((), BOTTLE, 2), 0, price=0)
    assert edited[0].line_total == Decimal("0.00")


def test_edit_line_requires_a_field():
    with pytest.raises(ValidationError):
        edit_line(add_line((), BOTTLE, 1), 0)


@pytest.mark.parametrize("index", [-1, 1, 5, "0", True])
def test_edit_and_remove_reject_bad_index(index):
    items = add_line((), BOTTLE, 1)
    with pytest.raises(IndexOutOfRange):
        edit_line(items, index, quantity=2)
    with pytest.raises(IndexOutOfRange):
        remove_line(items, index)


def test_remove_line_keeps_order_of_the_rest():
    items = add_line(add_line(add_line((), BOTTLE, 1), NOTEBOOK, 1), BOTTLE, 4)
    remaining = remove_line(items, 1)
    assert [line.product_id for line in remaining] == [1, 1]
    assert remaining[1].quantity == Decimal("4.000")
