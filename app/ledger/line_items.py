"""Line item value objects and the add/edit/remove operations on them."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation

from app.core.exceptions import IndexOutOfRange, InvalidAmount, InvalidQuantity, ValidationError
from app.utils.money import to_decimal, to_money

QUANTITY_STEP = Decimal("0.001")
RATE_STEP = Decimal("0.01")

Number = Decimal | int | float | str


def _quantity(value: Number) -> Decimal:
    try:
        quantity = to_decimal(value).quantize(QUANTITY_STEP)
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidQuantity(f"Quantity must be a number, got {value!r}.") from exc
    if quantity <= 0:
        raise InvalidQuantity("Quantity must be greater than zero.")
    return quantity


def _non_negative_money(value: Number, label: str) -> Decimal:
    try:
        amount = to_money(value)
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidAmount(f"{label} must be a number, got {value!r}.") from exc
    if amount < 0:
        raise InvalidAmount(f"{label} must not be negative.")
    return amount


def _tax_rate(value: Number) -> Decimal:
    try:
        rate = to_decimal(value).quantize(RATE_STEP)
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidAmount(f"Tax rate must be a number, got {value!r}.") from exc
    if rate < 0:
        raise InvalidAmount("Tax rate must not be negative.")
    return rate


@dataclass(frozen=True)
class ProductSnapshot:
    """Catalog product fields captured at the moment a line is added.

    Later renames or price changes on the product do not flow back into
    lines built from an older snapshot.
    """

    product_id: int
    name: str
    price: Decimal
    tax_rate: Decimal

    @classmethod
    def of(cls, product_id: int, name: str, price: Number, tax_rate: Number) -> "ProductSnapshot":
        return cls(
            product_id=product_id,
            name=name,
            price=_non_negative_money(price, "Price"),
            tax_rate=_tax_rate(tax_rate),
        )


@dataclass(frozen=True)
class LineItem:
    product_id: int
    product_name: str
    quantity: Decimal
    unit_price: Decimal
    tax_rate: Decimal
    line_total: Decimal

    @classmethod
    def create(
        cls,
        product_id: int,
        product_name: str,
        quantity: Number,
        unit_price: Number,
        tax_rate: Number,
    ) -> "LineItem":
        """Build a line, deriving line_total from quantity and unit price."""
        qty = _quantity(quantity)
        price = _non_negative_money(unit_price, "Unit price")
        return cls(
            product_id=product_id,
            product_name=product_name,
            quantity=qty,
            unit_price=price,
            tax_rate=_tax_rate(tax_rate),
            line_total=to_money(qty * price),
        )

    @property
    def tax(self) -> Decimal:
        """Unrounded tax for this line."""
        return self.line_total * self.tax_rate / Decimal(100)


def _check_index(items: Sequence[LineItem], index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int):
        raise IndexOutOfRange(f"Line index must be an integer, got {index!r}.")
    if not 0 <= index < len(items):
        raise IndexOutOfRange(f"Line index {index} is out of range for {len(items)} line(s).")


def add_line(items: Sequence[LineItem], product: ProductSnapshot, quantity: Number) -> tuple[LineItem, ...]:
    """Append a new line for product. Repeated products get their own lines."""
    line = LineItem.create(
        product_id=product.product_id,
        product_name=product.name,
        quantity=quantity,
        unit_price=product.price,
        tax_rate=product.tax_rate,
    )
    return (*items, line)


def edit_line(
    items: Sequence[LineItem],
    index: int,
    quantity: Number | None = None,
    price: Number | None = None,
) -> tuple[LineItem, ...]:
    """Change quantity and/or unit price of one line and re-derive its total.

    The line's tax rate is fixed once the line exists.
    """
    _check_index(items, index)
    if quantity is None and price is None:
        raise ValidationError("Provide quantity or price to edit a line.")

    current = items[index]
    new_quantity = _quantity(quantity) if quantity is not None else current.quantity
    new_price = _non_negative_money(price, "Unit price") if price is not None else current.unit_price
    updated = replace(
        current,
        quantity=new_quantity,
        unit_price=new_price,
        line_total=to_money(new_quantity * new_price),
    )
    return (*items[:index], updated, *items[index + 1 :])


def remove_line(items: Sequence[LineItem], index: int) -> tuple[LineItem, ...]:
    _check_index(items, index)
    return (*items[:index], *items[index + 1 :])
