"""Invoice aggregates and payment-state derivation.

Every path that changes an invoice, whether new items or a new payment,
goes through ``settle`` so the monetary fields and the payment status are
always derived together.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass
from decimal import Decimal, InvalidOperation

from app.core.enums import PaymentStatus
from app.core.exceptions import InconsistentStateError, InvalidAmount, ValidationError
from app.ledger.line_items import LineItem
from app.utils.money import ZERO, to_decimal, to_money


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal


@dataclass(frozen=True)
class InvoiceFigures:
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    paid_amount: Decimal
    balance_amount: Decimal
    payment_status: PaymentStatus

    def as_dict(self) -> dict:
        return asdict(self)


def recompute_aggregates(items: Sequence[LineItem]) -> InvoiceTotals:
    """Subtotal, tax and total for a non-empty set of lines.

    Tax is computed per line at full precision, summed, then rounded once.
    """
    if not items:
        raise ValidationError("An invoice needs at least one line item.")

    subtotal = to_money(sum((item.line_total for item in items), ZERO))
    tax_amount = to_money(sum((item.tax for item in items), Decimal(0)))
    return InvoiceTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total_amount=subtotal + tax_amount,
    )


def derive_payment_status(paid_amount: Decimal, total_amount: Decimal) -> PaymentStatus:
    if paid_amount >= total_amount:
        return PaymentStatus.PAID
    if paid_amount > 0:
        return PaymentStatus.PARTIAL
    return PaymentStatus.UNPAID


def derive_balance(total_amount: Decimal, paid_amount: Decimal) -> Decimal:
    return max(ZERO, to_money(total_amount - paid_amount))


def validate_payment_amount(amount: Decimal | int | float | str) -> Decimal:
    try:
        value = to_money(amount)
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidAmount(f"Payment amount must be a number, got {amount!r}.") from exc
    if value <= 0:
        raise InvalidAmount("Payment amount must be greater than zero.")
    return value


def settle(totals: InvoiceTotals, payment_amounts: Iterable[Decimal]) -> InvoiceFigures:
    """Combine invoice totals with the full payment history."""
    paid_amount = to_money(sum((to_decimal(amount) for amount in payment_amounts), ZERO))
    return InvoiceFigures(
        subtotal=totals.subtotal,
        tax_amount=totals.tax_amount,
        total_amount=totals.total_amount,
        paid_amount=paid_amount,
        balance_amount=derive_balance(totals.total_amount, paid_amount),
        payment_status=derive_payment_status(paid_amount, totals.total_amount),
    )


def reconcile(items: Sequence[LineItem], payment_amounts: Iterable[Decimal]) -> InvoiceFigures:
    return settle(recompute_aggregates(items), payment_amounts)


def assert_consistent(
    stored: InvoiceFigures,
    items: Sequence[LineItem],
    payment_amounts: Iterable[Decimal],
) -> InvoiceFigures:
    """Raise InconsistentStateError if stored figures differ from a fresh reconcile."""
    for index, item in enumerate(items):
        derived = to_money(item.quantity * item.unit_price)
        if item.line_total != derived:
            raise InconsistentStateError(
                f"Line {index} total out of sync: stored={item.line_total} expected={derived}"
            )
    expected = reconcile(items, payment_amounts)
    mismatched = [
        f"{field}: stored={getattr(stored, field)} expected={getattr(expected, field)}"
        for field in expected.__dataclass_fields__
        if getattr(stored, field) != getattr(expected, field)
    ]
    if mismatched:
        raise InconsistentStateError("Invoice figures out of sync; " + "; ".join(mismatched))
    return expected
