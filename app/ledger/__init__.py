"""Invoice pricing and payment reconciliation rules.

Pure functions over value objects. Nothing in this package touches the
database or the HTTP layer; services feed it rows and persist what it returns.
"""

from app.ledger.line_items import (
    LineItem,
    ProductSnapshot,
    add_line,
    edit_line,
    remove_line,
)
from app.ledger.totals import (
    InvoiceFigures,
    InvoiceTotals,
    assert_consistent,
    derive_balance,
    derive_payment_status,
    reconcile,
    recompute_aggregates,
    settle,
    validate_payment_amount,
)

__all__ = [
    "InvoiceFigures",
    "InvoiceTotals",
    "LineItem",
    "ProductSnapshot",
    "add_line",
    "assert_consistent",
    "derive_balance",
    "derive_payment_status",
    "edit_line",
    "reconcile",
    "recompute_aggregates",
    "remove_line",
    "settle",
    "validate_payment_amount",
]
