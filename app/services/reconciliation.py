"""Session-level helpers that keep a stored invoice in step with the ledger rules."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy.orm import Session

from app.core.exceptions import InvoiceNotFound
from app.ledger import InvoiceFigures, LineItem, reconcile
from app.models import Invoice, Payment


def lock_invoice(db: Session, invoice_id: int) -> Invoice:
    """Load an invoice row for update, serializing writers on the same invoice."""
    invoice = db.query(Invoice).filter(Invoice.id == invoice_id).with_for_update().populate_existing().first()
    if invoice is None:
        raise InvoiceNotFound(f"Invoice {invoice_id} not found.")
    return invoice


def payment_amounts(db: Session, invoice_id: int) -> list[Decimal]:
    """Read every payment amount for the invoice from the database, never from cache."""
    db.flush()
    rows = db.query(Payment.amount).filter(Payment.invoice_id == invoice_id).all()
    return [row.amount for row in rows]


def resettle(db: Session, invoice: Invoice, lines: tuple[LineItem, ...] | None = None) -> InvoiceFigures:
    """Recompute aggregates and payment state together and write them onto the row.

    When ``lines`` is given the invoice items are replaced first.
    """
    current = lines if lines is not None else invoice.line_items()
    figures = reconcile(current, payment_amounts(db, invoice.id))
    if lines is not None:
        invoice.replace_items(lines)
    invoice.apply_figures(figures)
    return figures
