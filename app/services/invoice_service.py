"""Invoice service: creation, line edits and deletion.

All monetary fields are derived through ``app.ledger``; nothing here sums
line totals or decides a payment status on its own.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import func, or_

from app.core.config import Config, get_config
from app.core.enums import PaymentStatus
from app.core.exceptions import ConflictError, InconsistentStateError, InvoiceNotFound, ValidationError
from app.ledger import InvoiceFigures, LineItem, add_line, assert_consistent, edit_line, reconcile, remove_line
from app.models import Invoice, Payment
from app.services.base_service import BaseService
from app.services.customer_service import CustomerService
from app.services.product_service import ProductService
from app.services.reconciliation import lock_invoice, payment_amounts, resettle
from app.utils.validators import LIKE_ESCAPE, contains_pattern, optional_text

logger = logging.getLogger(__name__)

Number = Decimal | int | float | str


@dataclass(frozen=True)
class LineInput:
    """Requested line.

    ``line_id`` names a stored line to keep; without it ``product_id`` is
    snapshotted from the catalog as a new line.
    """

    product_id: int | None
    quantity: Number
    price: Number | None = None
    line_id: int | None = None


def _today() -> date:
    return datetime.now(timezone.utc).date()


class InvoiceService(BaseService):
    """Service for invoice CRUD and line-item edits."""

    def __init__(self, db=None, config: Config | None = None) -> None:
        super().__init__(db)
        self.config = config or get_config()
        self.customers = CustomerService(db=self.db)
        self.products = ProductService(db=self.db)

    def _next_invoice_number(self) -> str:
        prefix = f"{self.config.INVOICE_NUMBER_PREFIX}-{_today().year}-"
        # Sequences are zero-padded digits, so a longer number is always a later one.
        last = (
            self.db.query(Invoice.invoice_number)
            .filter(Invoice.invoice_number.like(f"{prefix}%"))
            .order_by(func.length(Invoice.invoice_number).desc(), Invoice.invoice_number.desc())
            .limit(1)
            .scalar()
        )
        sequence = int(last.rsplit("-", 1)[1]) + 1 if last else 1
        return f"{prefix}{sequence:05d}"

    def _build_lines(self, requested: Sequence[LineInput], invoice: Invoice | None = None) -> tuple[LineItem, ...]:
        """Turn requested lines into ledger lines.

        A request carrying a ``line_id`` edits that stored line, so its name
        and tax snapshot survive reordering and later catalog changes. A
        request without one snapshots the product from the catalog.
        """
        current = invoice.line_items() if invoice is not None else ()
        positions = {item.id: index for index, item in enumerate(invoice.items)} if invoice is not None else {}
        seen: set[int] = set()
        lines: tuple[LineItem, ...] = ()
        for line in requested:
            if line.line_id is not None:
                if line.line_id not in positions:
                    raise ValidationError(f"Line {line.line_id} does not belong to this invoice.")
                if line.line_id in seen:
                    raise ValidationError(f"Line {line.line_id} appears more than once.")
                seen.add(line.line_id)
                index = positions[line.line_id]
                if line.product_id is not None and line.product_id != current[index].product_id:
                    raise ValidationError(
                        f"Line {line.line_id} is for product {current[index].product_id}, not {line.product_id}."
                    )
                edited = edit_line(current, index, quantity=line.quantity, price=line.price)
                lines = (*lines, edited[index])
                continue
            if line.product_id is None:
                raise ValidationError("A new line needs a product_id.")
            lines = add_line(lines, self.products.snapshot(line.product_id), line.quantity)
            if line.price is not None:
                lines = edit_line(lines, len(lines) - 1, price=line.price)
        return lines

    def create_invoice(
        self,
        customer_id: int,
        lines: Sequence[LineInput],
        issue_date: date | None = None,
        notes: str | None = None,
    ) -> Invoice:
        if not lines:
            raise ValidationError("An invoice needs at least one line item.")
        customer = self.customers.require_customer(customer_id)
        items = self._build_lines(lines)
        figures = reconcile(items, [])

        invoice = Invoice(
            invoice_number=self._next_invoice_number(),
            customer_id=customer.id,
            customer_name=customer.name,
            issue_date=issue_date or _today(),
            notes=optional_text(notes),
        )
        invoice.replace_items(items)
        invoice.apply_figures(figures)
        invoice = self.save(invoice)
        logger.info(
            "invoice.created",
            extra={
                "event": "invoice.created",
                "invoice_id": invoice.id,
                "invoice_number": invoice.invoice_number,
                "customer_id": customer.id,
                "amount": figures.total_amount,
            },
        )
        return invoice

    def get_invoice(self, invoice_id: int) -> Invoice | None:
        return self.db.query(Invoice).filter(Invoice.id == invoice_id).first()

    def require_invoice(self, invoice_id: int) -> Invoice:
        invoice = self.get_invoice(invoice_id)
        if invoice is None:
            raise InvoiceNotFound(f"Invoice {invoice_id} not found.")
        return invoice

    def list_invoices(self, search: str | None = None, status: str | None = None) -> list[Invoice]:
        query = self.db.query(Invoice)
        term = optional_text(search, max_len=255)
        if term:
            pattern = contains_pattern(term)
            query = query.filter(
                or_(
                    Invoice.invoice_number.ilike(pattern, escape=LIKE_ESCAPE),
                    Invoice.customer_name.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        if status:
            try:
                query = query.filter(Invoice.payment_status == PaymentStatus(status))
            except ValueError as exc:
                raise ValidationError(f"Unknown payment status: {status}") from exc
        return query.order_by(Invoice.issue_date.desc(), Invoice.id.desc()).all()

    def _commit_lines(self, invoice: Invoice, lines: tuple[LineItem, ...], event: str) -> Invoice:
        figures = resettle(self.db, invoice, lines)
        self.commit()
        self.db.refresh(invoice)
        logger.info(
            event,
            extra={
                "event": event,
                "invoice_id": invoice.id,
                "amount": figures.total_amount,
                "balance_amount": figures.balance_amount,
                "payment_status": figures.payment_status.value,
            },
        )
        return invoice

    def update_invoice_items(
        self,
        invoice_id: int,
        items: Sequence[LineInput],
        notes: str | None = None,
        issue_date: date | None = None,
    ) -> Invoice:
        """Replace the line set; paid_amount and existing payments are left alone."""
        invoice = lock_invoice(self.db, invoice_id)
        lines = self._build_lines(items, invoice)
        if not lines:
            raise ValidationError("An invoice needs at least one line item.")
        if notes is not None:
            invoice.notes = optional_text(notes)
        if issue_date is not None:
            invoice.issue_date = issue_date
        return self._commit_lines(invoice, lines, "invoice.items_updated")

    def add_invoice_line(self, invoice_id: int, product_id: int, quantity: Number) -> Invoice:
        invoice = lock_invoice(self.db, invoice_id)
        lines = add_line(invoice.line_items(), self.products.snapshot(product_id), quantity)
        return self._commit_lines(invoice, lines, "invoice.items_updated")

    def edit_invoice_line(
        self,
        invoice_id: int,
        index: int,
        quantity: Number | None = None,
        price: Number | None = None,
    ) -> Invoice:
        invoice = lock_invoice(self.db, invoice_id)
        lines = edit_line(invoice.line_items(), index, quantity=quantity, price=price)
        return self._commit_lines(invoice, lines, "invoice.items_updated")

    def remove_invoice_line(self, invoice_id: int, index: int) -> Invoice:
        invoice = lock_invoice(self.db, invoice_id)
        lines = remove_line(invoice.line_items(), index)
        if not lines:
            raise ValidationError("Cannot remove the last line item; delete the invoice instead.")
        return self._commit_lines(invoice, lines, "invoice.items_updated")

    def list_payments_for_invoice(self, invoice_id: int) -> list[Payment]:
        self.require_invoice(invoice_id)
        return (
            self.db.query(Payment)
            .filter(Payment.invoice_id == invoice_id)
            .order_by(Payment.payment_date.asc(), Payment.id.asc())
            .all()
        )

    def delete_invoice(self, invoice_id: int) -> None:
        """Hard-delete an invoice with no payments; invoices with payments are kept."""
        invoice = lock_invoice(self.db, invoice_id)
        payment_count = self.db.query(Payment.id).filter(Payment.invoice_id == invoice_id).count()
        if payment_count:
            logger.warning(
                "invoice.delete_blocked",
                extra={"event": "invoice.delete_blocked", "invoice_id": invoice_id},
            )
            raise ConflictError(
                f"Invoice {invoice.invoice_number} has {payment_count} payment(s) and cannot be deleted."
            )
        self.db.delete(invoice)
        self.commit()
        logger.info("invoice.deleted", extra={"event": "invoice.deleted", "invoice_id": invoice_id})

    def verify_invoice(self, invoice_id: int) -> InvoiceFigures:
        """Check stored figures against a fresh reconcile without changing anything."""
        invoice = self.require_invoice(invoice_id)
        try:
            return assert_consistent(invoice.figures(), invoice.line_items(), payment_amounts(self.db, invoice_id))
        except InconsistentStateError:
            logger.error(
                "ledger.inconsistent_state",
                extra={"event": "ledger.inconsistent_state", "invoice_id": invoice_id},
            )
            raise
