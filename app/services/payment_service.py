"""Payment service: append-only payment application and read-side summaries."""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import String, case, cast, func, or_

from app.core.config import Config, get_config
from app.core.enums import PaymentMethod
from app.core.exceptions import InvalidAmount, ValidationError
from app.ledger import validate_payment_amount
from app.models import Invoice, Payment
from app.services.base_service import BaseService
from app.services.reconciliation import lock_invoice, resettle
from app.utils.money import ZERO, to_money
from app.utils.validators import LIKE_ESCAPE, contains_pattern, optional_text

logger = logging.getLogger(__name__)


def _payment_method(value: PaymentMethod | str) -> PaymentMethod:
    try:
        return PaymentMethod(value)
    except ValueError as exc:
        allowed = ", ".join(method.value for method in PaymentMethod)
        raise ValidationError(f"Unknown payment method {value!r}; expected one of: {allowed}.") from exc


class PaymentService(BaseService):
    """Service for recording payments against invoices."""

    def __init__(self, db=None, config: Config | None = None) -> None:
        super().__init__(db)
        self.config = config or get_config()

    def apply_payment(
        self,
        invoice_id: int,
        amount: Decimal | int | float | str,
        payment_method: PaymentMethod | str,
        notes: str | None = None,
    ) -> Payment:
        """Append a payment, then re-derive the invoice's paid state from all its payments."""
        value = validate_payment_amount(amount)
        method = _payment_method(payment_method)
        invoice = lock_invoice(self.db, invoice_id)

        if not self.config.ALLOW_OVERPAYMENT and value > invoice.balance_amount:
            raise InvalidAmount(
                f"Payment {value} exceeds outstanding balance {invoice.balance_amount} "
                f"on invoice {invoice.invoice_number}."
            )

        payment = Payment(
            invoice_id=invoice.id,
            amount=value,
            payment_method=method,
            notes=optional_text(notes, max_len=4000),
        )
        self.db.add(payment)
        figures = resettle(self.db, invoice)
        self.commit()
        self.db.refresh(payment)

        logger.info(
            "payment.applied",
            extra={
                "event": "payment.applied",
                "invoice_id": invoice.id,
                "payment_id": payment.id,
                "amount": value,
                "balance_amount": figures.balance_amount,
                "payment_status": figures.payment_status.value,
            },
        )
        if figures.paid_amount > figures.total_amount:
            logger.warning(
                "payment.overpayment_accepted",
                extra={
                    "event": "payment.overpayment_accepted",
                    "invoice_id": invoice.id,
                    "payment_id": payment.id,
                    "amount": figures.paid_amount - figures.total_amount,
                },
            )
        return payment

    def _live_payments(self):
        # Inner join drops any payment whose invoice no longer exists.
        return self.db.query(Payment, Invoice.invoice_number, Invoice.customer_name).join(
            Invoice, Payment.invoice_id == Invoice.id
        )

    def list_payments(self, search: str | None = None) -> list[dict]:
        query = self._live_payments()
        term = optional_text(search, max_len=255)
        if term:
            pattern = contains_pattern(term)
            query = query.filter(
                or_(
                    Invoice.invoice_number.ilike(pattern, escape=LIKE_ESCAPE),
                    Invoice.customer_name.ilike(pattern, escape=LIKE_ESCAPE),
                    cast(Payment.payment_method, String).ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        rows = query.order_by(Payment.payment_date.desc(), Payment.id.desc()).all()
        return [
            {
                "id": payment.id,
                "invoice_id": payment.invoice_id,
                "invoice_number": invoice_number,
                "customer_name": customer_name,
                "amount": payment.amount,
                "payment_method": payment.payment_method,
                "payment_date": payment.payment_date,
                "notes": payment.notes,
            }
            for payment, invoice_number, customer_name in rows
        ]

    def payment_summary(self) -> dict:
        by_method_rows = (
            self.db.query(Payment.payment_method, func.sum(Payment.amount))
            .join(Invoice, Payment.invoice_id == Invoice.id)
            .group_by(Payment.payment_method)
            .all()
        )
        by_method = {PaymentMethod(method).value: to_money(total or ZERO) for method, total in by_method_rows}
        total_received = sum(by_method.values(), ZERO)
        total_balance = self.db.query(func.sum(Invoice.balance_amount)).scalar()
        # Cash above an invoice total is received but never counted as paid revenue.
        overpaid = self.db.query(
            func.sum(
                case(
                    (Invoice.paid_amount > Invoice.total_amount, Invoice.paid_amount - Invoice.total_amount),
                    else_=ZERO,
                )
            )
        ).scalar()
        return {
            "total_received": to_money(total_received),
            "total_balance": to_money(total_balance or ZERO),
            "overpaid_amount": to_money(overpaid or ZERO),
            "by_method": by_method,
        }
