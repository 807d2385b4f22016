"""Invoice and invoice line models."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.enums import PaymentStatus
from app.ledger import InvoiceFigures, LineItem
from app.models.base import AuditMixin, Base, value_enum


class Invoice(Base, AuditMixin):
    __tablename__ = "invoices"
    __table_args__ = (
        Index("idx_invoices_payment_status", "payment_status"),
        Index("idx_invoices_issue_date", "issue_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    invoice_number: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    issue_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    subtotal: Mapped[Decimal] = mapped_column(nullable=False)
    tax_amount: Mapped[Decimal] = mapped_column(nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(nullable=False)
    paid_amount: Mapped[Decimal] = mapped_column(default=Decimal("0.00"), nullable=False)
    balance_amount: Mapped[Decimal] = mapped_column(nullable=False)
    payment_status: Mapped[PaymentStatus] = mapped_column(
        value_enum(PaymentStatus), default=PaymentStatus.UNPAID, nullable=False
    )

    customer = relationship("Customer")
    items: Mapped[list["InvoiceItem"]] = relationship(
        back_populates="invoice",
        order_by="InvoiceItem.position",
        cascade="all, delete-orphan",
    )
    payments: Mapped[list["Payment"]] = relationship(back_populates="invoice")

    def line_items(self) -> tuple[LineItem, ...]:
        return tuple(item.to_line() for item in self.items)

    def figures(self) -> InvoiceFigures:
        return InvoiceFigures(
            subtotal=self.subtotal,
            tax_amount=self.tax_amount,
            total_amount=self.total_amount,
            paid_amount=self.paid_amount,
            balance_amount=self.balance_amount,
            payment_status=PaymentStatus(self.payment_status),
        )

    def apply_figures(self, figures: InvoiceFigures) -> None:
        self.subtotal = figures.subtotal
        self.tax_amount = figures.tax_amount
        self.total_amount = figures.total_amount
        self.paid_amount = figures.paid_amount
        self.balance_amount = figures.balance_amount
        self.payment_status = figures.payment_status

    def replace_items(self, lines: tuple[LineItem, ...]) -> None:
        self.items = [InvoiceItem.from_line(line, position) for position, line in enumerate(lines)]


class InvoiceItem(Base):
    """Persisted snapshot of one LineItem; not joined back to the live product."""

    __tablename__ = "invoice_items"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    invoice_id: Mapped[int] = mapped_column(ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    product_id: Mapped[int] = mapped_column(Integer, nullable=False)
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(Numeric(12, 3), nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(nullable=False)
    tax_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    line_total: Mapped[Decimal] = mapped_column(nullable=False)

    invoice: Mapped[Invoice] = relationship(back_populates="items")

    @classmethod
    def from_line(cls, line: LineItem, position: int) -> "InvoiceItem":
        return cls(
            position=position,
            product_id=line.product_id,
            product_name=line.product_name,
            quantity=line.quantity,
            unit_price=line.unit_price,
            tax_rate=line.tax_rate,
            line_total=line.line_total,
        )

    def to_line(self) -> LineItem:
        return LineItem(
            product_id=self.product_id,
            product_name=self.product_name,
            quantity=self.quantity,
            unit_price=self.unit_price,
            tax_rate=self.tax_rate,
            line_total=self.line_total,
        )
