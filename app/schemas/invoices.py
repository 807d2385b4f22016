"""Invoice request/response schemas for API contracts."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.core.enums import PaymentStatus
from app.schemas.common import Money, Quantity


class InvoiceLineRequest(BaseModel):
    """One requested line. Extra keys sent by older clients (totals, rates) are ignored.

    On update, ``line_id`` keeps an existing line and its snapshot; lines
    without it are new and need ``product_id``.
    """

    product_id: int | None = Field(default=None, ge=1)
    line_id: int | None = Field(default=None, ge=1)
    quantity: Decimal = Field(gt=0, max_digits=12, decimal_places=3)
    price: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)


class InvoiceCreateRequest(BaseModel):
    customer_id: int = Field(ge=1)
    items: list[InvoiceLineRequest] = Field(min_length=1)
    issue_date: date | None = Field(default=None, validation_alias=AliasChoices("issue_date", "invoice_date"))
    notes: str | None = Field(default=None, max_length=10000)


class InvoiceUpdateRequest(BaseModel):
    items: list[InvoiceLineRequest] = Field(min_length=1)
    issue_date: date | None = Field(default=None, validation_alias=AliasChoices("issue_date", "invoice_date"))
    notes: str | None = Field(default=None, max_length=10000)


class InvoiceLineAddRequest(BaseModel):
    product_id: int = Field(ge=1)
    quantity: Decimal = Field(gt=0, max_digits=12, decimal_places=3)


class InvoiceLineEditRequest(BaseModel):
    quantity: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=3)
    price: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)


class LineItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    product_name: str
    quantity: Quantity
    unit_price: Money
    tax_rate: Money
    line_total: Money


class InvoiceFiguresResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    subtotal: Money
    tax_amount: Money
    total_amount: Money
    paid_amount: Money
    balance_amount: Money
    payment_status: PaymentStatus


class InvoiceResponse(InvoiceFiguresResponse):
    id: int
    invoice_number: str
    customer_id: int
    customer_name: str
    issue_date: date
    notes: str | None = None
    items: list[LineItemResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None
