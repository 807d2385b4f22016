"""Payment request/response schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import PaymentMethod
from app.schemas.common import Money


class PaymentCreateRequest(BaseModel):
    invoice_id: int = Field(ge=1)
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    payment_method: PaymentMethod
    notes: str | None = Field(default=None, max_length=4000)


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_id: int
    amount: Money
    payment_method: PaymentMethod
    payment_date: datetime
    notes: str | None = None


class PaymentListItem(PaymentResponse):
    invoice_number: str
    customer_name: str


class PaymentSummaryResponse(BaseModel):
    total_received: Money
    total_balance: Money
    overpaid_amount: Money
    by_method: dict[str, Money]
