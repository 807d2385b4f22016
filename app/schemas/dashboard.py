"""Dashboard schemas."""

from __future__ import annotations

from pydantic import BaseModel

from app.core.enums import PaymentStatus
from app.schemas.common import Money


class MonthlyRevenue(BaseModel):
    month: str
    revenue: Money


class RecentInvoice(BaseModel):
    id: int
    invoice_number: str
    customer_name: str
    total_amount: Money
    payment_status: PaymentStatus


class DashboardStatsResponse(BaseModel):
    total_revenue: Money
    paid_revenue: Money
    pending_revenue: Money
    total_customers: int
    total_products: int
    total_invoices: int
    monthly_revenue: list[MonthlyRevenue]
    recent_invoices: list[RecentInvoice]
