"""Dashboard statistics derived from stored invoice figures."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from app.models import Customer, Invoice, Product
from app.services.base_service import BaseService
from app.utils.money import ZERO, to_money

MONTHS_IN_CHART = 6
RECENT_INVOICE_LIMIT = 5


def _month_starts(today: date, count: int) -> list[date]:
    """First day of each of the last ``count`` months, oldest first, ending at today's month."""
    starts = []
    year, month = today.year, today.month
    for _ in range(count):
        starts.append(date(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(starts))


class DashboardService(BaseService):
    def get_stats(self, today: date | None = None) -> dict:
        today = today or datetime.now(timezone.utc).date()
        invoices = self.db.query(
            Invoice.total_amount, Invoice.paid_amount, Invoice.balance_amount, Invoice.issue_date
        ).all()

        total_revenue = ZERO
        paid_revenue = ZERO
        pending_revenue = ZERO
        months = _month_starts(today, MONTHS_IN_CHART)
        monthly: dict[date, Decimal] = {start: ZERO for start in months}
        for total, paid, balance, issued in invoices:
            total_revenue += total
            # Overpayments are kept on the invoice but never count as extra revenue.
            paid_revenue += min(paid, total)
            pending_revenue += balance
            bucket = date(issued.year, issued.month, 1)
            if bucket in monthly:
                monthly[bucket] += total

        recent = (
            self.db.query(Invoice)
            .order_by(Invoice.created_at.desc(), Invoice.id.desc())
            .limit(RECENT_INVOICE_LIMIT)
            .all()
        )
        return {
            "total_revenue": to_money(total_revenue),
            "paid_revenue": to_money(paid_revenue),
            "pending_revenue": to_money(pending_revenue),
            "total_customers": self.db.query(Customer.id).count(),
            "total_products": self.db.query(Product.id).count(),
            "total_invoices": len(invoices),
            "monthly_revenue": [
                {"month": start.strftime("%b %Y"), "revenue": to_money(monthly[start])} for start in months
            ],
            "recent_invoices": [
                {
                    "id": invoice.id,
                    "invoice_number": invoice.invoice_number,
                    "customer_name": invoice.customer_name,
                    "total_amount": invoice.total_amount,
                    "payment_status": invoice.payment_status,
                }
                for invoice in recent
            ],
        }
