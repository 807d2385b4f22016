from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from app.core.enums import PaymentStatus
from app.core.exceptions import ValidationError
from app.services.dashboard_service import DashboardService, _month_starts
from app.services.invoice_service import InvoiceService, LineInput
from app.services.payment_service import PaymentService
from app.services.settings_service import SettingsService


def test_month_starts_cross_year_boundary():
    assert _month_starts(date(2026, 2, 14), 4) == [
        date(2025, 11, 1),
        date(2025, 12, 1),
        date(2026, 1, 1),
        date(2026, 2, 1),
    ]


def test_dashboard_stats(session, customer, product):
    invoices = InvoiceService(db=session)
    october = invoices.create_invoice(
        customer_id=customer.id, lines=[LineInput(product.id, 3)], issue_date=date(2026, 10, 5)
    )
    invoices.create_invoice(customer_id=customer.id, lines=[LineInput(product.id, 1)], issue_date=date(2026, 8, 20))
    invoices.create_invoice(customer_id=customer.id, lines=[LineInput(product.id, 1)], issue_date=date(2025, 1, 1))
    PaymentService(db=session).apply_payment(october.id, "400", "cash")

    stats = DashboardService(db=session).get_stats(today=date(2026, 10, 18))
    assert stats["total_revenue"] == Decimal("590.00")
    # Overpaid invoice counts only up to its total.
    assert stats["paid_revenue"] == Decimal("354.00")
    assert stats["pending_revenue"] == Decimal("236.00")
    assert stats["total_invoices"] == 3
    assert stats["total_customers"] == 1
    assert stats["total_products"] == 1

    months = {row["month"]: row["revenue"] for row in stats["monthly_revenue"]}
    assert list(months) == ["May 2026", "Jun 2026", "Jul 2026", "Aug 2026", "Sep 2026", "Oct 2026"]
    assert months["Oct 2026"] == Decimal("354.00")
    assert months["Aug 2026"] == Decimal("118.00")

    recent = stats["recent_invoices"]
    assert len(recent) == 3
    assert recent[0]["payment_status"] == PaymentStatus.UNPAID


def test_dashboard_on_empty_database(session):
    stats = DashboardService(db=session).get_stats(today=date(2026, 10, 18))
    assert stats["total_revenue"] == Decimal("0.00")
    assert stats["recent_invoices"] == []


def test_company_settings_created_lazily_and_updated(session):
    service = SettingsService(db=session)
    settings = service.get_company_settings()
    assert settings.company_name == ""

    updated = service.update_company_settings(
        company_name="LedgerDesk Demo Pvt Ltd",
        email="Hello@Demo.example",
        gst_number="29abcde1234f1z5",
        unknown_field="ignored",
    )
    assert updated.id == settings.id
    assert updated.email == "hello@demo.example"
    assert updated.gst_number == "29ABCDE1234F1Z5"

    with pytest.raises(ValidationError):
        service.update_company_settings(email="nope")
