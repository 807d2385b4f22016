from __future__ import annotations

from decimal import Decimal

import pytest

from app.core.exceptions import ConflictError, CustomerNotFound, InvalidAmount, ProductNotFound, ValidationError
from app.services.customer_service import CustomerService
from app.services.invoice_service import InvoiceService, LineInput
from app.services.product_service import ProductService


def test_customer_crud_and_search(session):
    service = CustomerService(db=session)
    created = service.create_customer(
        name="  Mehta Stores ",
        phone="9000000001",
        email="Billing@Mehta.example",
        gst_number="27abcde1234f1z5",
    )
    assert created.name == "Mehta Stores"
    assert created.email == "billing@mehta.example"
    assert created.gst_number == "27ABCDE1234F1Z5"

    service.create_customer(name="Other", phone="9111111111")
    assert [c.name for c in service.list_customers(search="mehta")] == ["Mehta Stores"]
    service.create_customer(name="100% Cotton Mills", phone="9222222222")
    assert [c.name for c in service.list_customers(search="%")] == ["100% Cotton Mills"]

    updated = service.update_customer(created.id, address="12 MG Road")
    assert updated.address == "12 MG Road"

    service.delete_customer(created.id)
    with pytest.raises(CustomerNotFound):
        service.require_customer(created.id)


def test_customer_validation(session):
    service = CustomerService(db=session)
    with pytest.raises(ValidationError):
        service.create_customer(name=" ", phone="9000000001")
    with pytest.raises(ValidationError):
        service.create_customer(name="Bad Email", phone="9000000001", email="not-an-email")
    with pytest.raises(ValidationError):
        service.create_customer(name="Bad GST", phone="9000000001", gst_number="12345")


def test_customer_with_invoices_cannot_be_deleted(session, customer, product):
    InvoiceService(db=session).create_invoice(customer_id=customer.id, lines=[LineInput(product.id, 1)])
    with pytest.raises(ConflictError):
        CustomerService(db=session).delete_customer(customer.id)


def test_product_defaults_and_snapshot(session):
    service = ProductService(db=session)
    product = service.create_product(name="Chair", price="1499.5")
    assert product.price == Decimal("1499.50")
    assert product.gst_rate == Decimal("18.00")
    assert product.unit == "pcs"

    snapshot = service.snapshot(product.id)
    assert snapshot.name == "Chair"
    assert snapshot.price == Decimal("1499.50")
    assert snapshot.tax_rate == Decimal("18.00")


def test_product_validation(session):
    service = ProductService(db=session)
    with pytest.raises(InvalidAmount):
        service.create_product(name="Broken", price="-1")
    with pytest.raises(InvalidAmount):
        service.create_product(name="Broken", price="10", gst_rate="-5")
    with pytest.raises(ValidationError):
        service.create_product(name="Broken", price="10", stock=-1)


def test_deleting_product_keeps_invoice_lines(session, customer, product):
    invoices = InvoiceService(db=session)
    invoice = invoices.create_invoice(customer_id=customer.id, lines=[LineInput(product.id, 2)])
    ProductService(db=session).delete_product(product.id)

    with pytest.raises(ProductNotFound):
        ProductService(db=session).require_product(product.id)
    reloaded = invoices.require_invoice(invoice.id)
    assert reloaded.items[0].product_name == "Steel Bottle"
    assert reloaded.total_amount == Decimal("236.00")
    assert invoices.verify_invoice(invoice.id).total_amount == Decimal("236.00")
