"""Customer directory service."""

from __future__ import annotations

import logging

from sqlalchemy import or_

from app.core.exceptions import ConflictError, CustomerNotFound
from app.models import Customer, Invoice
from app.services.base_service import BaseService
from app.utils.validators import (
    LIKE_ESCAPE,
    contains_pattern,
    optional_text,
    require_text,
    validate_email,
    validate_gst_number,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "phone", "email", "address", "gst_number")


class CustomerService(BaseService):
    """Service for customer CRUD."""

    def _clean(self, field: str, value: str | None) -> str | None:
        if field == "name":
            return require_text(value, "Customer name")
        if field == "phone":
            return require_text(value, "Phone", max_len=32)
        if field == "email":
            return validate_email(value)
        if field == "gst_number":
            return validate_gst_number(value)
        return optional_text(value, max_len=4000)

    def create_customer(
        self,
        name: str,
        phone: str,
        email: str | None = None,
        address: str | None = None,
        gst_number: str | None = None,
    ) -> Customer:
        customer = Customer(
            name=self._clean("name", name),
            phone=self._clean("phone", phone),
            email=self._clean("email", email),
            address=self._clean("address", address),
            gst_number=self._clean("gst_number", gst_number),
        )
        customer = self.save(customer)
        logger.info("customer.created", extra={"event": "customer.created", "customer_id": customer.id})
        return customer

    def get_customer(self, customer_id: int) -> Customer | None:
        return self.db.query(Customer).filter(Customer.id == customer_id).first()

    def require_customer(self, customer_id: int) -> Customer:
        customer = self.get_customer(customer_id)
        if customer is None:
            raise CustomerNotFound(f"Customer {customer_id} not found.")
        return customer

    def list_customers(self, search: str | None = None) -> list[Customer]:
        query = self.db.query(Customer)
        term = optional_text(search, max_len=255)
        if term:
            pattern = contains_pattern(term)
            query = query.filter(
                or_(
                    Customer.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Customer.phone.ilike(pattern, escape=LIKE_ESCAPE),
                    Customer.email.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        return query.order_by(Customer.name.asc(), Customer.id.asc()).all()

    def update_customer(self, customer_id: int, **fields: str | None) -> Customer:
        customer = self.require_customer(customer_id)
        cleaned = {
            field: self._clean(field, value)
            for field, value in fields.items()
            if field in UPDATABLE_FIELDS
        }
        for field, value in cleaned.items():
            setattr(customer, field, value)
        self.commit()
        self.db.refresh(customer)
        return customer

    def delete_customer(self, customer_id: int) -> None:
        customer = self.require_customer(customer_id)
        invoice_count = self.db.query(Invoice.id).filter(Invoice.customer_id == customer_id).count()
        if invoice_count:
            raise ConflictError(
                f"Customer {customer_id} has {invoice_count} invoice(s) and cannot be deleted."
            )
        self.db.delete(customer)
        self.commit()
        logger.info("customer.deleted", extra={"event": "customer.deleted", "customer_id": customer_id})
