"""SQLAlchemy model package for the billing schema."""

from app.models.base import Base
from app.models.company_settings import CompanySettings
from app.models.customer import Customer
from app.models.invoice import Invoice, InvoiceItem
from app.models.payment import Payment
from app.models.product import Product
from app.models.user import User

__all__ = [
    "Base",
    "CompanySettings",
    "Customer",
    "Invoice",
    "InvoiceItem",
    "Payment",
    "Product",
    "User",
]
