"""Pydantic schema package for API contracts."""

from app.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, TokenResponse, UserResponse
from app.schemas.common import APIEnvelope, ErrorEnvelope, Money, Quantity
from app.schemas.customers import CustomerCreateRequest, CustomerResponse, CustomerUpdateRequest
from app.schemas.dashboard import DashboardStatsResponse, MonthlyRevenue, RecentInvoice
from app.schemas.invoices import (
    InvoiceCreateRequest,
    InvoiceFiguresResponse,
    InvoiceLineAddRequest,
    InvoiceLineEditRequest,
    InvoiceLineRequest,
    InvoiceResponse,
    InvoiceUpdateRequest,
    LineItemResponse,
)
from app.schemas.payments import PaymentCreateRequest, PaymentListItem, PaymentResponse, PaymentSummaryResponse
from app.schemas.products import ProductCreateRequest, ProductResponse, ProductUpdateRequest
from app.schemas.settings import CompanySettingsRequest, CompanySettingsResponse

__all__ = [
    "APIEnvelope",
    "CompanySettingsRequest",
    "CompanySettingsResponse",
    "CustomerCreateRequest",
    "CustomerResponse",
    "CustomerUpdateRequest",
    "DashboardStatsResponse",
    "ErrorEnvelope",
    "InvoiceCreateRequest",
    "InvoiceFiguresResponse",
    "InvoiceLineAddRequest",
    "InvoiceLineEditRequest",
    "InvoiceLineRequest",
    "InvoiceResponse",
    "InvoiceUpdateRequest",
    "LineItemResponse",
    "LoginRequest",
    "Money",
    "MonthlyRevenue",
    "PaymentCreateRequest",
    "PaymentListItem",
    "PaymentResponse",
    "PaymentSummaryResponse",
    "ProductCreateRequest",
    "ProductResponse",
    "ProductUpdateRequest",
    "Quantity",
    "RecentInvoice",
    "RefreshRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
]
