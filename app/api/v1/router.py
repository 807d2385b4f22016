"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from app.api.v1 import auth, customers, dashboard, health, invoices, payments, products, settings
from app.core.config import get_config


def get_api_router() -> APIRouter:
    api_router = APIRouter(prefix=get_config().API_PREFIX)
    api_router.include_router(health.router)
    api_router.include_router(auth.router)
    api_router.include_router(customers.router)
    api_router.include_router(products.router)
    api_router.include_router(invoices.router)
    api_router.include_router(payments.router)
    api_router.include_router(settings.router)
    api_router.include_router(dashboard.router)
    return api_router
