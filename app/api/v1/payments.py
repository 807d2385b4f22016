"""Payment endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query, status
from sqlalchemy.orm import Session

from app.api.v1._authz import domain_errors, require_user
from app.core.dependencies import get_db_session
from app.schemas.payments import PaymentCreateRequest, PaymentListItem, PaymentResponse, PaymentSummaryResponse
from app.services.payment_service import PaymentService

router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("", response_model=list[PaymentListItem])
def list_payments(
    search: str | None = Query(default=None, max_length=255),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["payments.read"])
    return PaymentService(db=db).list_payments(search=search)


@router.get("/summary", response_model=PaymentSummaryResponse)
def payment_summary(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["payments.read"])
    return PaymentService(db=db).payment_summary()


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def create_payment(
    payload: PaymentCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["payments.write"])
    with domain_errors():
        return PaymentService(db=db).apply_payment(
            invoice_id=payload.invoice_id,
            amount=payload.amount,
            payment_method=payload.payment_method,
            notes=payload.notes,
        )
