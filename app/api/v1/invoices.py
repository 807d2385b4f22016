"""Invoice endpoints: CRUD, line edits, payments view and consistency check."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query, status
from sqlalchemy.orm import Session

from app.api.v1._authz import domain_errors, require_user
from app.core.dependencies import get_db_session
from app.schemas.common import APIEnvelope
from app.schemas.invoices import (
    InvoiceCreateRequest,
    InvoiceFiguresResponse,
    InvoiceLineAddRequest,
    InvoiceLineEditRequest,
    InvoiceResponse,
    InvoiceUpdateRequest,
)
from app.schemas.payments import PaymentResponse
from app.services.invoice_service import InvoiceService, LineInput

router = APIRouter(prefix="/invoices", tags=["invoices"])


def _line_inputs(items) -> list[LineInput]:
    return [
        LineInput(product_id=item.product_id, quantity=item.quantity, price=item.price, line_id=item.line_id)
        for item in items
    ]


@router.get("", response_model=list[InvoiceResponse])
def list_invoices(
    search: str | None = Query(default=None, max_length=255),
    payment_status: str | None = Query(default=None, alias="status"),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["invoices.read"])
    with domain_errors():
        return InvoiceService(db=db).list_invoices(search=search, status=payment_status)


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
def create_invoice(
    payload: InvoiceCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["invoices.write"])
    with domain_errors():
        return InvoiceService(db=db).create_invoice(
            customer_id=payload.customer_id,
            lines=_line_inputs(payload.items),
            issue_date=payload.issue_date,
            notes=payload.notes,
        )


@router.get("/{invoice_id}", response_model=InvoiceResponse)
def get_invoice(
    invoice_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["invoices.read"])
    with domain_errors():
        return InvoiceService(db=db).require_invoice(invoice_id)


@router.put("/{invoice_id}", response_model=InvoiceResponse)
def update_invoice(
    invoice_id: int,
    payload: InvoiceUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["invoices.write"])
    with domain_errors():
        return InvoiceService(db=db).update_invoice_items(
            invoice_id,
            items=_line_inputs(payload.items),
            notes=payload.notes,
            issue_date=payload.issue_date,
        )


@router.delete("/{invoice_id}", response_model=APIEnvelope)
def delete_invoice(
    invoice_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["invoices.write"])
    with domain_errors():
        InvoiceService(db=db).delete_invoice(invoice_id)
    return APIEnvelope(message="Invoice deleted.")


@router.post("/{invoice_id}/lines", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
def add_invoice_line(
    invoice_id: int,
    payload: InvoiceLineAddRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["invoices.write"])
    with domain_errors():
        return InvoiceService(db=db).add_invoice_line(invoice_id, payload.product_id, payload.quantity)


@router.patch("/{invoice_id}/lines/{index}", response_model=InvoiceResponse)
def edit_invoice_line(
    invoice_id: int,
    index: int,
    payload: InvoiceLineEditRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["invoices.write"])
    with domain_errors():
        return InvoiceService(db=db).edit_invoice_line(
            invoice_id, index, quantity=payload.quantity, price=payload.price
        )


@router.delete("/{invoice_id}/lines/{index}", response_model=InvoiceResponse)
def remove_invoice_line(
    invoice_id: int,
    index: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["invoices.write"])
    with domain_errors():
        return InvoiceService(db=db).remove_invoice_line(invoice_id, index)


@router.get("/{invoice_id}/payments", response_model=list[PaymentResponse])
def list_invoice_payments(
    invoice_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["invoices.read"])
    with domain_errors():
        return InvoiceService(db=db).list_payments_for_invoice(invoice_id)


@router.get("/{invoice_id}/verify", response_model=InvoiceFiguresResponse)
def verify_invoice(
    invoice_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["invoices.read"])
    with domain_errors():
        return InvoiceService(db=db).verify_invoice(invoice_id)
