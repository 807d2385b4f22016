"""Customer directory endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query, status
from sqlalchemy.orm import Session

from app.api.v1._authz import domain_errors, require_user
from app.core.dependencies import get_db_session
from app.schemas.common import APIEnvelope
from app.schemas.customers import CustomerCreateRequest, CustomerResponse, CustomerUpdateRequest
from app.services.customer_service import CustomerService

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("", response_model=list[CustomerResponse])
def list_customers(
    search: str | None = Query(default=None, max_length=255),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["catalog.read"])
    return CustomerService(db=db).list_customers(search=search)


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["catalog.write"])
    with domain_errors():
        return CustomerService(db=db).create_customer(**payload.model_dump())


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["catalog.read"])
    with domain_errors():
        return CustomerService(db=db).require_customer(customer_id)


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int,
    payload: CustomerUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["catalog.write"])
    with domain_errors():
        return CustomerService(db=db).update_customer(customer_id, **payload.model_dump(exclude_unset=True))


@router.delete("/{customer_id}", response_model=APIEnvelope)
def delete_customer(
    customer_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["catalog.write"])
    with domain_errors():
        CustomerService(db=db).delete_customer(customer_id)
    return APIEnvelope(message="Customer deleted.")
