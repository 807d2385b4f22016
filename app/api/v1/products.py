"""Product catalog endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query, status
from sqlalchemy.orm import Session

from app.api.v1._authz import domain_errors, require_user
from app.core.dependencies import get_db_session
from app.schemas.common import APIEnvelope
from app.schemas.products import ProductCreateRequest, ProductResponse, ProductUpdateRequest
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductResponse])
def list_products(
    search: str | None = Query(default=None, max_length=255),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["catalog.read"])
    return ProductService(db=db).list_products(search=search)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["catalog.write"])
    with domain_errors():
        return ProductService(db=db).create_product(**payload.model_dump())


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["catalog.read"])
    with domain_errors():
        return ProductService(db=db).require_product(product_id)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    payload: ProductUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["catalog.write"])
    with domain_errors():
        return ProductService(db=db).update_product(product_id, **payload.model_dump(exclude_unset=True))


@router.delete("/{product_id}", response_model=APIEnvelope)
def delete_product(
    product_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["catalog.write"])
    with domain_errors():
        ProductService(db=db).delete_product(product_id)
    return APIEnvelope(message="Product deleted.")
