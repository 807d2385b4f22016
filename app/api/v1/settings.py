"""Company settings endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from app.api.v1._authz import domain_errors, require_user
from app.core.dependencies import get_db_session
from app.schemas.settings import CompanySettingsRequest, CompanySettingsResponse
from app.services.settings_service import SettingsService

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/company", response_model=CompanySettingsResponse)
def get_company_settings(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["settings.read"])
    return SettingsService(db=db).get_company_settings()


@router.put("/company", response_model=CompanySettingsResponse)
def update_company_settings(
    payload: CompanySettingsRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
):
    require_user(authorization, scopes=["settings.write"])
    with domain_errors():
        return SettingsService(db=db).update_company_settings(**payload.model_dump(exclude_unset=True))
