"""Company settings service (single row)."""

from __future__ import annotations

from app.models import CompanySettings
from app.services.base_service import BaseService
from app.utils.validators import optional_text, sanitize_text, validate_email, validate_gst_number

UPDATABLE_FIELDS = ("company_name", "email", "phone", "address", "gst_number", "logo_url")


class SettingsService(BaseService):
    def get_company_settings(self) -> CompanySettings:
        """Return the settings row, creating an empty one on first access."""
        settings = self.db.query(CompanySettings).order_by(CompanySettings.id.asc()).first()
        if settings is None:
            settings = CompanySettings(company_name="")
            settings = self.save(settings)
        return settings

    def update_company_settings(self, **fields: str | None) -> CompanySettings:
        settings = self.get_company_settings()
        for field, value in fields.items():
            if field not in UPDATABLE_FIELDS:
                continue
            if field == "company_name":
                cleaned = sanitize_text(value, max_len=255)
            elif field == "email":
                cleaned = validate_email(value)
            elif field == "gst_number":
                cleaned = validate_gst_number(value)
            else:
                cleaned = optional_text(value, max_len=4000)
            setattr(settings, field, cleaned)
        self.commit()
        self.db.refresh(settings)
        return settings
