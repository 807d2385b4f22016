"""Company settings schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CompanySettingsRequest(BaseModel):
    company_name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=320)
    phone: str | None = Field(default=None, max_length=32)
    address: str | None = Field(default=None, max_length=4000)
    gst_number: str | None = Field(default=None, max_length=32)
    logo_url: str | None = Field(default=None, max_length=1024)


class CompanySettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    company_name: str = ""
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    gst_number: str | None = None
    logo_url: str | None = None
