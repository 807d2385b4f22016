"""Product request/response schemas."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import Money


class ProductCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=4000)
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    gst_rate: Decimal = Field(default=Decimal("18"), ge=0, le=100, decimal_places=2)
    stock: int = Field(default=0, ge=0)
    unit: str = Field(default="pcs", min_length=1, max_length=16)
    hsn_code: str | None = Field(default=None, max_length=16)


class ProductUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=4000)
    price: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    gst_rate: Decimal | None = Field(default=None, ge=0, le=100, decimal_places=2)
    stock: int | None = Field(default=None, ge=0)
    unit: str | None = Field(default=None, min_length=1, max_length=16)
    hsn_code: str | None = Field(default=None, max_length=16)


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    price: Money
    gst_rate: Money
    stock: int
    unit: str
    hsn_code: str | None = None
