"""Common schema module."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, PlainSerializer

# Decimals travel as JSON numbers; the value is already rounded to 2 places.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
Quantity = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class APIEnvelope(BaseModel):
    status: str = "ok"
    message: str | None = None


class ErrorEnvelope(BaseModel):
    detail: str
