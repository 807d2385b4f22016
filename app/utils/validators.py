"""Deterministic validators and sanitizers for user-entered directory fields."""

from __future__ import annotations

import re

from app.core.exceptions import ValidationError

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
# 15-character Indian GSTIN: state code, PAN, entity number, 'Z', checksum.
GSTIN_PATTERN = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")


def sanitize_text(value: str | None, max_len: int = 20000) -> str:
    """Sanitize free-form content before persistence/display."""
    if value is None:
        return ""
    cleaned = str(value).replace("\x00", "").strip()
    cleaned = cleaned[:max_len]
    return cleaned


def optional_text(value: str | None, max_len: int = 20000) -> str | None:
    """Like sanitize_text, but blank input becomes None."""
    cleaned = sanitize_text(value, max_len=max_len)
    return cleaned or None


def require_text(value: str | None, field: str, max_len: int = 255) -> str:
    cleaned = sanitize_text(value, max_len=max_len)
    if not cleaned:
        raise ValidationError(f"{field} is required.")
    return cleaned


def validate_email(value: str | None) -> str | None:
    cleaned = optional_text(value, max_len=320)
    if cleaned is None:
        return None
    if not EMAIL_PATTERN.match(cleaned):
        raise ValidationError(f"Invalid email address: {cleaned}")
    return cleaned.lower()


def validate_gst_number(value: str | None) -> str | None:
    cleaned = optional_text(value, max_len=32)
    if cleaned is None:
        return None
    cleaned = cleaned.upper()
    if not GSTIN_PATTERN.match(cleaned):
        raise ValidationError(f"Invalid GST number: {cleaned}")
    return cleaned


LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """LIKE pattern that matches ``term`` literally; use with ``escape=LIKE_ESCAPE``."""
    escaped = term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2).replace("%", r"\%").replace("_", r"\_")
    return f"%{escaped}%"
