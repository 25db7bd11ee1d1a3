"""Restaurant settings schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator

from app.schemas.base import CamelModel


class SettingsUpdate(CamelModel):
    """Partial update. Only ``receiptFooter`` may be cleared with null."""

    currency: str | None = Field(None, min_length=3, max_length=3)
    tax_rate: Decimal | None = Field(None, ge=0, le=100, decimal_places=2)
    service_charge_rate: Decimal | None = Field(None, ge=0, le=100, decimal_places=2)
    timezone: str | None = Field(None, min_length=1, max_length=64)
    receipt_footer: str | None = None
    preferences: dict | None = None

    @field_validator("currency", "tax_rate", "service_charge_rate", "timezone", "preferences")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            raise ValueError(f"Unknown timezone '{value}'")
        return value


class SettingsResponse(CamelModel):
    id: UUID
    restaurant_id: UUID
    currency: str
    tax_rate: Decimal
    service_charge_rate: Decimal
    timezone: str
    receipt_footer: str | None
    preferences: dict
    updated_at: datetime | None = None
