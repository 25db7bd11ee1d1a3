"""Staff management schemas."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, EmailStr, Field, field_validator

from app.core.app_config import ROLE_IDS
from app.schemas.base import CamelModel


def _known_role(value: str) -> str:
    if value not in ROLE_IDS:
        raise ValueError(f"Unknown role '{value}', expected one of {', '.join(ROLE_IDS)}")
    return value


RoleId = Annotated[str, AfterValidator(_known_role)]


class StaffCreate(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=20)
    role: RoleId


class StaffUpdate(CamelModel):
    """Partial update. Only ``phone`` may be cleared with null; a new ``password`` is re-hashed."""

    email: EmailStr | None = None
    password: str | None = Field(None, min_length=6)
    full_name: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=20)
    role: RoleId | None = None
    is_active: bool | None = None

    @field_validator("email", "password", "full_name", "role", "is_active")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class StaffResponse(CamelModel):
    id: UUID
    restaurant_id: UUID
    email: str
    full_name: str
    phone: str | None
    role: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StaffStats(CamelModel):
    total: int
    active: int
    inactive: int
    by_role: dict[str, int]
