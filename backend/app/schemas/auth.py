"""Auth request/response schemas."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


# ── Login ──────────────────────────────────────────
class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    staff_id: UUID
    restaurant_id: UUID
    role: str


# ── Register restaurant + manager ──────────────────
class RegisterRestaurantRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1, max_length=255)
    phone: str | None = None
    restaurant_name: str = Field(min_length=1, max_length=255)
    restaurant_code: str = Field(min_length=1, max_length=50, pattern=r"^[a-zA-Z0-9_-]+$")
    restaurant_address: str | None = None
    restaurant_phone: str | None = None


class RegisterRestaurantResponse(BaseModel):
    staff_id: UUID
    restaurant_id: UUID
    access_token: str
    token_type: str = "bearer"
    message: str = "Restaurant registered successfully"


# ── Current User ───────────────────────────────────
class CurrentUser(BaseModel):
    id: UUID
    email: str
    full_name: str
    role: str
    restaurant_id: UUID
    permissions: list[str]
    is_active: bool
