"""Authentication endpoints: login, register restaurant + manager, profile."""

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.app_config import role_permissions
from app.core.deps import get_current_user
from app.core.errors import AuthenticationError, AuthorizationError, ConflictError, NotFoundError
from app.core.security import create_access_token, hash_password, verify_password
from app.db.base import get_db
from app.models.restaurant import Restaurant
from app.models.staff import Staff
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRestaurantRequest,
    RegisterRestaurantResponse,
    TokenResponse,
)
from app.services import settings_service
from app.services.persistence import commit_or_conflict

router = APIRouter(prefix="/auth", tags=["auth"])

MANAGER_ROLE = "manager"


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Authenticate via email + password, return JWT."""
    result = await db.execute(select(Staff).where(Staff.email == body.email))
    staff = result.scalar_one_or_none()

    if not staff or not verify_password(body.password, staff.hashed_password):
        raise AuthenticationError("Invalid email or password")

    if not staff.is_active:
        raise AuthorizationError("Account is deactivated")

    token = create_access_token(
        staff_id=staff.id,
        restaurant_id=staff.restaurant_id,
        role=staff.role,
        permissions=role_permissions(staff.role),
    )
    return TokenResponse(
        access_token=token,
        staff_id=staff.id,
        restaurant_id=staff.restaurant_id,
        role=staff.role,
    )


@router.post(
    "/register",
    response_model=RegisterRestaurantResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_restaurant(body: RegisterRestaurantRequest, db: AsyncSession = Depends(get_db)):
    """Register a new restaurant with a manager account (self-service onboarding)."""

    # Check duplicate email
    existing_staff = await db.execute(select(Staff).where(Staff.email == body.email))
    if existing_staff.scalar_one_or_none():
        raise ConflictError("Email already registered")

    # Check duplicate restaurant code
    existing_restaurant = await db.execute(
        select(Restaurant).where(Restaurant.code == body.restaurant_code)
    )
    if existing_restaurant.scalar_one_or_none():
        raise ConflictError("Restaurant code already taken")

    restaurant = Restaurant(
        id=uuid.uuid4(),
        name=body.restaurant_name,
        code=body.restaurant_code,
        address=body.restaurant_address,
        phone=body.restaurant_phone,
    )
    db.add(restaurant)

    manager = Staff(
        id=uuid.uuid4(),
        email=body.email,
        hashed_password=hash_password(body.password),
        full_name=body.full_name,
        phone=body.phone,
        role=MANAGER_ROLE,
        restaurant_id=restaurant.id,
    )
    db.add(manager)

    staff_id, restaurant_id = manager.id, restaurant.id
    await commit_or_conflict(db, "Email or restaurant code already registered")
    await settings_service.initialize_settings(db, restaurant_id)

    token = create_access_token(
        staff_id=staff_id,
        restaurant_id=restaurant_id,
        role=MANAGER_ROLE,
        permissions=role_permissions(MANAGER_ROLE),
    )
    return RegisterRestaurantResponse(
        staff_id=staff_id,
        restaurant_id=restaurant_id,
        access_token=token,
    )


@router.get("/me", response_model=CurrentUser)
async def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Return full profile of the current authenticated staff member."""
    result = await db.execute(select(Staff).where(Staff.id == current_user.id))
    staff = result.scalar_one_or_none()
    if not staff:
        raise NotFoundError("Staff member not found")

    return CurrentUser(
        id=staff.id,
        email=staff.email,
        full_name=staff.full_name,
        role=staff.role,
        restaurant_id=staff.restaurant_id,
        permissions=role_permissions(staff.role),
        is_active=staff.is_active,
    )
