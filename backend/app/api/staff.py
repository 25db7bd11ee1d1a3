"""Staff management endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import require_permission
from app.db.base import get_db
from app.schemas.auth import CurrentUser
from app.schemas.staff import StaffCreate, StaffResponse, StaffStats, StaffUpdate
from app.services import staff_service

router = APIRouter(prefix="/staff", tags=["staff"])


@router.get("", response_model=list[StaffResponse])
async def list_staff(
    q: str | None = Query(None, max_length=100),
    role: str | None = None,
    active: bool | None = None,
    current_user: CurrentUser = Depends(require_permission("staff")),
    db: AsyncSession = Depends(get_db),
):
    """Staff of the caller's restaurant, optionally filtered by name/email, role and activity."""
    staff = await staff_service.list_staff(db, current_user.restaurant_id, q, role, active)
    return [StaffResponse.model_validate(s) for s in staff]


@router.get("/stats", response_model=StaffStats)
async def staff_stats(
    current_user: CurrentUser = Depends(require_permission("staff")),
    db: AsyncSession = Depends(get_db),
):
    return await staff_service.get_stats(db, current_user.restaurant_id)


@router.get("/roles", response_model=list[str])
async def staff_roles(
    current_user: CurrentUser = Depends(require_permission("staff")),
    db: AsyncSession = Depends(get_db),
):
    return await staff_service.list_roles(db, current_user.restaurant_id)


@router.get("/{staff_id}", response_model=StaffResponse)
async def get_staff(
    staff_id: UUID,
    current_user: CurrentUser = Depends(require_permission("staff")),
    db: AsyncSession = Depends(get_db),
):
    staff = await staff_service.get_staff(db, staff_id, current_user.restaurant_id)
    return StaffResponse.model_validate(staff)


@router.post("", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
async def create_staff(
    body: StaffCreate,
    current_user: CurrentUser = Depends(require_permission("staff")),
    db: AsyncSession = Depends(get_db),
):
    """Add a staff member to the caller's restaurant. Emails are unique."""
    staff = await staff_service.create_staff(db, current_user.restaurant_id, body)
    return StaffResponse.model_validate(staff)


@router.put("/{staff_id}", response_model=StaffResponse)
async def update_staff(
    staff_id: UUID,
    body: StaffUpdate,
    current_user: CurrentUser = Depends(require_permission("staff")),
    db: AsyncSession = Depends(get_db),
):
    staff = await staff_service.update_staff(
        db, staff_id, current_user.restaurant_id, body, current_user.id
    )
    return StaffResponse.model_validate(staff)


@router.patch("/{staff_id}/activate", response_model=StaffResponse)
async def activate_staff(
    staff_id: UUID,
    current_user: CurrentUser = Depends(require_permission("staff")),
    db: AsyncSession = Depends(get_db),
):
    staff = await staff_service.set_active(
        db, staff_id, current_user.restaurant_id, True, current_user.id
    )
    return StaffResponse.model_validate(staff)


@router.patch("/{staff_id}/deactivate", response_model=StaffResponse)
async def deactivate_staff(
    staff_id: UUID,
    current_user: CurrentUser = Depends(require_permission("staff")),
    db: AsyncSession = Depends(get_db),
):
    """Block login for a staff member without deleting their history."""
    staff = await staff_service.set_active(
        db, staff_id, current_user.restaurant_id, False, current_user.id
    )
    return StaffResponse.model_validate(staff)


@router.delete("/{staff_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_staff(
    staff_id: UUID,
    current_user: CurrentUser = Depends(require_permission("staff")),
    db: AsyncSession = Depends(get_db),
):
    await staff_service.delete_staff(db, staff_id, current_user.restaurant_id, current_user.id)
