"""Staff shift log endpoints. Answer 501 when shift logging was not enabled at startup."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.capabilities import SHIFT_LOGS
from app.core.deps import require_capability, require_permission
from app.db.base import get_db
from app.schemas.auth import CurrentUser
from app.schemas.shift import ShiftCreate, ShiftResponse, ShiftUpdate
from app.services import shift_service

router = APIRouter(
    prefix="/shifts",
    tags=["shifts"],
    dependencies=[Depends(require_capability(SHIFT_LOGS, "Shift logging is not enabled"))],
)


@router.get("", response_model=list[ShiftResponse])
async def list_shifts(
    from_time: datetime | None = Query(None, alias="from"),
    to_time: datetime | None = Query(None, alias="to"),
    current_user: CurrentUser = Depends(require_permission("staff")),
    db: AsyncSession = Depends(get_db),
):
    """All shift logs, optionally limited to shifts starting within [from, to]."""
    shifts = await shift_service.list_shifts(db, current_user.restaurant_id, from_time, to_time)
    return [ShiftResponse.model_validate(s) for s in shifts]


@router.post("", response_model=ShiftResponse, status_code=status.HTTP_201_CREATED)
async def create_shift(
    body: ShiftCreate,
    current_user: CurrentUser = Depends(require_permission("staff")),
    db: AsyncSession = Depends(get_db),
):
    shift = await shift_service.create_shift(db, current_user.restaurant_id, body)
    return ShiftResponse.model_validate(shift)


@router.get("/staff/{staff_id}", response_model=list[ShiftResponse])
async def list_staff_shifts(
    staff_id: UUID,
    current_user: CurrentUser = Depends(require_permission("staff")),
    db: AsyncSession = Depends(get_db),
):
    shifts = await shift_service.list_shifts(db, current_user.restaurant_id, staff_id=staff_id)
    return [ShiftResponse.model_validate(s) for s in shifts]


@router.put("/{shift_id}", response_model=ShiftResponse)
async def update_shift(
    shift_id: UUID,
    body: ShiftUpdate,
    current_user: CurrentUser = Depends(require_permission("staff")),
    db: AsyncSession = Depends(get_db),
):
    """Partial update; omitted fields keep their values."""
    shift = await shift_service.update_shift(db, shift_id, current_user.restaurant_id, body)
    return ShiftResponse.model_validate(shift)


@router.delete("/{shift_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shift(
    shift_id: UUID,
    current_user: CurrentUser = Depends(require_permission("staff")),
    db: AsyncSession = Depends(get_db),
):
    await shift_service.delete_shift(db, shift_id, current_user.restaurant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
