"""Shift log CRUD, scoped to the caller's restaurant."""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError, ValidationError
from app.models.shift import ShiftLog
from app.models.staff import Staff
from app.schemas.shift import ShiftCreate, ShiftUpdate

logger = logging.getLogger(__name__)


async def _ensure_staff(db: AsyncSession, staff_id: UUID, restaurant_id: UUID) -> None:
    result = await db.execute(
        select(Staff.id).where(Staff.id == staff_id, Staff.restaurant_id == restaurant_id)
    )
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Staff member not found")


async def get_shift(db: AsyncSession, shift_id: UUID, restaurant_id: UUID) -> ShiftLog:
    result = await db.execute(
        select(ShiftLog).where(ShiftLog.id == shift_id, ShiftLog.restaurant_id == restaurant_id)
    )
    shift = result.scalar_one_or_none()
    if not shift:
        raise NotFoundError("Shift not found")
    return shift


async def list_shifts(
    db: AsyncSession,
    restaurant_id: UUID,
    start: datetime | None = None,
    end: datetime | None = None,
    staff_id: UUID | None = None,
) -> list[ShiftLog]:
    query = select(ShiftLog).where(ShiftLog.restaurant_id == restaurant_id)
    if staff_id is not None:
        query = query.where(ShiftLog.staff_id == staff_id)
    if start is not None:
        query = query.where(ShiftLog.start_time >= start)
    if end is not None:
        query = query.where(ShiftLog.start_time <= end)

    result = await db.execute(query.order_by(ShiftLog.start_time))
    return list(result.scalars().all())


async def create_shift(db: AsyncSession, restaurant_id: UUID, body: ShiftCreate) -> ShiftLog:
    await _ensure_staff(db, body.staff_id, restaurant_id)

    shift = ShiftLog(**body.model_dump(), restaurant_id=restaurant_id)
    db.add(shift)
    await db.commit()
    await db.refresh(shift)

    logger.info("Shift %s logged for staff %s", shift.id, body.staff_id)
    return shift


async def update_shift(
    db: AsyncSession, shift_id: UUID, restaurant_id: UUID, body: ShiftUpdate
) -> ShiftLog:
    shift = await get_shift(db, shift_id, restaurant_id)
    changes = body.model_dump(exclude_unset=True)

    if "staff_id" in changes and changes["staff_id"] != shift.staff_id:
        await _ensure_staff(db, changes["staff_id"], restaurant_id)

    start = changes.get("start_time", shift.start_time)
    end = changes.get("end_time", shift.end_time)
    if end is not None and end <= start:
        raise ValidationError("endTime must be after startTime")

    for field, value in changes.items():
        setattr(shift, field, value)

    await db.commit()
    await db.refresh(shift)
    return shift


async def delete_shift(db: AsyncSession, shift_id: UUID, restaurant_id: UUID) -> None:
    shift = await get_shift(db, shift_id, restaurant_id)
    await db.delete(shift)
    await db.commit()
    logger.info("Shift %s deleted", shift_id)
