"""Staff accounts of a restaurant: CRUD, search, activation and headcount stats."""

import logging
from uuid import UUID

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.core.security import hash_password
from app.models.staff import Staff
from app.schemas.staff import StaffCreate, StaffStats, StaffUpdate
from app.services.persistence import commit_or_conflict

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "Email already registered"


async def get_staff(db: AsyncSession, staff_id: UUID, restaurant_id: UUID) -> Staff:
    result = await db.execute(
        select(Staff).where(Staff.id == staff_id, Staff.restaurant_id == restaurant_id)
    )
    staff = result.scalar_one_or_none()
    if not staff:
        raise NotFoundError("Staff member not found")
    return staff


async def list_staff(
    db: AsyncSession,
    restaurant_id: UUID,
    q: str | None = None,
    role: str | None = None,
    is_active: bool | None = None,
) -> list[Staff]:
    """Staff ordered by name. ``q`` matches name or email, case-insensitively."""
    query = select(Staff).where(Staff.restaurant_id == restaurant_id)
    if q:
        pattern = f"%{q.strip()}%"
        query = query.where(or_(Staff.full_name.ilike(pattern), Staff.email.ilike(pattern)))
    if role:
        query = query.where(Staff.role == role)
    if is_active is not None:
        query = query.where(Staff.is_active == is_active)

    result = await db.execute(query.order_by(Staff.full_name))
    return list(result.scalars().all())


async def list_roles(db: AsyncSession, restaurant_id: UUID) -> list[str]:
    """Roles currently held by at least one staff member."""
    result = await db.execute(
        select(Staff.role)
        .where(Staff.restaurant_id == restaurant_id)
        .distinct()
        .order_by(Staff.role)
    )
    return list(result.scalars().all())


async def get_stats(db: AsyncSession, restaurant_id: UUID) -> StaffStats:
    result = await db.execute(
        select(Staff.role, Staff.is_active, func.count())
        .where(Staff.restaurant_id == restaurant_id)
        .group_by(Staff.role, Staff.is_active)
    )
    by_role: dict[str, int] = {}
    active = inactive = 0
    for role, is_active, count in result.all():
        by_role[role] = by_role.get(role, 0) + count
        if is_active:
            active += count
        else:
            inactive += count
    return StaffStats(total=active + inactive, active=active, inactive=inactive, by_role=by_role)


async def _ensure_email_free(db: AsyncSession, email: str) -> None:
    # Emails are unique across restaurants since login is by email alone
    existing = await db.execute(select(Staff).where(Staff.email == email))
    if existing.scalar_one_or_none():
        raise ConflictError(DUPLICATE_EMAIL)


async def create_staff(db: AsyncSession, restaurant_id: UUID, body: StaffCreate) -> Staff:
    await _ensure_email_free(db, body.email)

    staff = Staff(
        restaurant_id=restaurant_id,
        email=body.email,
        hashed_password=hash_password(body.password),
        full_name=body.full_name,
        phone=body.phone,
        role=body.role,
        is_active=True,
    )
    db.add(staff)
    await commit_or_conflict(db, DUPLICATE_EMAIL)
    await db.refresh(staff)

    logger.info("Staff %s (%s) created for restaurant %s", staff.email, staff.role, restaurant_id)
    return staff


async def update_staff(
    db: AsyncSession, staff_id: UUID, restaurant_id: UUID, body: StaffUpdate, acting_id: UUID
) -> Staff:
    staff = await get_staff(db, staff_id, restaurant_id)
    changes = body.model_dump(exclude_unset=True)

    if staff_id == acting_id and changes.get("is_active") is False:
        raise ValidationError("You cannot deactivate your own account")
    if "email" in changes and changes["email"] != staff.email:
        await _ensure_email_free(db, changes["email"])
    if "password" in changes:
        staff.hashed_password = hash_password(changes.pop("password"))

    for field, value in changes.items():
        setattr(staff, field, value)

    await commit_or_conflict(db, DUPLICATE_EMAIL)
    await db.refresh(staff)

    logger.info("Staff %s updated: %s", staff_id, ", ".join(sorted(body.model_fields_set)))
    return staff


async def set_active(
    db: AsyncSession, staff_id: UUID, restaurant_id: UUID, active: bool, acting_id: UUID
) -> Staff:
    """Enable or disable login for a staff member. Disabling yourself is refused."""
    if not active and staff_id == acting_id:
        raise ValidationError("You cannot deactivate your own account")

    staff = await get_staff(db, staff_id, restaurant_id)
    staff.is_active = active
    await commit_or_conflict(db)
    await db.refresh(staff)

    logger.info("Staff %s %s", staff_id, "activated" if active else "deactivated")
    return staff


async def delete_staff(
    db: AsyncSession, staff_id: UUID, restaurant_id: UUID, acting_id: UUID
) -> None:
    if staff_id == acting_id:
        raise ValidationError("You cannot delete your own account")

    staff = await get_staff(db, staff_id, restaurant_id)
    await db.delete(staff)
    await commit_or_conflict(db)

    logger.info("Staff %s deleted from restaurant %s", staff_id, restaurant_id)
