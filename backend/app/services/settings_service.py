"""Keyed per-restaurant settings store with an explicit initialization step."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings as app_settings
from app.core.errors import NotFoundError
from app.models.restaurant_settings import RestaurantSettings
from app.schemas.settings import SettingsUpdate
from app.services.persistence import commit_or_conflict

logger = logging.getLogger(__name__)


async def _find(db: AsyncSession, restaurant_id: UUID) -> RestaurantSettings | None:
    result = await db.execute(
        select(RestaurantSettings).where(RestaurantSettings.restaurant_id == restaurant_id)
    )
    return result.scalar_one_or_none()


async def initialize_settings(db: AsyncSession, restaurant_id: UUID) -> RestaurantSettings:
    """Create the restaurant's settings row if missing. Safe to call repeatedly or concurrently."""
    existing = await _find(db, restaurant_id)
    if existing:
        return existing

    row = RestaurantSettings(
        restaurant_id=restaurant_id,
        timezone=app_settings.DEFAULT_TIMEZONE,
        preferences={},
    )
    db.add(row)
    try:
        await db.commit()
    except IntegrityError:
        # Lost the race to a concurrent initializer; its row is the one
        await db.rollback()
        existing = await _find(db, restaurant_id)
        if existing is None:
            raise
        return existing

    await db.refresh(row)
    logger.info("Settings initialized for restaurant %s", restaurant_id)
    return row


async def get_settings(db: AsyncSession, restaurant_id: UUID) -> RestaurantSettings:
    row = await _find(db, restaurant_id)
    if row is None:
        raise NotFoundError("Settings not initialized for this restaurant")
    return row


async def update_settings(
    db: AsyncSession, restaurant_id: UUID, body: SettingsUpdate
) -> RestaurantSettings:
    row = await get_settings(db, restaurant_id)
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(row, field, value)
    await commit_or_conflict(db)
    await db.refresh(row)
    return row


async def get_timezone(db: AsyncSession, restaurant_id: UUID) -> str:
    row = await _find(db, restaurant_id)
    return row.timezone if row else app_settings.DEFAULT_TIMEZONE
