"""Restaurant settings endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import get_current_user, require_permission
from app.db.base import get_db
from app.schemas.auth import CurrentUser
from app.schemas.settings import SettingsResponse, SettingsUpdate
from app.services import settings_service

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse)
async def get_settings(
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await settings_service.get_settings(db, current_user.restaurant_id)
    return SettingsResponse.model_validate(row)


@router.post("/initialize", response_model=SettingsResponse)
async def initialize_settings(
    current_user: CurrentUser = Depends(require_permission("settings")),
    db: AsyncSession = Depends(get_db),
):
    """Create the settings row for this restaurant if it does not exist yet."""
    row = await settings_service.initialize_settings(db, current_user.restaurant_id)
    return SettingsResponse.model_validate(row)


@router.put("", response_model=SettingsResponse)
async def update_settings(
    body: SettingsUpdate,
    current_user: CurrentUser = Depends(require_permission("settings")),
    db: AsyncSession = Depends(get_db),
):
    row = await settings_service.update_settings(db, current_user.restaurant_id, body)
    return SettingsResponse.model_validate(row)
