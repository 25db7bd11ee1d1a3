"""Module catalogue and role navigation for the client shell."""

from fastapi import APIRouter, Depends

from app.core import app_config
from app.core.deps import get_current_user
from app.core.errors import NotFoundError
from app.schemas.app_config import (
    AppConfigResponse,
    ModuleResponse,
    NavigationItemResponse,
    QuickActionResponse,
    RoleResponse,
)
from app.schemas.auth import CurrentUser

router = APIRouter(prefix="/app-config", tags=["app-config"])


def _known_role(role: str) -> str:
    if app_config.get_role(role) is None:
        raise NotFoundError(f"Unknown role '{role}'")
    return role


@router.get("", response_model=AppConfigResponse)
async def get_app_config():
    return AppConfigResponse(
        **app_config.APP_CONFIG,
        modules=[ModuleResponse.model_validate(m) for m in app_config.APP_MODULES],
        roles=[RoleResponse.model_validate(r) for r in app_config.USER_ROLES],
    )


@router.get("/navigation/{role}", response_model=list[NavigationItemResponse])
async def get_navigation(role: str):
    """Bottom navigation bar for a role, at most five entries."""
    items = app_config.get_bottom_navigation_for_role(_known_role(role))
    return [NavigationItemResponse.model_validate(i) for i in items]


@router.get("/quick-actions/{role}", response_model=list[QuickActionResponse])
async def get_quick_actions(role: str):
    actions = app_config.get_quick_actions_for_role(_known_role(role))
    return [QuickActionResponse.model_validate(a) for a in actions]


@router.get("/modules/me", response_model=list[ModuleResponse])
async def get_my_modules(current_user: CurrentUser = Depends(get_current_user)):
    """Modules the caller's role and token permissions give access to."""
    modules = app_config.get_available_modules_for_user(
        current_user.role, current_user.permissions
    )
    return [ModuleResponse.model_validate(m) for m in modules]
