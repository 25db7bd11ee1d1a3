"""Dependency injection: auth, permission enforcement, restaurant scoping, capabilities."""

from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from app.core.app_config import has_permission
from app.core.errors import AuthorizationError, FeatureDisabledError
from app.core.security import decode_access_token
from app.schemas.auth import CurrentUser

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


async def get_current_user(token: str = Depends(oauth2_scheme)) -> CurrentUser:
    """Decode JWT and return CurrentUser. Raises 401 on invalid/expired token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token)
        staff_id = payload.get("sub")
        if staff_id is None:
            raise credentials_exception
        return CurrentUser(
            id=UUID(staff_id),
            email="",  # lightweight, full profile via /auth/me
            full_name="",
            role=payload["role"],
            restaurant_id=UUID(payload["restaurant_id"]),
            permissions=payload.get("permissions", []),
            is_active=True,
        )
    except (JWTError, KeyError, ValueError):
        raise credentials_exception


def require_permission(*required: str):
    """Dependency factory: checks the user has ALL required permissions (or the wildcard)."""

    async def checker(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        missing = [p for p in required if not has_permission(user.permissions, p)]
        if missing:
            raise AuthorizationError(f"Missing permissions: {', '.join(missing)}")
        return user

    return checker


def require_capability(name: str, message: str):
    """Dependency factory: 501 unless the capability was enabled at startup."""

    async def checker(request: Request) -> None:
        capabilities: set[str] = getattr(request.app.state, "capabilities", set())
        if name not in capabilities:
            raise FeatureDisabledError(message)

    return checker


def ensure_same_restaurant(user: CurrentUser, restaurant_id: UUID) -> None:
    if user.restaurant_id != restaurant_id:
        raise AuthorizationError("Resource belongs to another restaurant")
