"""Category lookup shared by the menu, expense, inventory and supplier screens."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import require_permission
from app.core.errors import ValidationError
from app.db.base import get_db
from app.schemas.auth import CurrentUser
from app.schemas.category import CategoryType
from app.services import category_service

router = APIRouter(prefix="/categories", tags=["categories"])


def parse_category_type(raw: str | None) -> CategoryType:
    try:
        return CategoryType(raw)
    except ValueError:
        allowed = ", ".join(t.value for t in CategoryType)
        raise ValidationError(f"Missing or invalid type, expected one of: {allowed}")


@router.get("", response_model=list[str])
async def list_categories(
    type_: str | None = Query(None, alias="type", description="menu, expense, inventory or supplier"),
    current_user: CurrentUser = Depends(require_permission("menu")),
    db: AsyncSession = Depends(get_db),
):
    """Distinct category names for one entity type within the current restaurant."""
    category_type = parse_category_type(type_)
    return await category_service.list_categories(db, current_user.restaurant_id, category_type)
