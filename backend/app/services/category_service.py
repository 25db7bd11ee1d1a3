"""Distinct category names per domain entity."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.catalog import Expense, InventoryItem, MenuItem, Supplier
from app.schemas.category import CategoryType

CATEGORY_SOURCES = {
    CategoryType.MENU: MenuItem,
    CategoryType.EXPENSE: Expense,
    CategoryType.INVENTORY: InventoryItem,
    CategoryType.SUPPLIER: Supplier,
}


async def list_categories(db: AsyncSession, restaurant_id: UUID, type_: CategoryType) -> list[str]:
    model = CATEGORY_SOURCES[type_]
    result = await db.execute(
        select(model.category)
        .where(model.restaurant_id == restaurant_id, model.category != "")
        .distinct()
        .order_by(model.category)
    )
    return list(result.scalars().all())
