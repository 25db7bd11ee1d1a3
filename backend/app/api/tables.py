"""Dining table endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import ensure_same_restaurant, require_permission
from app.db.base import get_db
from app.models.table import TableStatus
from app.schemas.auth import CurrentUser
from app.schemas.table import (
    TableAssign,
    TableCreate,
    TableResponse,
    TableStats,
    TableStatusUpdate,
)
from app.services import table_service

router = APIRouter(prefix="/table", tags=["tables"])


@router.get("/detail/{table_id}", response_model=TableResponse)
async def get_table(
    table_id: UUID,
    current_user: CurrentUser = Depends(require_permission("tables")),
    db: AsyncSession = Depends(get_db),
):
    table = await table_service.get_table(db, table_id, current_user.restaurant_id)
    return TableResponse.model_validate(table)


@router.get("/{restaurant_id}", response_model=list[TableResponse])
async def list_tables(
    restaurant_id: UUID,
    current_user: CurrentUser = Depends(require_permission("tables")),
    db: AsyncSession = Depends(get_db),
):
    """All tables of a restaurant, ordered by table number."""
    ensure_same_restaurant(current_user, restaurant_id)
    return await table_service.list_tables(db, restaurant_id)


@router.get("/{restaurant_id}/stats", response_model=TableStats)
async def table_stats(
    restaurant_id: UUID,
    current_user: CurrentUser = Depends(require_permission("tables")),
    db: AsyncSession = Depends(get_db),
):
    ensure_same_restaurant(current_user, restaurant_id)
    return await table_service.get_stats(db, restaurant_id)


@router.get("/{restaurant_id}/search", response_model=list[TableResponse])
async def search_tables(
    restaurant_id: UUID,
    number: int | None = Query(None, ge=1),
    status_filter: TableStatus | None = Query(None, alias="status"),
    min_capacity: int | None = Query(None, alias="minCapacity", ge=1),
    current_user: CurrentUser = Depends(require_permission("tables")),
    db: AsyncSession = Depends(get_db),
):
    ensure_same_restaurant(current_user, restaurant_id)
    tables = await table_service.search_tables(
        db, restaurant_id, number, status_filter, min_capacity
    )
    return [TableResponse.model_validate(t) for t in tables]


@router.post("", response_model=TableResponse, status_code=status.HTTP_201_CREATED)
async def create_table(
    body: TableCreate,
    current_user: CurrentUser = Depends(require_permission("tables")),
    db: AsyncSession = Depends(get_db),
):
    """Create a table. Table numbers are unique within a restaurant."""
    ensure_same_restaurant(current_user, body.restaurant_id)
    table = await table_service.create_table(
        db, body.restaurant_id, body.table_number, body.capacity
    )
    return TableResponse.model_validate(table)


@router.patch("/{table_id}/status", response_model=TableResponse)
async def update_table_status(
    table_id: UUID,
    body: TableStatusUpdate,
    current_user: CurrentUser = Depends(require_permission("tables")),
    db: AsyncSession = Depends(get_db),
):
    """Switch a table between free and reserved."""
    table = await table_service.set_status(db, table_id, current_user.restaurant_id, body.status)
    return TableResponse.model_validate(table)


@router.post("/{table_id}/assign", response_model=TableResponse)
async def assign_order(
    table_id: UUID,
    body: TableAssign,
    current_user: CurrentUser = Depends(require_permission("tables")),
    db: AsyncSession = Depends(get_db),
):
    """Seat a pending order at a free or reserved table."""
    table = await table_service.assign_order(
        db, table_id, current_user.restaurant_id, body.order_id
    )
    return TableResponse.model_validate(table)


@router.patch("/{table_id}/free", response_model=TableResponse)
async def free_table(
    table_id: UUID,
    current_user: CurrentUser = Depends(require_permission("tables")),
    db: AsyncSession = Depends(get_db),
):
    table = await table_service.free_table(db, table_id, current_user.restaurant_id)
    return TableResponse.model_validate(table)


@router.delete("/{table_id}", response_model=TableResponse)
async def delete_table(
    table_id: UUID,
    current_user: CurrentUser = Depends(require_permission("tables")),
    db: AsyncSession = Depends(get_db),
):
    """Delete a table that is not occupied and return the deleted record."""
    return await table_service.delete_table(db, table_id, current_user.restaurant_id)
