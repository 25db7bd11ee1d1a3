"""Dining table operations: CRUD, status transitions, order seating and the list cache."""

import logging
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.cache import cache_delete, cache_get_json, cache_set_json
from app.core.config import settings
from app.core.errors import (
    ConcurrencyConflictError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
)
from app.models.order import Order, OrderStatus
from app.models.table import DiningTable, TableStatus
from app.schemas.table import TableResponse, TableStats
from app.services.lifecycle import MANUAL_TABLE_STATUSES, ensure_table_transition
from app.services.persistence import commit_or_conflict

logger = logging.getLogger(__name__)


def cache_key(restaurant_id: UUID) -> str:
    return f"tables:{restaurant_id}"


async def invalidate_cache(restaurant_id: UUID) -> None:
    await cache_delete(cache_key(restaurant_id))


async def get_table(
    db: AsyncSession, table_id: UUID, restaurant_id: UUID, *, lock: bool = False
) -> DiningTable:
    query = select(DiningTable).where(
        DiningTable.id == table_id,
        DiningTable.restaurant_id == restaurant_id,
    )
    if lock:
        query = query.with_for_update().execution_options(populate_existing=True)
    result = await db.execute(query)
    table = result.scalar_one_or_none()
    if not table:
        raise NotFoundError("Table not found")
    return table


async def _lock_order(db: AsyncSession, order_id: UUID, restaurant_id: UUID) -> Order | None:
    result = await db.execute(
        select(Order)
        .where(Order.id == order_id, Order.restaurant_id == restaurant_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


def occupy(table: DiningTable, order: Order) -> None:
    """Seat a pending order at a locked table. Caller commits."""
    ensure_table_transition(table.status, TableStatus.OCCUPIED)
    table.status = TableStatus.OCCUPIED
    table.current_order_id = order.id
    order.table_id = table.id


def release(table: DiningTable) -> None:
    """Free a locked table. Caller commits."""
    ensure_table_transition(table.status, TableStatus.FREE)
    table.status = TableStatus.FREE
    table.current_order_id = None


async def list_tables(db: AsyncSession, restaurant_id: UUID) -> list[dict]:
    """All tables of a restaurant ordered by number, served from Redis when warm."""
    key = cache_key(restaurant_id)
    cached = await cache_get_json(key)
    if cached is not None:
        return cached

    result = await db.execute(
        select(DiningTable)
        .where(DiningTable.restaurant_id == restaurant_id)
        .order_by(DiningTable.table_number)
    )
    tables = [
        TableResponse.model_validate(t).model_dump(mode="json") for t in result.scalars().all()
    ]
    await cache_set_json(key, tables, settings.TABLE_CACHE_TTL_SECONDS)
    return tables


async def search_tables(
    db: AsyncSession,
    restaurant_id: UUID,
    table_number: int | None = None,
    status: TableStatus | None = None,
    min_capacity: int | None = None,
) -> list[DiningTable]:
    query = select(DiningTable).where(DiningTable.restaurant_id == restaurant_id)
    if table_number is not None:
        query = query.where(DiningTable.table_number == table_number)
    if status is not None:
        query = query.where(DiningTable.status == status)
    if min_capacity is not None:
        query = query.where(DiningTable.capacity >= min_capacity)

    result = await db.execute(query.order_by(DiningTable.table_number))
    return list(result.scalars().all())


async def get_stats(db: AsyncSession, restaurant_id: UUID) -> TableStats:
    result = await db.execute(
        select(DiningTable.status, func.count())
        .where(DiningTable.restaurant_id == restaurant_id)
        .group_by(DiningTable.status)
    )
    counts = {TableStatus(status): count for status, count in result.all()}
    free = counts.get(TableStatus.FREE, 0)
    occupied = counts.get(TableStatus.OCCUPIED, 0)
    reserved = counts.get(TableStatus.RESERVED, 0)
    return TableStats(
        total=free + occupied + reserved,
        free=free,
        occupied=occupied,
        reserved=reserved,
        available=free,
    )


async def create_table(
    db: AsyncSession, restaurant_id: UUID, table_number: int, capacity: int
) -> DiningTable:
    existing = await db.execute(
        select(DiningTable).where(
            DiningTable.restaurant_id == restaurant_id,
            DiningTable.table_number == table_number,
        )
    )
    if existing.scalar_one_or_none():
        raise ConflictError(f"Table number {table_number} already exists")

    table = DiningTable(
        restaurant_id=restaurant_id,
        table_number=table_number,
        capacity=capacity,
        status=TableStatus.FREE,
    )
    db.add(table)
    await commit_or_conflict(db, f"Table number {table_number} already exists")
    await db.refresh(table)
    await invalidate_cache(restaurant_id)

    logger.info("Table #%s created for restaurant %s", table_number, restaurant_id)
    return table


async def set_status(
    db: AsyncSession, table_id: UUID, restaurant_id: UUID, target: TableStatus
) -> DiningTable:
    """Move a table between free and reserved. Occupying goes through assign_order."""
    table = await get_table(db, table_id, restaurant_id, lock=True)

    # Occupied tables are freed through free_table, which also detaches the order
    if target not in MANUAL_TABLE_STATUSES or table.status == TableStatus.OCCUPIED:
        raise InvalidTransitionError("table", table.status.value, target.value)
    if target == TableStatus.FREE:
        release(table)
    else:
        ensure_table_transition(table.status, target)
        table.status = target

    await commit_or_conflict(db)
    await db.refresh(table)
    await invalidate_cache(restaurant_id)

    logger.info("Table %s status -> %s", table_id, target.value)
    return table


async def assign_order(
    db: AsyncSession, table_id: UUID, restaurant_id: UUID, order_id: UUID
) -> DiningTable:
    """Seat a pending order at a free or reserved table; an occupied table is never overwritten."""
    # Lock order before table, the same order used by checkout and cancel
    order = await _lock_order(db, order_id, restaurant_id)
    if not order:
        raise NotFoundError("Order not found")

    table = await get_table(db, table_id, restaurant_id, lock=True)

    if order.status != OrderStatus.PENDING:
        raise ConflictError(f"Only pending orders can be seated, order is '{order.status.value}'")
    if order.table_id is not None and order.table_id != table.id:
        raise ConflictError("Order is already seated at another table")

    occupy(table, order)

    await commit_or_conflict(db)
    await db.refresh(table)
    await invalidate_cache(restaurant_id)

    logger.info("Order %s seated at table %s", order_id, table_id)
    return table


async def free_table(db: AsyncSession, table_id: UUID, restaurant_id: UUID) -> DiningTable:
    """Free an occupied table. A pending order seated there is unseated so it can be assigned again."""
    seated_id = (await get_table(db, table_id, restaurant_id)).current_order_id

    # Lock order before table, the same order used by checkout and cancel
    order = await _lock_order(db, seated_id, restaurant_id) if seated_id else None
    table = await get_table(db, table_id, restaurant_id, lock=True)
    if table.current_order_id != seated_id:
        raise ConcurrencyConflictError()

    release(table)
    if order is not None and order.table_id == table.id and order.status == OrderStatus.PENDING:
        order.table_id = None

    await commit_or_conflict(db)
    await db.refresh(table)
    await invalidate_cache(restaurant_id)

    logger.info("Table %s freed", table_id)
    return table


async def delete_table(db: AsyncSession, table_id: UUID, restaurant_id: UUID) -> TableResponse:
    """Delete a table that is not occupied; returns the deleted record."""
    table = await get_table(db, table_id, restaurant_id, lock=True)
    if table.status == TableStatus.OCCUPIED:
        raise ConflictError("Cannot delete an occupied table")

    snapshot = TableResponse.model_validate(table)
    await db.delete(table)
    await commit_or_conflict(db)
    await invalidate_cache(restaurant_id)

    logger.info("Table %s deleted", table_id)
    return snapshot
