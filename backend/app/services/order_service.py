"""POS order lifecycle: start, checkout, refund, cancel and listings."""

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError
from app.models.order import Order, OrderItem, OrderSource, OrderStatus, PaymentMethod
from app.models.table import TableStatus
from app.schemas.auth import CurrentUser
from app.schemas.order import POSOrderCreate
from app.services import table_service
from app.services.lifecycle import ensure_order_transition, ensure_table_transition
from app.services.persistence import commit_or_conflict

logger = logging.getLogger(__name__)


def start_of_day(now: datetime, tz_name: str) -> datetime:
    """Local midnight of ``now`` in ``tz_name``, as an aware datetime. Unknown zones fall back to UTC."""
    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using UTC", tz_name)
        tz = timezone.utc
    local = now.astimezone(tz)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def items_subtotal(body: POSOrderCreate) -> Decimal:
    return sum((item.price * item.quantity for item in body.items), Decimal("0.00"))


async def get_order(
    db: AsyncSession, order_id: uuid.UUID, restaurant_id: uuid.UUID, *, lock: bool = False
) -> Order:
    query = select(Order).where(Order.id == order_id, Order.restaurant_id == restaurant_id)
    if lock:
        query = query.with_for_update()
    result = await db.execute(query)
    order = result.scalar_one_or_none()
    if not order:
        raise NotFoundError("Order not found")
    return order


async def start_pos_order(db: AsyncSession, user: CurrentUser, body: POSOrderCreate) -> Order:
    """Create a pending POS order, seating it at ``body.table_id`` when given."""
    table = None
    if body.table_id is not None:
        table = await table_service.get_table(db, body.table_id, user.restaurant_id, lock=True)
        ensure_table_transition(table.status, TableStatus.OCCUPIED)

    order = Order(
        id=uuid.uuid4(),
        restaurant_id=user.restaurant_id,
        created_by=user.id,
        order_source=OrderSource.POS,
        status=OrderStatus.PENDING,
        subtotal=items_subtotal(body),
        order_time=datetime.now(timezone.utc),
        items=[
            OrderItem(
                id=uuid.uuid4(),
                menu_item_id=item.menu_item_id,
                quantity=item.quantity,
                price=item.price,
                name=item.name,
                position=position,
            )
            for position, item in enumerate(body.items)
        ],
    )
    db.add(order)

    if table is not None:
        # Order row must exist before the table can reference it
        await db.flush()
        table_service.occupy(table, order)

    await commit_or_conflict(db)
    await db.refresh(order)
    if table is not None:
        await table_service.invalidate_cache(user.restaurant_id)

    logger.info("POS order %s started (%d items)", order.id, len(body.items))
    return order


async def _release_table_of(db: AsyncSession, order: Order) -> bool:
    """Free the table this order occupies, if any. Returns whether a table was freed."""
    if order.table_id is None:
        return False
    table = await table_service.get_table(db, order.table_id, order.restaurant_id, lock=True)
    if table.current_order_id != order.id:
        return False
    table_service.release(table)
    return True


async def checkout(
    db: AsyncSession,
    order_id: uuid.UUID,
    restaurant_id: uuid.UUID,
    payment_method: PaymentMethod,
    total_amount: Decimal,
) -> Order:
    """pending -> completed. A second checkout of the same order is rejected."""
    order = await get_order(db, order_id, restaurant_id, lock=True)
    ensure_order_transition(order.status, OrderStatus.COMPLETED)

    order.status = OrderStatus.COMPLETED
    order.payment_method = payment_method
    order.total_amount = total_amount
    order.completed_at = datetime.now(timezone.utc)
    freed = await _release_table_of(db, order)

    await commit_or_conflict(db)
    await db.refresh(order)
    if freed:
        await table_service.invalidate_cache(restaurant_id)

    logger.info("Order %s completed: %s %s", order_id, payment_method.value, total_amount)
    return order


async def refund(db: AsyncSession, order_id: uuid.UUID, restaurant_id: uuid.UUID) -> Order:
    """completed -> refunded. Pending, cancelled and already refunded orders are rejected."""
    order = await get_order(db, order_id, restaurant_id, lock=True)
    ensure_order_transition(order.status, OrderStatus.REFUNDED)

    order.status = OrderStatus.REFUNDED
    order.refunded_at = datetime.now(timezone.utc)

    await commit_or_conflict(db)
    await db.refresh(order)

    logger.info("Order %s refunded", order_id)
    return order


async def cancel(db: AsyncSession, order_id: uuid.UUID, restaurant_id: uuid.UUID) -> Order:
    order = await get_order(db, order_id, restaurant_id, lock=True)
    ensure_order_transition(order.status, OrderStatus.CANCELLED)

    order.status = OrderStatus.CANCELLED
    order.cancelled_at = datetime.now(timezone.utc)
    freed = await _release_table_of(db, order)

    await commit_or_conflict(db)
    await db.refresh(order)
    if freed:
        await table_service.invalidate_cache(restaurant_id)

    logger.info("Order %s cancelled", order_id)
    return order


async def list_pos_orders_since(
    db: AsyncSession, restaurant_id: uuid.UUID, since: datetime
) -> list[Order]:
    result = await db.execute(
        select(Order)
        .where(
            Order.restaurant_id == restaurant_id,
            Order.order_source == OrderSource.POS,
            Order.order_time >= since,
        )
        .order_by(Order.order_time.desc())
    )
    return list(result.scalars().all())


async def list_orders(
    db: AsyncSession,
    restaurant_id: uuid.UUID,
    page: int = 1,
    size: int = 50,
    status: OrderStatus | None = None,
    source: OrderSource | None = None,
) -> tuple[list[Order], int]:
    query = select(Order).where(Order.restaurant_id == restaurant_id)
    if status:
        query = query.where(Order.status == status)
    if source:
        query = query.where(Order.order_source == source)

    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar_one()

    query = query.order_by(Order.order_time.desc()).offset((page - 1) * size).limit(size)
    result = await db.execute(query)
    return list(result.scalars().all()), total
