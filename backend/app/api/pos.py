"""POS billing endpoints: start, checkout, refund and cancel orders."""

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import require_permission
from app.db.base import get_db
from app.models.order import OrderSource, OrderStatus
from app.schemas.auth import CurrentUser
from app.schemas.order import CheckoutRequest, OrderListResponse, OrderResponse, POSOrderCreate
from app.services import order_service, settings_service

router = APIRouter(prefix="/pos", tags=["pos"])


@router.post("/order", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def start_pos_order(
    body: POSOrderCreate,
    current_user: CurrentUser = Depends(require_permission("pos")),
    db: AsyncSession = Depends(get_db),
):
    """Start a POS order. It is always created pending with source ``pos``."""
    order = await order_service.start_pos_order(db, current_user, body)
    return OrderResponse.model_validate(order)


@router.put("/order/{order_id}/checkout", response_model=OrderResponse)
async def checkout_pos_order(
    order_id: UUID,
    body: CheckoutRequest,
    current_user: CurrentUser = Depends(require_permission("pos")),
    db: AsyncSession = Depends(get_db),
):
    """Take payment and complete a pending order."""
    order = await order_service.checkout(
        db, order_id, current_user.restaurant_id, body.payment_method, body.total_amount
    )
    return OrderResponse.model_validate(order)


@router.get("/orders/today", response_model=list[OrderResponse])
async def list_todays_pos_orders(
    current_user: CurrentUser = Depends(require_permission("pos")),
    db: AsyncSession = Depends(get_db),
):
    """POS orders placed since local midnight in the restaurant's timezone."""
    tz_name = await settings_service.get_timezone(db, current_user.restaurant_id)
    since = order_service.start_of_day(datetime.now(timezone.utc), tz_name)
    orders = await order_service.list_pos_orders_since(db, current_user.restaurant_id, since)
    return [OrderResponse.model_validate(o) for o in orders]


@router.post("/order/{order_id}/refund", response_model=OrderResponse)
async def refund_pos_order(
    order_id: UUID,
    current_user: CurrentUser = Depends(require_permission("pos")),
    db: AsyncSession = Depends(get_db),
):
    """Refund a completed order."""
    order = await order_service.refund(db, order_id, current_user.restaurant_id)
    return OrderResponse.model_validate(order)


@router.post("/order/{order_id}/cancel", response_model=OrderResponse)
async def cancel_pos_order(
    order_id: UUID,
    current_user: CurrentUser = Depends(require_permission("pos")),
    db: AsyncSession = Depends(get_db),
):
    """Cancel a pending order and free its table."""
    order = await order_service.cancel(db, order_id, current_user.restaurant_id)
    return OrderResponse.model_validate(order)


@router.get("/order/{order_id}", response_model=OrderResponse)
async def get_pos_order(
    order_id: UUID,
    current_user: CurrentUser = Depends(require_permission("pos")),
    db: AsyncSession = Depends(get_db),
):
    order = await order_service.get_order(db, order_id, current_user.restaurant_id)
    return OrderResponse.model_validate(order)


@router.get("/orders", response_model=OrderListResponse)
async def list_orders(
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=100),
    status_filter: OrderStatus | None = Query(None, alias="status"),
    source: OrderSource | None = None,
    current_user: CurrentUser = Depends(require_permission("pos")),
    db: AsyncSession = Depends(get_db),
):
    """List orders with pagination and optional filters."""
    orders, total = await order_service.list_orders(
        db, current_user.restaurant_id, page, size, status_filter, source
    )
    return OrderListResponse(
        items=[OrderResponse.model_validate(o) for o in orders],
        total=total,
        page=page,
        size=size,
    )
