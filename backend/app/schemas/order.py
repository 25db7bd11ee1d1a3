"""POS order schemas for API request/response."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from app.models.order import OrderSource, OrderStatus, PaymentMethod
from app.schemas.base import CamelModel


class OrderItemCreate(CamelModel):
    menu_item_id: UUID
    quantity: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0, decimal_places=2)
    name: str | None = Field(None, max_length=255)


class POSOrderCreate(CamelModel):
    """Start a POS order. Status and source are always set server-side."""

    table_id: UUID | None = None
    items: list[OrderItemCreate] = Field(..., min_length=1)


class CheckoutRequest(CamelModel):
    payment_method: PaymentMethod
    total_amount: Decimal = Field(..., ge=0, decimal_places=2)


class OrderItemResponse(CamelModel):
    id: UUID
    menu_item_id: UUID
    quantity: int
    price: Decimal
    name: str | None = None


class OrderResponse(CamelModel):
    id: UUID
    restaurant_id: UUID
    table_id: UUID | None
    order_source: OrderSource
    status: OrderStatus
    items: list[OrderItemResponse]
    subtotal: Decimal
    payment_method: PaymentMethod | None
    total_amount: Decimal | None
    order_time: datetime
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    refunded_at: datetime | None = None


class OrderListResponse(CamelModel):
    items: list[OrderResponse]
    total: int
    page: int
    size: int
