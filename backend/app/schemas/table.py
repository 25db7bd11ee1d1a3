"""Dining table schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.models.table import TableStatus
from app.schemas.base import CamelModel


class TableCreate(CamelModel):
    restaurant_id: UUID
    table_number: int = Field(..., gt=0)
    capacity: int = Field(4, gt=0, le=100)


class TableStatusUpdate(CamelModel):
    status: TableStatus


class TableAssign(CamelModel):
    order_id: UUID


class TableResponse(CamelModel):
    id: UUID
    restaurant_id: UUID
    table_number: int
    capacity: int
    status: TableStatus
    current_order_id: UUID | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TableStats(CamelModel):
    total: int
    free: int
    occupied: int
    reserved: int
    available: int
