"""Entities that carry a free-text category: menu items, expenses, inventory items, suppliers."""

import uuid
from decimal import Decimal

from sqlalchemy import String, Numeric, Integer, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class RestaurantScopedMixin:
    restaurant_id: Mapped["uuid.UUID"] = mapped_column(
        UUID(as_uuid=True), ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True
    )


class MenuItem(UUIDPrimaryKeyMixin, TimestampMixin, RestaurantScopedMixin, Base):
    __tablename__ = "menu_items"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)


class Expense(UUIDPrimaryKeyMixin, TimestampMixin, RestaurantScopedMixin, Base):
    __tablename__ = "expenses"

    description: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)


class InventoryItem(UUIDPrimaryKeyMixin, TimestampMixin, RestaurantScopedMixin, Base):
    __tablename__ = "inventory_items"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    unit: Mapped[str | None] = mapped_column(String(20))


class Supplier(UUIDPrimaryKeyMixin, TimestampMixin, RestaurantScopedMixin, Base):
    __tablename__ = "suppliers"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(String(20))
