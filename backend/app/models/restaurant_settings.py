"""Per-restaurant settings. Exactly one row per restaurant, enforced by a unique key."""

import uuid
from decimal import Decimal

from sqlalchemy import String, Numeric, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class RestaurantSettings(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "restaurant_settings"

    currency: Mapped[str] = mapped_column(String(3), default="INR", nullable=False)
    tax_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("0.00"), nullable=False)
    service_charge_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), default=Decimal("0.00"), nullable=False
    )
    timezone: Mapped[str] = mapped_column(String(64), default="UTC", nullable=False)
    receipt_footer: Mapped[str | None] = mapped_column(Text)
    preferences: Mapped[dict] = mapped_column(JSONB, default=dict, nullable=False)

    restaurant_id: Mapped["uuid.UUID"] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    restaurant = relationship("Restaurant", back_populates="settings")

    def __repr__(self) -> str:
        return f"<RestaurantSettings restaurant={self.restaurant_id}>"
