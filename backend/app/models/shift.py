"""Shift log model: staff clock-in / clock-out records."""

import uuid
import enum
from datetime import datetime

from sqlalchemy import Enum, ForeignKey, DateTime, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class ShiftType(str, enum.Enum):
    MORNING = "morning"
    EVENING = "evening"
    NIGHT = "night"


class ShiftLog(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "shift_logs"

    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    type: Mapped[ShiftType] = mapped_column(
        Enum(ShiftType, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    notes: Mapped[str | None] = mapped_column(Text)

    # Foreign keys
    staff_id: Mapped["uuid.UUID"] = mapped_column(
        UUID(as_uuid=True), ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True
    )
    restaurant_id: Mapped["uuid.UUID"] = mapped_column(
        UUID(as_uuid=True), ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    staff = relationship("Staff", back_populates="shifts")

    def __repr__(self) -> str:
        return f"<ShiftLog staff={self.staff_id} {self.type} {self.start_time}>"
