"""Dining table model."""

import uuid
import enum

from sqlalchemy import Integer, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class TableStatus(str, enum.Enum):
    FREE = "free"
    OCCUPIED = "occupied"
    RESERVED = "reserved"


class DiningTable(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "tables"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "table_number", name="uq_tables_restaurant_number"),
    )

    table_number: Mapped[int] = mapped_column(Integer, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, default=4, nullable=False)
    status: Mapped[TableStatus] = mapped_column(
        Enum(TableStatus, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]),
        default=TableStatus.FREE,
        nullable=False,
        index=True,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Foreign keys
    restaurant_id: Mapped["uuid.UUID"] = mapped_column(
        UUID(as_uuid=True), ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    current_order_id: Mapped["uuid.UUID | None"] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("orders.id", ondelete="SET NULL", use_alter=True, name="fk_tables_current_order"),
    )

    # Relationships
    restaurant = relationship("Restaurant", back_populates="tables")

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<DiningTable #{self.table_number} status={self.status}>"
