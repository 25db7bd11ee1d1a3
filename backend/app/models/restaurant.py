"""Restaurant model."""

from sqlalchemy import String, Boolean, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class Restaurant(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "restaurants"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    address: Mapped[str | None] = mapped_column(Text)
    phone: Mapped[str | None] = mapped_column(String(20))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    staff = relationship("Staff", back_populates="restaurant", lazy="selectin")
    tables = relationship("DiningTable", back_populates="restaurant", lazy="selectin")
    settings = relationship("RestaurantSettings", back_populates="restaurant", uselist=False)

    def __repr__(self) -> str:
        return f"<Restaurant {self.code}: {self.name}>"
