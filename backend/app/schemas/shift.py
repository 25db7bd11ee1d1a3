"""Shift log schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import AwareDatetime, Field, field_validator, model_validator

from app.models.shift import ShiftType
from app.schemas.base import CamelModel


def _check_window(start: datetime | None, end: datetime | None) -> None:
    if start is not None and end is not None and end <= start:
        raise ValueError("endTime must be after startTime")


class ShiftCreate(CamelModel):
    staff_id: UUID
    # Naive times are rejected
    start_time: AwareDatetime
    end_time: AwareDatetime | None = None
    type: ShiftType
    notes: str | None = Field(None, max_length=1000)

    @model_validator(mode="after")
    def check_window(self):
        _check_window(self.start_time, self.end_time)
        return self


class ShiftUpdate(CamelModel):
    """Partial update. Omitted fields keep their value; ``endTime`` and ``notes`` may be cleared with null."""

    staff_id: UUID | None = None
    start_time: AwareDatetime | None = None
    end_time: AwareDatetime | None = None
    type: ShiftType | None = None
    notes: str | None = Field(None, max_length=1000)

    @field_validator("staff_id", "start_time", "type")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

    @model_validator(mode="after")
    def check_window(self):
        _check_window(self.start_time, self.end_time)
        return self


class ShiftResponse(CamelModel):
    id: UUID
    staff_id: UUID
    restaurant_id: UUID
    start_time: datetime
    end_time: datetime | None
    type: ShiftType
    notes: str | None
