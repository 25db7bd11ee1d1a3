"""Unit tests for shift logging: schemas, CRUD and the startup capability gate."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock
import uuid

import pytest
from pydantic import ValidationError as SchemaValidationError

from app.core.capabilities import SHIFT_LOGS, negotiate_capabilities
from app.core.config import settings
from app.core.errors import FeatureDisabledError, NotFoundError, ValidationError
from app.models.shift import ShiftLog, ShiftType
from app.schemas.shift import ShiftCreate, ShiftUpdate

START = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


def _user():
    mock_user = MagicMock()
    mock_user.id = uuid.uuid4()
    mock_user.restaurant_id = uuid.uuid4()
    return mock_user


def _shift(restaurant_id, end=START + timedelta(hours=8)):
    return ShiftLog(
        id=uuid.uuid4(),
        staff_id=uuid.uuid4(),
        restaurant_id=restaurant_id,
        start_time=START,
        end_time=end,
        type=ShiftType.MORNING,
        notes=None,
    )


def _result(obj):
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = obj
    return mock_result


# ── Schemas ──────────────────────────────────────

def test_shift_end_must_follow_start():
    with pytest.raises(SchemaValidationError):
        ShiftCreate(staff_id=uuid.uuid4(), start_time=START, end_time=START, type="night")


def test_shift_type_is_restricted():
    with pytest.raises(SchemaValidationError):
        ShiftCreate(staff_id=uuid.uuid4(), start_time=START, type="afternoon")


def test_open_shift_without_end_is_valid():
    body = ShiftCreate.model_validate(
        {"staffId": str(uuid.uuid4()), "startTime": START.isoformat(), "type": "evening"}
    )
    assert body.end_time is None
    assert body.type == ShiftType.EVENING


def test_naive_end_time_is_rejected():
    with pytest.raises(SchemaValidationError):
        ShiftCreate.model_validate(
            {
                "staffId": str(uuid.uuid4()),
                "startTime": "2025-03-01T09:00:00Z",
                "endTime": "2025-03-01T17:00:00",
                "type": "morning",
            }
        )


def test_update_rejects_naive_end_time():
    with pytest.raises(SchemaValidationError):
        ShiftUpdate.model_validate({"endTime": "2025-03-01T17:00:00"})


@pytest.mark.parametrize("field", ["staffId", "startTime", "type"])
def test_update_rejects_null_for_required_fields(field):
    with pytest.raises(SchemaValidationError):
        ShiftUpdate.model_validate({field: None})


def test_update_may_clear_end_time():
    body = ShiftUpdate.model_validate({"endTime": None, "notes": None})

    assert body.model_dump(exclude_unset=True) == {"end_time": None, "notes": None}


# ── CRUD ─────────────────────────────────────────

@pytest.mark.asyncio
async def test_create_shift_for_unknown_staff():
    from app.api.shifts import create_shift

    mock_db = AsyncMock()
    mock_db.add = MagicMock()
    mock_db.execute.return_value = _result(None)

    body = ShiftCreate(staff_id=uuid.uuid4(), start_time=START, type=ShiftType.MORNING)
    with pytest.raises(NotFoundError):
        await create_shift(body, _user(), mock_db)

    mock_db.add.assert_not_called()


@pytest.mark.asyncio
async def test_create_shift_scoped_to_restaurant():
    from app.api.shifts import create_shift

    user = _user()
    mock_db = AsyncMock()
    mock_db.add = MagicMock()
    mock_db.execute.return_value = _result(uuid.uuid4())

    async def _refresh(obj):
        obj.id = uuid.uuid4()

    mock_db.refresh.side_effect = _refresh

    body = ShiftCreate(
        staff_id=uuid.uuid4(),
        start_time=START,
        end_time=START + timedelta(hours=6),
        type=ShiftType.EVENING,
        notes="Covering for Ravi",
    )
    response = await create_shift(body, user, mock_db)

    assert response.restaurant_id == user.restaurant_id
    assert response.type == ShiftType.EVENING
    assert response.notes == "Covering for Ravi"


@pytest.mark.asyncio
async def test_update_shift_checks_merged_window():
    """Moving only the end time before the stored start is rejected."""
    from app.api.shifts import update_shift

    user = _user()
    shift = _shift(user.restaurant_id)
    mock_db = AsyncMock()
    mock_db.execute.return_value = _result(shift)

    with pytest.raises(ValidationError) as exc_info:
        await update_shift(shift.id, ShiftUpdate(end_time=START - timedelta(hours=1)), user, mock_db)

    assert exc_info.value.status_code == 400
    assert shift.end_time == START + timedelta(hours=8)
    mock_db.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_shift_is_partial():
    from app.api.shifts import update_shift

    user = _user()
    shift = _shift(user.restaurant_id)
    mock_db = AsyncMock()
    mock_db.execute.return_value = _result(shift)

    response = await update_shift(shift.id, ShiftUpdate(notes="Left early"), user, mock_db)

    assert response.notes == "Left early"
    assert response.type == ShiftType.MORNING
    assert response.end_time == START + timedelta(hours=8)


@pytest.mark.asyncio
async def test_delete_shift_not_found():
    from app.api.shifts import delete_shift

    mock_db = AsyncMock()
    mock_db.execute.return_value = _result(None)

    with pytest.raises(NotFoundError):
        await delete_shift(uuid.uuid4(), _user(), mock_db)


@pytest.mark.asyncio
async def test_delete_shift_returns_no_content():
    from app.api.shifts import delete_shift

    user = _user()
    shift = _shift(user.restaurant_id)
    mock_db = AsyncMock()
    mock_db.execute.return_value = _result(shift)

    response = await delete_shift(shift.id, user, mock_db)

    assert response.status_code == 204
    mock_db.delete.assert_awaited_once_with(shift)


# ── Capability ───────────────────────────────────

@pytest.mark.asyncio
async def test_shift_endpoints_disabled_without_capability():
    from app.core.deps import require_capability

    request = MagicMock()
    request.app.state.capabilities = set()

    checker = require_capability(SHIFT_LOGS, "Shift logging is not enabled")
    with pytest.raises(FeatureDisabledError) as exc_info:
        await checker(request)

    assert exc_info.value.status_code == 501
    assert exc_info.value.message == "Shift logging is not enabled"


@pytest.mark.asyncio
async def test_shift_endpoints_enabled_with_capability():
    from app.core.deps import require_capability

    request = MagicMock()
    request.app.state.capabilities = {SHIFT_LOGS}

    assert await require_capability(SHIFT_LOGS, "off")(request) is None


@pytest.mark.asyncio
async def test_negotiation_skips_database_when_disabled(monkeypatch):
    monkeypatch.setattr(settings, "ENABLE_SHIFT_LOGS", False)
    engine = MagicMock()

    assert await negotiate_capabilities(engine) == set()
    engine.connect.assert_not_called()


def _engine(has_table: bool):
    conn = AsyncMock()
    conn.run_sync.return_value = has_table
    engine = MagicMock()
    engine.connect.return_value.__aenter__ = AsyncMock(return_value=conn)
    engine.connect.return_value.__aexit__ = AsyncMock(return_value=False)
    return engine


@pytest.mark.asyncio
async def test_negotiation_requires_table(monkeypatch):
    monkeypatch.setattr(settings, "ENABLE_SHIFT_LOGS", True)

    assert await negotiate_capabilities(_engine(has_table=True)) == {SHIFT_LOGS}
    assert await negotiate_capabilities(_engine(has_table=False)) == set()
