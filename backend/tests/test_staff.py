"""Unit tests for the staff management API."""

from unittest.mock import AsyncMock, MagicMock
import uuid

import pytest
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import IntegrityError

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.core.security import verify_password
from app.models.staff import Staff
from app.schemas.staff import StaffCreate, StaffUpdate
from app.services import staff_service


def _user():
    mock_user = MagicMock()
    mock_user.id = uuid.uuid4()
    mock_user.restaurant_id = uuid.uuid4()
    mock_user.permissions = ["staff"]
    return mock_user


def _staff(restaurant_id, role="waiter", email="waiter@example.com", is_active=True):
    return Staff(
        id=uuid.uuid4(),
        restaurant_id=restaurant_id,
        email=email,
        hashed_password="not-a-real-hash",
        full_name="Asha Rao",
        phone=None,
        role=role,
        is_active=is_active,
    )


def _result(obj):
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = obj
    return mock_result


def _db(*results):
    mock_db = AsyncMock()
    mock_db.add = MagicMock()
    if results:
        mock_db.execute.side_effect = list(results)
    return mock_db


def _create_body(**overrides):
    data = {
        "email": "new@example.com",
        "password": "secret123",
        "fullName": "New Hire",
        "role": "cashier",
    }
    data.update(overrides)
    return StaffCreate.model_validate(data)


# ── Schemas ──────────────────────────────────────

@pytest.mark.parametrize("role", ["owner", "Manager", ""])
def test_create_rejects_unknown_role(role):
    with pytest.raises(SchemaValidationError):
        _create_body(role=role)


def test_create_rejects_short_password():
    with pytest.raises(SchemaValidationError):
        _create_body(password="123")


@pytest.mark.parametrize("field", ["email", "password", "fullName", "role", "isActive"])
def test_update_rejects_null_for_required_fields(field):
    with pytest.raises(SchemaValidationError):
        StaffUpdate.model_validate({field: None})


def test_update_may_clear_phone():
    body = StaffUpdate.model_validate({"phone": None})

    assert body.model_dump(exclude_unset=True) == {"phone": None}


# ── Create ───────────────────────────────────────

@pytest.mark.asyncio
async def test_create_staff_hashes_password():
    from app.api.staff import create_staff

    user = _user()
    mock_db = _db(_result(None))

    async def _refresh(obj):
        obj.id = uuid.uuid4()

    mock_db.refresh.side_effect = _refresh

    response = await create_staff(_create_body(), user, mock_db)

    added = mock_db.add.call_args[0][0]
    assert added.restaurant_id == user.restaurant_id
    assert added.hashed_password != "secret123"
    assert verify_password("secret123", added.hashed_password)
    assert response.role == "cashier"
    assert response.is_active is True
    assert "hashedPassword" not in response.model_dump(by_alias=True)


@pytest.mark.asyncio
async def test_create_staff_duplicate_email():
    from app.api.staff import create_staff

    user = _user()
    mock_db = _db(_result(_staff(uuid.uuid4(), email="new@example.com")))

    with pytest.raises(ConflictError) as exc_info:
        await create_staff(_create_body(), user, mock_db)

    assert exc_info.value.message == "Email already registered"
    mock_db.add.assert_not_called()


@pytest.mark.asyncio
async def test_create_staff_unique_violation_on_commit():
    user = _user()
    mock_db = _db(_result(None))
    mock_db.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))

    with pytest.raises(ConflictError):
        await staff_service.create_staff(mock_db, user.restaurant_id, _create_body())

    mock_db.rollback.assert_awaited_once()


# ── Read ─────────────────────────────────────────

@pytest.mark.asyncio
async def test_get_staff_of_other_restaurant_is_not_found():
    from app.api.staff import get_staff

    user = _user()
    mock_db = _db(_result(None))

    with pytest.raises(NotFoundError):
        await get_staff(uuid.uuid4(), user, mock_db)

    query = str(mock_db.execute.call_args[0][0])
    assert "staff.restaurant_id" in query


@pytest.mark.asyncio
async def test_list_staff_filters_by_search_and_role():
    from app.api.staff import list_staff

    user = _user()
    result = MagicMock()
    result.scalars.return_value.all.return_value = [_staff(user.restaurant_id)]
    mock_db = _db(result)

    response = await list_staff("asha", "waiter", None, user, mock_db)

    assert [s.full_name for s in response] == ["Asha Rao"]
    query = str(mock_db.execute.call_args[0][0]).lower()
    assert "like" in query
    assert "staff.role" in query


@pytest.mark.asyncio
async def test_stats_count_roles_and_activity():
    user = _user()
    result = MagicMock()
    result.all.return_value = [("manager", True, 1), ("chef", True, 2), ("chef", False, 1)]
    mock_db = _db(result)

    stats = await staff_service.get_stats(mock_db, user.restaurant_id)

    assert stats.total == 4
    assert stats.active == 3
    assert stats.inactive == 1
    assert stats.by_role == {"manager": 1, "chef": 3}


@pytest.mark.asyncio
async def test_roles_are_distinct():
    user = _user()
    result = MagicMock()
    result.scalars.return_value.all.return_value = ["cashier", "manager"]
    mock_db = _db(result)

    roles = await staff_service.list_roles(mock_db, user.restaurant_id)

    assert roles == ["cashier", "manager"]
    assert "DISTINCT" in str(mock_db.execute.call_args[0][0])


# ── Update / activation ─────────────────────────

@pytest.mark.asyncio
async def test_update_staff_changes_role_and_password():
    from app.api.staff import update_staff

    user = _user()
    staff = _staff(user.restaurant_id)
    mock_db = _db(_result(staff))

    body = StaffUpdate.model_validate({"role": "cashier", "password": "newsecret"})
    response = await update_staff(staff.id, body, user, mock_db)

    assert response.role == "cashier"
    assert verify_password("newsecret", staff.hashed_password)
    mock_db.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_staff_to_taken_email():
    user = _user()
    staff = _staff(user.restaurant_id)
    other = _staff(user.restaurant_id, email="taken@example.com")
    mock_db = _db(_result(staff), _result(other))

    body = StaffUpdate(email="taken@example.com")
    with pytest.raises(ConflictError):
        await staff_service.update_staff(mock_db, staff.id, user.restaurant_id, body, user.id)

    assert staff.email == "waiter@example.com"
    mock_db.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_cannot_deactivate_self():
    user = _user()
    me = _staff(user.restaurant_id, role="manager")
    me.id = user.id
    mock_db = _db(_result(me))

    with pytest.raises(ValidationError):
        await staff_service.update_staff(
            mock_db, user.id, user.restaurant_id, StaffUpdate(is_active=False), user.id
        )

    assert me.is_active is True


@pytest.mark.asyncio
async def test_deactivate_and_activate():
    from app.api.staff import activate_staff, deactivate_staff

    user = _user()
    staff = _staff(user.restaurant_id)
    mock_db = _db(_result(staff), _result(staff))

    response = await deactivate_staff(staff.id, user, mock_db)
    assert response.is_active is False

    response = await activate_staff(staff.id, user, mock_db)
    assert response.is_active is True


@pytest.mark.asyncio
async def test_deactivate_self_is_refused():
    from app.api.staff import deactivate_staff

    user = _user()
    mock_db = _db()

    with pytest.raises(ValidationError):
        await deactivate_staff(user.id, user, mock_db)

    mock_db.execute.assert_not_called()


# ── Delete ───────────────────────────────────────

@pytest.mark.asyncio
async def test_delete_staff():
    from app.api.staff import delete_staff

    user = _user()
    staff = _staff(user.restaurant_id)
    mock_db = _db(_result(staff))

    await delete_staff(staff.id, user, mock_db)

    mock_db.delete.assert_awaited_once_with(staff)
    mock_db.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_delete_self_is_refused():
    from app.api.staff import delete_staff

    user = _user()
    mock_db = _db()

    with pytest.raises(ValidationError):
        await delete_staff(user.id, user, mock_db)

    mock_db.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_missing_staff():
    from app.api.staff import delete_staff

    user = _user()
    mock_db = _db(_result(None))

    with pytest.raises(NotFoundError):
        await delete_staff(uuid.uuid4(), user, mock_db)
