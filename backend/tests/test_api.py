"""HTTP-level tests: routing, auth and error mapping through the FastAPI app."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
import uuid

import pytest
from fastapi.testclient import TestClient

from app.core.app_config import role_permissions
from app.core.capabilities import SHIFT_LOGS
from app.core.security import create_access_token
from app.db.base import get_db
from app.main import app


@pytest.fixture
def mock_db():
    db = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def client(mock_db):
    async def _get_db():
        yield mock_db

    app.dependency_overrides[get_db] = _get_db
    app.state.capabilities = set()
    yield TestClient(app)
    app.dependency_overrides.clear()


def _auth(role: str = "manager", restaurant_id: uuid.UUID | None = None) -> dict:
    token = create_access_token(
        staff_id=uuid.uuid4(),
        restaurant_id=restaurant_id or uuid.uuid4(),
        role=role,
        permissions=role_permissions(role),
    )
    return {"Authorization": f"Bearer {token}"}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["redis"] == "disabled"


def test_missing_token_is_401(client):
    response = client.get("/pos/orders/today")

    assert response.status_code == 401


def test_missing_permission_is_403(client):
    response = client.get("/pos/orders/today", headers=_auth("chef"))

    assert response.status_code == 403
    assert response.json()["code"] == "not_authorized"


def test_not_found_maps_to_404(client, mock_db):
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    mock_db.execute.return_value = result

    response = client.get(f"/pos/order/{uuid.uuid4()}", headers=_auth())

    assert response.status_code == 404
    assert response.json() == {"detail": "Order not found", "code": "not_found"}


def test_empty_order_is_422(client):
    response = client.post("/pos/order", json={"items": []}, headers=_auth("waiter"))

    assert response.status_code == 422


def test_invalid_category_type_is_400(client):
    response = client.get("/categories", params={"type": "vehicles"}, headers=_auth())

    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"


def test_shifts_disabled_is_501(client):
    response = client.get("/shifts", headers=_auth())

    assert response.status_code == 501
    assert response.json()["detail"] == "Shift logging is not enabled"


def test_shifts_enabled_lists_rows(client, mock_db):
    app.state.capabilities = {SHIFT_LOGS}
    result = MagicMock()
    result.scalars.return_value.all.return_value = []
    mock_db.execute.return_value = result

    response = client.get("/shifts", headers=_auth())

    assert response.status_code == 200
    assert response.json() == []


def test_settings_not_initialized_is_404(client, mock_db):
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    mock_db.execute.return_value = result

    response = client.get("/settings", headers=_auth("waiter"))

    assert response.status_code == 404


def test_checkout_response_is_camel_case(client, mock_db):
    from datetime import datetime, timezone

    from app.models.order import Order, OrderSource, OrderStatus

    restaurant_id = uuid.uuid4()
    order = Order(
        id=uuid.uuid4(),
        restaurant_id=restaurant_id,
        order_source=OrderSource.POS,
        status=OrderStatus.PENDING,
        subtotal=Decimal("500.00"),
        order_time=datetime.now(timezone.utc),
        items=[],
    )
    result = MagicMock()
    result.scalar_one_or_none.return_value = order
    mock_db.execute.return_value = result

    response = client.put(
        f"/pos/order/{order.id}/checkout",
        json={"paymentMethod": "cash", "totalAmount": 500},
        headers=_auth("cashier", restaurant_id),
    )

    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "completed"
    assert body["paymentMethod"] == "cash"
    assert Decimal(str(body["totalAmount"])) == Decimal("500")


def test_navigation_for_role(client):
    response = client.get("/app-config/navigation/manager")

    assert response.status_code == 200
    assert len(response.json()) == 5


def test_shift_update_with_naive_end_time_is_422(client, mock_db):
    app.state.capabilities = {SHIFT_LOGS}

    response = client.put(
        f"/shifts/{uuid.uuid4()}",
        json={"endTime": "2024-03-01T18:00:00"},
        headers=_auth(),
    )

    assert response.status_code == 422
    mock_db.execute.assert_not_called()


def test_staff_requires_staff_permission(client):
    response = client.get("/staff", headers=_auth("waiter"))

    assert response.status_code == 403


def test_staff_stats_route_is_not_taken_for_an_id(client, mock_db):
    result = MagicMock()
    result.all.return_value = [("manager", True, 1), ("waiter", True, 2), ("waiter", False, 1)]
    mock_db.execute.return_value = result

    response = client.get("/staff/stats", headers=_auth())

    assert response.status_code == 200
    assert response.json() == {
        "total": 4,
        "active": 3,
        "inactive": 1,
        "byRole": {"manager": 1, "waiter": 3},
    }


def test_create_staff_with_unknown_role_is_422(client, mock_db):
    response = client.post(
        "/staff",
        json={
            "email": "new@example.com",
            "password": "secret123",
            "fullName": "New Hire",
            "role": "owner",
        },
        headers=_auth(),
    )

    assert response.status_code == 422
    mock_db.add.assert_not_called()
