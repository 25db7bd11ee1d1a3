"""Unit tests for the module catalogue, role navigation and permission checks."""

from unittest.mock import MagicMock
import uuid

import pytest

from app.core.app_config import (
    APP_MODULES,
    MAX_BOTTOM_NAV_ITEMS,
    ROLE_IDS,
    get_available_modules_for_user,
    get_bottom_navigation_for_role,
    get_quick_actions_for_role,
    get_role,
    has_module_access,
    has_permission,
    role_permissions,
)
from app.core.errors import NotFoundError


def test_manager_bottom_navigation():
    nav = get_bottom_navigation_for_role("manager")

    assert [item.module_id for item in nav] == ["dashboard", "pos", "tables", "online-orders", "reports"]
    assert [item.order for item in nav] == [1, 2, 3, 4, 5]
    assert all(item.is_visible for item in nav)


@pytest.mark.parametrize("role", ROLE_IDS)
def test_bottom_navigation_only_holds_accessible_modules(role):
    nav = get_bottom_navigation_for_role(role)
    role_modules = get_role(role).default_modules

    assert len(nav) <= MAX_BOTTOM_NAV_ITEMS
    assert all(item.module_id in role_modules for item in nav)


def test_skipped_navigation_entries_keep_priority_position():
    """Waiter priorities include menu and kitchen, which waiters do not get."""
    nav = get_bottom_navigation_for_role("waiter")

    assert [(item.module_id, item.order) for item in nav] == [
        ("tables", 1),
        ("pos", 2),
        ("customers", 3),
    ]


def test_unknown_role_has_no_navigation():
    assert get_bottom_navigation_for_role("janitor") == []
    assert role_permissions("janitor") == []


@pytest.mark.parametrize("permissions", [[], ["staff"], ["*"], ["staff", "*", "pos"]])
def test_waiter_never_reaches_staff_module(permissions):
    assert not has_module_access("waiter", "staff", permissions)


def test_module_access_requires_permission():
    assert has_module_access("manager", "staff", ["staff"])
    assert not has_module_access("manager", "staff", ["pos"])
    assert has_module_access("cashier", "pos", ["*"])
    assert not has_module_access("cashier", "no-such-module", ["*"])


def test_has_permission_wildcard():
    assert has_permission(["pos"], "pos")
    assert has_permission(["*"], "settings")
    assert not has_permission(["pos", "tables"], "settings")


def test_quick_actions_sorted_and_filtered():
    actions = get_quick_actions_for_role("chef")

    assert [a.id for a in actions] == ["kitchen-view", "online-orders"]


def test_available_modules_follow_catalogue_order():
    modules = get_available_modules_for_user("cashier", role_permissions("cashier"))

    orders = [m.order for m in modules]
    assert orders == sorted(orders)
    assert {m.id for m in modules} == {"dashboard", "pos", "reports", "customers", "loyalty", "online-orders"}


def test_manager_permissions_cover_api_vocabulary():
    permissions = role_permissions("manager")
    for needed in ("pos", "tables", "staff", "settings", "menu"):
        assert needed in permissions


def test_catalogue_ids_are_unique():
    ids = [m.id for m in APP_MODULES]
    assert len(ids) == len(set(ids))


# ── HTTP exposure ────────────────────────────────

@pytest.mark.asyncio
async def test_navigation_endpoint_unknown_role():
    from app.api.app_config import get_navigation

    with pytest.raises(NotFoundError):
        await get_navigation("janitor")


@pytest.mark.asyncio
async def test_navigation_endpoint_serializes_items():
    from app.api.app_config import get_navigation

    items = await get_navigation("manager")

    assert len(items) == 5
    assert items[0].model_dump(by_alias=True)["moduleId"] == "dashboard"


@pytest.mark.asyncio
async def test_app_config_endpoint_lists_catalogue():
    from app.api.app_config import get_app_config

    config = await get_app_config()

    assert len(config.modules) == len(APP_MODULES)
    assert {r.id for r in config.roles} == set(ROLE_IDS)


@pytest.mark.asyncio
async def test_my_modules_uses_token_permissions():
    from app.api.app_config import get_my_modules

    user = MagicMock()
    user.id = uuid.uuid4()
    user.role = "helper"
    user.permissions = role_permissions("helper")

    modules = await get_my_modules(user)

    assert "staff" not in {m.id for m in modules}
    assert "pos" in {m.id for m in modules}
