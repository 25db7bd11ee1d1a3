"""Module catalogue, role definitions and role-based navigation.

Everything here is static data plus pure functions over it. The same
permission vocabulary (one entry per module, e.g. ``pos`` or ``tables``)
gates the HTTP API, so a token's permissions are the role's defaults.

Default modules per role:
┌───────────────┬─────────┬──────┬────────┬─────────┬────────┐
│ Module        │ Manager │ Chef │ Waiter │ Cashier │ Helper │
├───────────────┼─────────┼──────┼────────┼─────────┼────────┤
│ dashboard     │   ✓     │  ✓   │   ✓    │   ✓     │   ✓    │
│ pos           │   ✓     │      │   ✓    │   ✓     │   ✓    │
│ tables        │   ✓     │      │   ✓    │         │        │
│ menu          │   ✓     │  ✓   │        │         │        │
│ kitchen       │   ✓     │  ✓   │        │         │   ✓    │
│ online-orders │   ✓     │  ✓   │   ✓    │   ✓     │   ✓    │
│ customers     │   ✓     │      │   ✓    │   ✓     │        │
│ reservations  │   ✓     │      │   ✓    │         │        │
│ inventory     │   ✓     │  ✓   │        │         │        │
│ staff         │   ✓     │      │        │         │        │
│ reports       │   ✓     │      │        │   ✓     │        │
│ marketing     │   ✓     │      │        │         │        │
│ qr-ordering   │   ✓     │      │   ✓    │         │        │
│ loyalty       │   ✓     │      │        │   ✓     │        │
│ suppliers     │   ✓     │  ✓   │        │         │        │
│ expenses      │   ✓     │      │        │         │        │
│ categories    │   ✓     │      │        │         │        │
│ settings      │   ✓     │      │        │         │        │
└───────────────┴─────────┴──────┴────────┴─────────┴────────┘
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

WILDCARD_PERMISSION = "*"
MAX_BOTTOM_NAV_ITEMS = 5

ModuleCategory = Literal["core", "sales", "operations", "analytics", "finance", "admin"]


@dataclass(frozen=True)
class ModuleConfig:
    id: str
    name: str
    label: str
    description: str
    icon: str
    category: ModuleCategory
    component: str
    permissions: tuple[str, ...]
    order: int
    color: str
    required_role: tuple[str, ...] | None = None
    is_enabled: bool = True
    shortcut: str | None = None


@dataclass(frozen=True)
class UserRole:
    id: str
    name: str
    label: str
    description: str
    level: int  # higher level = more permissions
    color: str
    default_modules: tuple[str, ...]
    default_permissions: tuple[str, ...]
    restrictions: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class NavigationItem:
    id: str
    label: str
    icon: str
    module_id: str
    order: int
    is_visible: bool
    required_role: tuple[str, ...] | None
    required_permission: str | None


@dataclass(frozen=True)
class QuickAction:
    id: str
    label: str
    icon: str
    module_id: str
    color: str
    required_role: tuple[str, ...]
    order: int


APP_MODULES: tuple[ModuleConfig, ...] = (
    ModuleConfig(
        id="dashboard", name="Dashboard", label="Dashboard",
        description="Main overview and analytics", icon="📊", category="core",
        component="Dashboard", permissions=("dashboard",), order=1,
        color="#1e40af", shortcut="Ctrl+D",
    ),
    ModuleConfig(
        id="pos", name="POS Billing", label="POS",
        description="Point of sale and billing system", icon="💳", category="sales",
        component="POSBilling", permissions=("pos",), order=2,
        color="#059669", shortcut="Ctrl+P",
    ),
    ModuleConfig(
        id="tables", name="Table Management", label="Tables",
        description="Manage dining tables and layout", icon="🪑", category="operations",
        component="TableManagement", permissions=("tables",), order=3, color="#7c3aed",
    ),
    ModuleConfig(
        id="menu", name="Menu Management", label="Menu",
        description="Manage menu items and categories", icon="📋", category="operations",
        component="MenuManagement", permissions=("menu",), order=4, color="#dc2626",
    ),
    ModuleConfig(
        id="kitchen", name="Kitchen Display", label="Kitchen",
        description="Kitchen order management system", icon="👨‍🍳", category="operations",
        component="KitchenDisplay", permissions=("kitchen",), order=5, color="#ea580c",
    ),
    ModuleConfig(
        id="online-orders", name="Online Orders", label="Online Orders",
        description="Manage online orders from all platforms", icon="📱", category="sales",
        component="OnlineOrdersManagement", permissions=("online-orders",), order=6,
        color="#0891b2",
    ),
    ModuleConfig(
        id="customers", name="Customer Management", label="Customers",
        description="Customer relationship management", icon="👥", category="sales",
        component="CustomerManagement", permissions=("customers",), order=7, color="#0d9488",
    ),
    ModuleConfig(
        id="reservations", name="Reservation Management", label="Reservations",
        description="Table booking and reservation system", icon="📅", category="operations",
        component="ReservationManagement", permissions=("reservations",), order=8,
        color="#7c2d12",
    ),
    ModuleConfig(
        id="inventory", name="Inventory Management", label="Inventory",
        description="Stock and inventory tracking", icon="📦", category="operations",
        component="InventoryManagement", permissions=("inventory",), order=9, color="#a21caf",
    ),
    ModuleConfig(
        id="staff", name="Staff Management", label="Staff",
        description="Employee management and scheduling", icon="👨‍💼", category="admin",
        component="StaffManagement", permissions=("staff",), order=10, color="#4338ca",
        required_role=("manager",),
    ),
    ModuleConfig(
        id="reports", name="Reports & Analytics", label="Reports",
        description="Business analytics and reporting", icon="📈", category="analytics",
        component="Reports", permissions=("reports",), order=11, color="#be123c",
    ),
    ModuleConfig(
        id="marketing", name="Marketing", label="Marketing",
        description="Marketing campaigns and promotions", icon="📢", category="sales",
        component="Marketing", permissions=("marketing",), order=12, color="#c2410c",
        required_role=("manager",),
    ),
    ModuleConfig(
        id="qr-ordering", name="QR Ordering", label="QR Orders",
        description="QR code ordering system", icon="📱", category="sales",
        component="QROrdering", permissions=("qr-ordering",), order=13, color="#0369a1",
    ),
    ModuleConfig(
        id="loyalty", name="Loyalty Program", label="Loyalty",
        description="Customer loyalty and rewards", icon="🎁", category="sales",
        component="LoyaltyProgram", permissions=("loyalty",), order=14, color="#9333ea",
    ),
    ModuleConfig(
        id="suppliers", name="Supplier Management", label="Suppliers",
        description="Vendor and supplier management", icon="🚛", category="operations",
        component="SupplierManagement", permissions=("suppliers",), order=15, color="#059669",
    ),
    ModuleConfig(
        id="expenses", name="Expense Management", label="Expenses",
        description="Track business expenses", icon="🧾", category="finance",
        component="ExpenseManagement", permissions=("expenses",), order=16, color="#dc2626",
    ),
    ModuleConfig(
        id="categories", name="Categories Management", label="Categories",
        description="Manage menu categories", icon="🏷️", category="operations",
        component="CategoriesManagement", permissions=("menu",), order=17, color="#7c3aed",
    ),
    ModuleConfig(
        id="settings", name="Settings", label="Settings",
        description="System configuration and preferences", icon="⚙️", category="admin",
        component="Settings", permissions=("settings",), order=18, color="#64748b",
        required_role=("manager",),
    ),
)

_MODULES_BY_ID: dict[str, ModuleConfig] = {m.id: m for m in APP_MODULES}


def _all_permissions() -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for module in APP_MODULES:
        for permission in module.permissions:
            seen.setdefault(permission, None)
    return tuple(seen)


USER_ROLES: tuple[UserRole, ...] = (
    UserRole(
        id="manager", name="manager", label="Manager",
        description="Full system access and management capabilities",
        level=5, color="#8b5cf6",
        default_modules=tuple(m.id for m in APP_MODULES),
        default_permissions=_all_permissions(),
    ),
    UserRole(
        id="chef", name="chef", label="Chef",
        description="Kitchen operations and menu management",
        level=3, color="#f97316",
        default_modules=("dashboard", "kitchen", "inventory", "menu", "suppliers", "online-orders"),
        default_permissions=("dashboard", "kitchen", "inventory", "menu", "suppliers", "online-orders"),
        restrictions=("staff", "reports", "settings", "marketing"),
    ),
    UserRole(
        id="waiter", name="waiter", label="Waiter",
        description="Customer service and order management",
        level=2, color="#10b981",
        default_modules=(
            "dashboard", "pos", "tables", "customers", "reservations", "qr-ordering", "online-orders",
        ),
        default_permissions=(
            "dashboard", "pos", "tables", "customers", "reservations", "qr-ordering", "online-orders",
        ),
        restrictions=("staff", "reports", "settings", "marketing", "suppliers", "expenses"),
    ),
    UserRole(
        id="cashier", name="cashier", label="Cashier",
        description="Billing and payment processing",
        level=2, color="#3b82f6",
        default_modules=("dashboard", "pos", "reports", "customers", "loyalty", "online-orders"),
        default_permissions=("dashboard", "pos", "reports", "customers", "loyalty", "online-orders"),
        restrictions=("staff", "settings", "marketing", "suppliers", "inventory", "kitchen"),
    ),
    UserRole(
        id="helper", name="helper", label="Helper",
        description="Basic operational support",
        level=1, color="#6b7280",
        default_modules=("dashboard", "pos", "kitchen", "online-orders"),
        default_permissions=("dashboard", "pos", "kitchen", "online-orders"),
        restrictions=(
            "staff", "reports", "settings", "marketing", "suppliers", "expenses", "customers",
        ),
    ),
)

_ROLES_BY_ID: dict[str, UserRole] = {r.id: r for r in USER_ROLES}

ROLE_IDS: tuple[str, ...] = tuple(_ROLES_BY_ID)

# Bottom navigation order per role; entries the role cannot open are dropped
NAVIGATION_PRIORITIES: dict[str, tuple[str, ...]] = {
    "manager": ("dashboard", "pos", "tables", "online-orders", "reports"),
    "chef": ("kitchen", "menu", "inventory", "reports", "settings"),
    "waiter": ("tables", "pos", "customers", "menu", "kitchen"),
    "cashier": ("pos", "tables", "customers", "reports", "loyalty"),
    "helper": ("pos", "kitchen", "tables", "dashboard", "online-orders"),
}


QUICK_ACTIONS: tuple[QuickAction, ...] = (
    QuickAction(
        id="new-order", label="New Order", icon="Plus", module_id="pos", color="#10b981",
        required_role=("manager", "waiter", "cashier"), order=1,
    ),
    QuickAction(
        id="table-view", label="Table View", icon="Users", module_id="tables", color="#3b82f6",
        required_role=("manager", "waiter"), order=2,
    ),
    QuickAction(
        id="kitchen-view", label="Kitchen", icon="ChefHat", module_id="kitchen", color="#f97316",
        required_role=("manager", "chef"), order=3,
    ),
    QuickAction(
        id="staff-manage", label="Staff", icon="Users", module_id="staff", color="#8b5cf6",
        required_role=("manager",), order=4,
    ),
    QuickAction(
        id="reports-view", label="Reports", icon="TrendingUp", module_id="reports", color="#dc2626",
        required_role=("manager",), order=5,
    ),
    QuickAction(
        id="online-orders", label="Online Orders", icon="Smartphone", module_id="online-orders",
        color="#0891b2", required_role=("manager", "chef", "waiter", "cashier", "helper"), order=6,
    ),
)

FEATURE_FLAGS: dict[str, bool] = {
    "AI_ASSISTANT": True,
    "MULTI_CURRENCY": True,
    "QR_ORDERING": True,
    "ONLINE_INTEGRATIONS": True,
    "ADVANCED_ANALYTICS": True,
    "MULTI_LOCATION": False,
    "INVENTORY_FORECASTING": True,
    "CUSTOMER_FEEDBACK": True,
    "SOCIAL_MEDIA_INTEGRATION": False,
    "VOICE_ORDERING": False,
}

APP_CONFIG: dict = {
    "name": "Eat With Me",
    "version": "2.0.0",
    "theme": {"primary": "#1e40af", "secondary": "#f8fafc", "accent": "#8b5cf6"},
    "features": FEATURE_FLAGS,
    "max_users": 50,
    "supported_languages": ["en", "hi", "ta", "te"],
    "currency": {"default": "INR", "symbol": "₹", "supported": ["INR", "USD", "EUR", "GBP"]},
}


def get_module(module_id: str) -> ModuleConfig | None:
    return _MODULES_BY_ID.get(module_id)


def get_role(role_id: str) -> UserRole | None:
    return _ROLES_BY_ID.get(role_id)


def role_permissions(role_id: str) -> list[str]:
    """Permissions granted to a role, empty for unknown roles."""
    role = get_role(role_id)
    return list(role.default_permissions) if role else []


def _role_allowed(module: ModuleConfig, role_id: str) -> bool:
    return module.required_role is None or role_id in module.required_role


def get_bottom_navigation_for_role(role_id: str) -> list[NavigationItem]:
    """Bottom navigation bar for a role: at most five entries in priority order."""
    role = get_role(role_id)
    if role is None:
        return []

    allowed = {
        m.id: m
        for m in APP_MODULES
        if m.id in role.default_modules and m.is_enabled and _role_allowed(m, role_id)
    }

    items: list[NavigationItem] = []
    priorities = NAVIGATION_PRIORITIES.get(role_id, ())[:MAX_BOTTOM_NAV_ITEMS]
    for position, module_id in enumerate(priorities, start=1):
        module = allowed.get(module_id)
        if module is None:
            continue
        items.append(
            NavigationItem(
                id=f"nav-{module_id}",
                label=module.label,
                icon=module.icon,
                module_id=module_id,
                order=position,
                is_visible=True,
                required_role=module.required_role,
                required_permission=module.permissions[0] if module.permissions else None,
            )
        )
    return items


def get_quick_actions_for_role(role_id: str) -> list[QuickAction]:
    return sorted(
        (a for a in QUICK_ACTIONS if role_id in a.required_role),
        key=lambda a: a.order,
    )


def has_permission(user_permissions: list[str] | tuple[str, ...], required: str) -> bool:
    return required in user_permissions or WILDCARD_PERMISSION in user_permissions


def has_module_access(
    role_id: str, module_id: str, user_permissions: list[str] | tuple[str, ...]
) -> bool:
    """True iff the module is enabled, the role is not excluded and every permission is held."""
    module = get_module(module_id)
    if module is None or not module.is_enabled:
        return False

    # Role exclusion wins over any permission, wildcard included
    if not _role_allowed(module, role_id):
        return False

    return all(has_permission(user_permissions, p) for p in module.permissions)


def get_available_modules_for_user(
    role_id: str, user_permissions: list[str] | tuple[str, ...]
) -> list[ModuleConfig]:
    return sorted(
        (m for m in APP_MODULES if has_module_access(role_id, m.id, user_permissions)),
        key=lambda m: m.order,
    )
