"""Schemas exposing the module catalogue and role navigation."""

from app.schemas.base import CamelModel


class ModuleResponse(CamelModel):
    id: str
    name: str
    label: str
    description: str
    icon: str
    category: str
    component: str
    permissions: list[str]
    required_role: list[str] | None = None
    is_enabled: bool
    order: int
    color: str
    shortcut: str | None = None


class RoleResponse(CamelModel):
    id: str
    name: str
    label: str
    description: str
    level: int
    color: str
    default_modules: list[str]
    default_permissions: list[str]
    restrictions: list[str]


class NavigationItemResponse(CamelModel):
    id: str
    label: str
    icon: str
    module_id: str
    order: int
    is_visible: bool
    required_role: list[str] | None = None
    required_permission: str | None = None


class QuickActionResponse(CamelModel):
    id: str
    label: str
    icon: str
    module_id: str
    color: str
    required_role: list[str]
    order: int


class AppConfigResponse(CamelModel):
    name: str
    version: str
    theme: dict[str, str]
    features: dict[str, bool]
    max_users: int
    supported_languages: list[str]
    currency: dict
    modules: list[ModuleResponse]
    roles: list[RoleResponse]
