"""Category lookup schemas."""

import enum


class CategoryType(str, enum.Enum):
    MENU = "menu"
    EXPENSE = "expense"
    INVENTORY = "inventory"
    SUPPLIER = "supplier"
