"""SQLAlchemy models for Eat With Me POS."""

from app.models.restaurant import Restaurant
from app.models.staff import Staff
from app.models.table import DiningTable, TableStatus
from app.models.order import Order, OrderItem, OrderStatus, OrderSource, PaymentMethod
from app.models.shift import ShiftLog, ShiftType
from app.models.restaurant_settings import RestaurantSettings
from app.models.catalog import MenuItem, Expense, InventoryItem, Supplier

__all__ = [
    "Restaurant",
    "Staff",
    "DiningTable",
    "TableStatus",
    "Order",
    "OrderItem",
    "OrderStatus",
    "OrderSource",
    "PaymentMethod",
    "ShiftLog",
    "ShiftType",
    "RestaurantSettings",
    "MenuItem",
    "Expense",
    "InventoryItem",
    "Supplier",
]
