from app.schemas.order import (
    POSOrderCreate, OrderItemCreate, CheckoutRequest, OrderResponse, OrderListResponse,
)
from app.schemas.table import (
    TableCreate, TableStatusUpdate, TableAssign, TableResponse, TableStats,
)
from app.schemas.shift import ShiftCreate, ShiftUpdate, ShiftResponse
from app.schemas.settings import SettingsUpdate, SettingsResponse

__all__ = [
    "POSOrderCreate", "OrderItemCreate", "CheckoutRequest", "OrderResponse", "OrderListResponse",
    "TableCreate", "TableStatusUpdate", "TableAssign", "TableResponse", "TableStats",
    "ShiftCreate", "ShiftUpdate", "ShiftResponse",
    "SettingsUpdate", "SettingsResponse",
]
