"""Allowed status transitions for orders and dining tables.

Services call ``ensure_*_transition`` before mutating a row they hold a lock
on; an illegal move raises ``InvalidTransitionError`` and nothing is written.

Order:   pending ──checkout──▶ completed ──refund──▶ refunded
            └──────cancel────▶ cancelled

Table:   free ◀──set──▶ reserved
           │  ▲            │
     assign  free     assign
           ▼  │            ▼
           occupied ◀──────┘
"""

import logging

from app.core.errors import InvalidTransitionError
from app.models.order import OrderStatus
from app.models.table import TableStatus

logger = logging.getLogger(__name__)

ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset({OrderStatus.REFUNDED}),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.REFUNDED: frozenset(),
}

TABLE_TRANSITIONS: dict[TableStatus, frozenset[TableStatus]] = {
    TableStatus.FREE: frozenset({TableStatus.OCCUPIED, TableStatus.RESERVED}),
    TableStatus.RESERVED: frozenset({TableStatus.FREE, TableStatus.OCCUPIED}),
    TableStatus.OCCUPIED: frozenset({TableStatus.FREE}),
}

# Only assign/free may touch OCCUPIED; a plain status update cannot
MANUAL_TABLE_STATUSES: frozenset[TableStatus] = frozenset({TableStatus.FREE, TableStatus.RESERVED})


def can_transition_order(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ORDER_TRANSITIONS.get(OrderStatus(current), frozenset())


def can_transition_table(current: TableStatus, target: TableStatus) -> bool:
    return target in TABLE_TRANSITIONS.get(TableStatus(current), frozenset())


def ensure_order_transition(current: OrderStatus, target: OrderStatus) -> None:
    if not can_transition_order(current, target):
        logger.warning("Rejected order transition %s -> %s", _value(current), _value(target))
        raise InvalidTransitionError("order", _value(current), _value(target))


def ensure_table_transition(current: TableStatus, target: TableStatus) -> None:
    if not can_transition_table(current, target):
        logger.warning("Rejected table transition %s -> %s", _value(current), _value(target))
        raise InvalidTransitionError("table", _value(current), _value(target))


def _value(status) -> str:
    return status.value if hasattr(status, "value") else str(status)
