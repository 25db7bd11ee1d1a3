"""Unit tests for the order and table state machines."""

import pytest

from app.core.errors import InvalidTransitionError
from app.models.order import OrderStatus
from app.models.table import TableStatus
from app.services.lifecycle import (
    can_transition_order,
    can_transition_table,
    ensure_order_transition,
    ensure_table_transition,
)


@pytest.mark.parametrize(
    "current,target",
    [
        (OrderStatus.PENDING, OrderStatus.COMPLETED),
        (OrderStatus.PENDING, OrderStatus.CANCELLED),
        (OrderStatus.COMPLETED, OrderStatus.REFUNDED),
    ],
)
def test_allowed_order_transitions(current, target):
    assert can_transition_order(current, target)


@pytest.mark.parametrize(
    "current,target",
    [
        (OrderStatus.PENDING, OrderStatus.REFUNDED),
        (OrderStatus.COMPLETED, OrderStatus.COMPLETED),
        (OrderStatus.COMPLETED, OrderStatus.CANCELLED),
        (OrderStatus.CANCELLED, OrderStatus.PENDING),
        (OrderStatus.REFUNDED, OrderStatus.REFUNDED),
        (OrderStatus.REFUNDED, OrderStatus.COMPLETED),
    ],
)
def test_rejected_order_transitions(current, target):
    assert not can_transition_order(current, target)
    with pytest.raises(InvalidTransitionError) as exc_info:
        ensure_order_transition(current, target)
    assert exc_info.value.status_code == 409
    assert exc_info.value.current == current.value


def test_terminal_order_states_have_no_exit():
    for terminal in (OrderStatus.CANCELLED, OrderStatus.REFUNDED):
        assert not any(can_transition_order(terminal, target) for target in OrderStatus)


def test_table_transitions():
    assert can_transition_table(TableStatus.FREE, TableStatus.OCCUPIED)
    assert can_transition_table(TableStatus.RESERVED, TableStatus.OCCUPIED)
    assert can_transition_table(TableStatus.OCCUPIED, TableStatus.FREE)
    assert not can_transition_table(TableStatus.OCCUPIED, TableStatus.OCCUPIED)
    assert not can_transition_table(TableStatus.OCCUPIED, TableStatus.RESERVED)
    assert not can_transition_table(TableStatus.FREE, TableStatus.FREE)


def test_occupied_table_cannot_be_occupied_again():
    with pytest.raises(InvalidTransitionError) as exc_info:
        ensure_table_transition(TableStatus.OCCUPIED, TableStatus.OCCUPIED)
    assert exc_info.value.entity == "table"


def test_status_strings_are_accepted():
    """Rows loaded from the database may carry plain strings."""
    assert can_transition_order("pending", OrderStatus.COMPLETED)
    assert can_transition_table("reserved", TableStatus.FREE)
