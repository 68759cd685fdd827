import itertools

import pytest

from legacy_orders.domain.errors import InvalidStatusValue, InvalidTransition
from legacy_orders.domain.status import (
    OrderStatus,
    STATUSES,
    TRANSITIONS,
    allowed_targets,
    can_transition,
    coerce_status,
    parse_status,
    require_edge,
)

EDGES = {
    ("pending", "paid"),
    ("pending", "cancelled"),
    ("pending", "processing"),
    ("processing", "completed"),
    ("processing", "cancelled"),
    ("paid", "completed"),
    ("paid", "cancelled"),
}


def test_statuses_are_the_closed_set():
    assert set(STATUSES) == {"pending", "paid", "cancelled", "processing", "completed"}


def test_transition_table_matches_edges():
    table = {(src.value, dst.value) for src, targets in TRANSITIONS.items() for dst in targets}
    assert table == EDGES


def test_transition_table_is_immutable():
    with pytest.raises(TypeError):
        TRANSITIONS[OrderStatus.COMPLETED] = frozenset({OrderStatus.PENDING})
    with pytest.raises(AttributeError):
        TRANSITIONS[OrderStatus.PENDING].add(OrderStatus.COMPLETED)


@pytest.mark.parametrize("src,dst", list(itertools.product(STATUSES, STATUSES)))
def test_can_transition_only_along_edges(src, dst):
    assert can_transition(src, dst) is ((src, dst) in EDGES)


@pytest.mark.parametrize("status", ["completed", "cancelled"])
def test_terminal_statuses(status):
    assert allowed_targets(status) == frozenset()


def test_unknown_stored_status_has_no_outgoing_edges():
    assert allowed_targets("on_hold") == frozenset()
    assert not can_transition("on_hold", "paid")


def test_parse_status_rejects_unknown_value():
    with pytest.raises(InvalidStatusValue) as exc:
        parse_status("not_a_status")
    assert exc.value.value == "not_a_status"
    assert "not_a_status" in str(exc.value)


def test_parse_status_is_case_sensitive():
    with pytest.raises(InvalidStatusValue):
        parse_status("PAID")


def test_coerce_status_is_lenient():
    assert coerce_status("paid") is OrderStatus.PAID
    assert coerce_status("bogus") is None
    assert coerce_status("") is None
    assert coerce_status(None) is None


def test_require_edge():
    assert require_edge("pending", "paid") == (OrderStatus.PENDING, OrderStatus.PAID)
    with pytest.raises(InvalidTransition):
        require_edge("paid", "pending")
    with pytest.raises(InvalidStatusValue):
        require_edge("pending", "shipped")
