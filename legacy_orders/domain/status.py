# legacy_orders/domain/status.py
"""
Maszyna stanow statusu zamowienia.

Tabela przejsc jest stala i niemutowalna, ladowana raz przy imporcie modulu.
completed i cancelled sa terminalne (brak wyjsc).
"""
from enum import Enum
from types import MappingProxyType

from legacy_orders.domain.errors import InvalidStatusValue, InvalidTransition


class OrderStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"
    PROCESSING = "processing"
    COMPLETED = "completed"


STATUSES = tuple(s.value for s in OrderStatus)

TRANSITIONS = MappingProxyType({
    OrderStatus.PENDING: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED, OrderStatus.PROCESSING}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
})


def parse_status(value) -> OrderStatus:
    """Zamienia wartosc z requestu na OrderStatus albo rzuca InvalidStatusValue."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        raise InvalidStatusValue(value) from None


def coerce_status(value) -> OrderStatus | None:
    """Wersja poblazliwa dla sciezki odczytu: zla wartosc = brak filtra."""
    if not value:
        return None
    try:
        return parse_status(value)
    except InvalidStatusValue:
        return None


def allowed_targets(current) -> frozenset:
    # status zapisany przez zewnetrzny system spoza enuma nie ma wyjsc
    status = coerce_status(current)
    if status is None:
        return frozenset()
    return TRANSITIONS[status]


def can_transition(current, target) -> bool:
    new = coerce_status(target)
    return new is not None and new in allowed_targets(current)


def require_edge(source, target) -> tuple[OrderStatus, OrderStatus]:
    """Obie wartosci musza byc w enumie i tworzyc krawedz tabeli przejsc."""
    src = parse_status(source)
    dst = parse_status(target)
    if dst not in TRANSITIONS[src]:
        raise InvalidTransition(src.value, dst.value)
    return src, dst
