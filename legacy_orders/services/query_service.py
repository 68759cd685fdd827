# legacy_orders/services/query_service.py
from dataclasses import dataclass

from sqlalchemy.orm import Session

from legacy_orders.domain.status import OrderStatus, coerce_status
from legacy_orders.repos.order_repo import OrderRepo
from legacy_orders.utils.settings import ORDER_LIST_LIMIT


@dataclass
class OrderListing:
    orders: list
    status: OrderStatus | None

    @property
    def filter_label(self) -> str:
        return self.status.value if self.status else "all"


class OrderQueryService:
    """
    Sciezka tylko do odczytu, bez blokad.
    Nieprawidlowy filtr statusu = brak filtra (nie blad).
    """

    def __init__(self, db: Session, limit: int = ORDER_LIST_LIMIT):
        self.repo = OrderRepo(db)
        self.limit = limit

    def list(self, status_filter: str | None = None) -> OrderListing:
        status = coerce_status(status_filter)
        orders = self.repo.list_by_status(status.value if status else None, limit=self.limit)
        return OrderListing(orders=orders, status=status)

    def list_raw(self, status_filter: str | None = None) -> OrderListing:
        status = coerce_status(status_filter)
        rows = self.repo.list_by_status_raw(status.value if status else None, limit=self.limit)
        return OrderListing(orders=rows, status=status)
