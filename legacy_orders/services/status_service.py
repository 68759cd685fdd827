# legacy_orders/services/status_service.py
from abc import ABC, abstractmethod
from typing import Iterable

from sqlalchemy.orm import Session

from legacy_orders.data.models.order import OrderModel
from legacy_orders.domain.errors import InvalidTransition, OrderNotFound
from legacy_orders.domain.status import parse_status, require_edge
from legacy_orders.repos.order_repo import OrderRepo
from legacy_orders.utils.logging import get_logger

logger = get_logger(__name__)


class TransitionEngine(ABC):
    """
    Kontrakt zmiany statusu zamowienia.
    Dzisiaj tylko blokada pesymistyczna; wariant optymistyczny (compare-and-swap
    na kolumnie version) wymagalby zmiany schematu, ktorej nie mozemy zrobic.
    """

    @abstractmethod
    def transition(self, order_id: int, requested_status: str) -> OrderModel:
        ...

    @abstractmethod
    def batch_transition(self, order_ids: Iterable[int], from_status: str, to_status: str) -> int:
        ...


class LockingTransitionEngine(TransitionEngine):
    """
    Bezpieczna zmiana statusu dla tabeli wspoldzielonej z zewnetrznym systemem.

    - SELECT ... FOR UPDATE blokuje wiersz na poziomie bazy (dziala tez
      przeciwko drugiemu procesowi, mutex w pamieci by tu nic nie dal)
    - odczyt, walidacja i zapis w jednej transakcji pod blokada
    - READ COMMITTED na engine, bez dirty reads
    - brak cache, status zawsze czytany ponownie pod blokada
    """

    def __init__(self, db: Session, repo: OrderRepo | None = None):
        self.repo = repo or OrderRepo(db)

    def transition(self, order_id: int, requested_status: str) -> OrderModel:
        # walidacja wartosci zanim dotkniemy bazy
        target = parse_status(requested_status)

        try:
            order = self.repo.find_by_id_for_update(order_id)
            if order is None:
                raise OrderNotFound(order_id)

            # status przeczytany pod blokada, nie wczesniej
            current = order.status
            if not order.can_transition_to(target):
                raise InvalidTransition(current, target.value)

            self.repo.update_status(order, target.value)
            # kopia wiersza jeszcze pod blokada; po commit obiekt sesji jest expired
            # i kolejny odczyt moglby zobaczyc juz zapis zewnetrznego systemu
            updated = self.repo.snapshot(order)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Order {order_id} status changed {current} -> {target.value}")
        return updated

    def batch_transition(self, order_ids: Iterable[int], from_status: str, to_status: str) -> int:
        """
        Masowa zmiana statusu, best-effort.

        Jeden UPDATE ... WHERE status = from_status, bez blokad wierszy.
        Wiersze, ktore zewnetrzny system juz przestawil, sa pomijane po cichu;
        zwracamy faktyczna liczbe zmienionych wierszy. Nie daje gwarancji
        transition() - kto potrzebuje bledu per wiersz, uzywa transition().
        """
        source, target = require_edge(from_status, to_status)

        ids = list(dict.fromkeys(order_ids))
        if not ids:
            return 0

        try:
            updated = self.repo.bulk_update_status(ids, source.value, target.value)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        if updated < len(ids):
            logger.warning(
                f"Batch {source.value} -> {target.value}: updated {updated} of {len(ids)} orders, "
                f"the rest no longer had status {source.value}"
            )
        else:
            logger.info(f"Batch {source.value} -> {target.value}: updated {updated} orders")
        return updated
