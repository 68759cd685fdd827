# legacy_orders/repos/order_repo.py
from typing import Iterable

from sqlalchemy import select, text, update, DateTime, Integer, Numeric, String
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from legacy_orders.data.models.order import OrderModel
from legacy_orders.domain.errors import LockTimeout, StorageFailure
from legacy_orders.utils.settings import LOCK_WAIT_TIMEOUT_SECONDS
from legacy_orders.utils.logging import get_logger

logger = get_logger(__name__)

# MySQL: 1205 lock wait timeout, 3572 NOWAIT; PostgreSQL: 55P03 lock_not_available
_MYSQL_LOCK_ERRORS = {1205, 3572}
_PG_LOCK_SQLSTATE = "55P03"

_RAW_LIST_SQL = """
    SELECT order_id, customer_name, total_amount, status, created_at
    FROM orders
    WHERE 1=1
"""


def is_lock_timeout(exc: SQLAlchemyError) -> bool:
    orig = getattr(exc, "orig", None)
    if orig is None:
        return False
    if getattr(orig, "pgcode", None) == _PG_LOCK_SQLSTATE:
        return True
    args = getattr(orig, "args", ())
    if args and args[0] in _MYSQL_LOCK_ERRORS:
        return True
    return "database is locked" in str(orig)


class OrderRepo:
    """
    Dostep do wierszy tabeli orders. Bez cache - kazdy odczyt idzie do bazy,
    bo zewnetrzny system moze zmienic status w dowolnym momencie.
    """

    def __init__(self, db: Session, lock_timeout: int = LOCK_WAIT_TIMEOUT_SECONDS):
        self.db = db
        self.lock_timeout = lock_timeout

    def find_by_id(self, order_id: int) -> OrderModel | None:
        try:
            return self.db.get(OrderModel, order_id)
        except SQLAlchemyError as e:
            raise StorageFailure(str(e)) from e

    def find_by_id_for_update(self, order_id: int) -> OrderModel | None:
        """
        SELECT ... FOR UPDATE w biezacej transakcji.
        Blokada jest w silniku bazy, wiec widzi ja tez zewnetrzny system.
        populate_existing - wartosc z wiersza, nie z identity map sesji.
        """
        stmt = (
            select(OrderModel)
            .where(OrderModel.order_id == order_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        try:
            self._apply_lock_timeout()
            return self.db.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._translate(e, order_id) from e

    def update_status(self, order: OrderModel, new_status: str) -> None:
        # zakladamy ze wywolujacy trzyma blokade wiersza
        order.status = new_status
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            raise self._translate(e, order.order_id) from e

    def bulk_update_status(self, order_ids: Iterable[int], from_status: str, to_status: str) -> int:
        """Jeden UPDATE z warunkiem status = from_status, bez blokad wierszy."""
        stmt = (
            update(OrderModel)
            .where(OrderModel.order_id.in_(list(order_ids)))
            .where(OrderModel.status == from_status)
            .values(status=to_status)
            .execution_options(synchronize_session=False)
        )
        try:
            self._apply_lock_timeout()
            result = self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise self._translate(e) from e
        return result.rowcount

    def list_by_status(self, status: str | None, limit: int, offset: int = 0) -> list[OrderModel]:
        stmt = select(OrderModel)
        if status is not None:
            stmt = stmt.where(OrderModel.status == status)
        stmt = (
            stmt.order_by(OrderModel.created_at.desc(), OrderModel.order_id.desc())
            .limit(limit)
            .offset(offset)
        )
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise StorageFailure(str(e)) from e

    def list_by_status_raw(self, status: str | None, limit: int) -> list[OrderModel]:
        """Ta sama lista przez surowy SQL z parametrami (bez SQL injection)."""
        sql = _RAW_LIST_SQL
        params: dict = {"limit": limit}

        if status is not None:
            sql += " AND status = :status"
            params["status"] = status

        sql += " ORDER BY created_at DESC, order_id DESC LIMIT :limit"

        stmt = text(sql).columns(
            order_id=Integer,
            customer_name=String,
            total_amount=Numeric(12, 2),
            status=String,
            created_at=DateTime,
        )
        try:
            rows = self.db.execute(stmt, params).mappings().all()
        except SQLAlchemyError as e:
            raise StorageFailure(str(e)) from e
        # ten sam ksztalt co sciezka ORM, ale obiekty poza sesja
        return [OrderModel(**r) for r in rows]

    def snapshot(self, order: OrderModel) -> OrderModel:
        """Odlaczona kopia wiersza (poza sesja), wartosci nie wygasaja po commit."""
        return OrderModel(
            order_id=order.order_id,
            customer_name=order.customer_name,
            total_amount=order.total_amount,
            status=order.status,
            created_at=order.created_at,
        )

    def commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise self._translate(e) from e

    def rollback(self) -> None:
        self.db.rollback()

    def _apply_lock_timeout(self) -> None:
        dialect = self.db.get_bind().dialect.name
        if dialect == "mysql":
            self.db.execute(
                text("SET SESSION innodb_lock_wait_timeout = :t"), {"t": self.lock_timeout}
            )
        elif dialect == "postgresql":
            # SET LOCAL nie przyjmuje parametrow, wartosc to int z konfiguracji
            self.db.execute(text(f"SET LOCAL lock_timeout = '{int(self.lock_timeout)}s'"))

    def _translate(self, exc: SQLAlchemyError, order_id: int | None = None):
        if is_lock_timeout(exc):
            logger.warning(f"Lock wait timeout on order {order_id}")
            return LockTimeout(order_id)
        return StorageFailure(str(exc))
