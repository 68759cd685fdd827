# legacy_orders/data/models/order.py
from sqlalchemy import Column, Integer, String, DateTime, Numeric

from legacy_orders.data.database import Base
from legacy_orders.domain.status import can_transition


class OrderModel(Base):
    """
    Tabela orders nalezy do zewnetrznego systemu ERP, schemat jest staly.
    Brak updated_at i brak kolumny version - nie dodawac.
    """
    __tablename__ = "orders"

    order_id = Column(Integer, primary_key=True, autoincrement=False)
    customer_name = Column(String(255), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    status = Column(String(20), nullable=False)
    created_at = Column(DateTime, nullable=False)

    @property
    def formatted_total(self) -> str:
        return f"{self.total_amount:,.2f}"

    def can_transition_to(self, new_status: str) -> bool:
        return can_transition(self.status, new_status)

    def __repr__(self) -> str:
        return f"<OrderModel order_id={self.order_id} status={self.status!r}>"
