# legacy_orders/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime


class OrderOut(BaseModel):
    """Wiersz tabeli orders (response)."""

    order_id: int
    customer_name: str
    total_amount: Decimal
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StatusUpdateIn(BaseModel):
    """Body dla zmiany statusu. Wartosc sprawdza silnik przejsc."""

    status: str = Field(..., min_length=1, description="Docelowy status zamowienia")


class StatusUpdateOut(BaseModel):
    success: bool = True
    message: str
    data: OrderOut


class OrderListMeta(BaseModel):
    count: int
    filter: str


class OrderListOut(BaseModel):
    success: bool = True
    data: List[OrderOut]
    meta: OrderListMeta


class BatchStatusIn(BaseModel):
    """Body dla masowej zmiany statusu (best-effort)."""

    order_ids: List[int] = Field(..., max_length=10_000, description="ID zamowien")
    from_status: str
    to_status: str
    background: bool = False


class BatchStatusResult(BaseModel):
    requested: int
    updated: int


class BatchStatusOut(BaseModel):
    success: bool = True
    message: str
    data: BatchStatusResult


class ErrorOut(BaseModel):
    success: bool = False
    message: str
