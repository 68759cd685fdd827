# legacy_orders/api/routers/orders_api.py
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from legacy_orders.data.database import get_db
from legacy_orders.domain.errors import OrderRequestError, LockTimeout
from legacy_orders.domain.schemas import (
    BatchStatusIn,
    BatchStatusOut,
    BatchStatusResult,
    ErrorOut,
    OrderListMeta,
    OrderListOut,
    OrderOut,
    StatusUpdateIn,
    StatusUpdateOut,
)
from legacy_orders.domain.status import require_edge
from legacy_orders.services.query_service import OrderQueryService
from legacy_orders.services.status_service import LockingTransitionEngine, TransitionEngine
from legacy_orders.utils.responses import error_response
from legacy_orders.utils.settings import LOCK_WAIT_TIMEOUT_SECONDS
from legacy_orders.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders-api"])


def get_engine(db: Session = Depends(get_db)) -> TransitionEngine:
    return LockingTransitionEngine(db)


def get_query_service(db: Session = Depends(get_db)) -> OrderQueryService:
    return OrderQueryService(db)


def status_error_response(exc: Exception, action: str) -> JSONResponse:
    """Mapowanie bledow domeny na HTTP: 422 / 503 (retry) / 500."""
    if isinstance(exc, OrderRequestError):
        return error_response(422, str(exc))
    if isinstance(exc, LockTimeout):
        return error_response(
            503,
            f"Failed to {action}, the order is locked by another process",
            error=str(exc),
            headers={"Retry-After": str(LOCK_WAIT_TIMEOUT_SECONDS)},
            retryable=True,
        )
    logger.exception(f"Failed to {action}")
    return error_response(500, f"Failed to {action}", error=str(exc))


@router.get("", response_model=OrderListOut)
def list_orders(
    status_filter: str | None = Query(None, alias="status"),
    svc: OrderQueryService = Depends(get_query_service),
):
    listing = svc.list(status_filter)
    return OrderListOut(
        data=[OrderOut.model_validate(o) for o in listing.orders],
        meta=OrderListMeta(count=len(listing.orders), filter=listing.filter_label),
    )


@router.post(
    "/{order_id}/status",
    response_model=StatusUpdateOut,
    responses={422: {"model": ErrorOut}, 503: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
def update_status(
    order_id: int,
    payload: StatusUpdateIn,
    engine: TransitionEngine = Depends(get_engine),
):
    """Zmiana statusu pod blokada wiersza, bezpieczna wobec zewnetrznego systemu."""
    try:
        order = engine.transition(order_id, payload.status)
    except Exception as e:
        return status_error_response(e, "update order status")

    return StatusUpdateOut(
        message="Order status updated successfully",
        data=OrderOut.model_validate(order),
    )


@router.post(
    "/batch-status",
    response_model=BatchStatusOut,
    responses={202: {"description": "Batch queued"}, 422: {"model": ErrorOut}},
)
def batch_update_status(
    payload: BatchStatusIn,
    engine: TransitionEngine = Depends(get_engine),
):
    """
    Masowa zmiana statusu, best-effort (bez blokad wierszy).
    Zwraca tylko liczbe zmienionych wierszy.
    """
    requested = len(set(payload.order_ids))

    if payload.background:
        try:
            require_edge(payload.from_status, payload.to_status)
        except OrderRequestError as e:
            return error_response(422, str(e))

        # import tutaj, zeby API nie wymagalo brokera przy starcie
        from legacy_orders.tasks.transitions import batch_transition_task

        task = batch_transition_task.delay(payload.order_ids, payload.from_status, payload.to_status)
        return JSONResponse(
            {"success": True, "message": "Batch status update queued", "task_id": task.id},
            status_code=status.HTTP_202_ACCEPTED,
        )

    try:
        updated = engine.batch_transition(payload.order_ids, payload.from_status, payload.to_status)
    except Exception as e:
        return status_error_response(e, "update order statuses")

    return BatchStatusOut(
        message=f"Updated {updated} of {requested} orders",
        data=BatchStatusResult(requested=requested, updated=updated),
    )
