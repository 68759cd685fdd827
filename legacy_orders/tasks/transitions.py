# legacy_orders/tasks/transitions.py
from legacy_orders.celery_worker import celery_app
from legacy_orders.data.database import SessionLocal
from legacy_orders.services.status_service import LockingTransitionEngine
from legacy_orders.utils.retry import lock_retry
from legacy_orders.utils.logging import get_logger

logger = get_logger(__name__)


@lock_retry()
def _transition(order_id: int, status: str) -> dict:
    db = SessionLocal()
    try:
        order = LockingTransitionEngine(db).transition(order_id, status)
        return {"order_id": order.order_id, "status": order.status}
    finally:
        db.close()


@celery_app.task(name="legacy_orders.tasks.transitions.transition_order_task")
def transition_order_task(order_id: int, status: str) -> dict:
    """Pojedyncza zmiana statusu w tle; LockTimeout ponawiany przez lock_retry."""
    logger.info(f"Transition task started for order {order_id} -> {status}")
    return _transition(order_id, status)


@celery_app.task(name="legacy_orders.tasks.transitions.batch_transition_task")
def batch_transition_task(order_ids: list[int], from_status: str, to_status: str) -> dict:
    """Masowa zmiana statusu (best-effort, bez blokad wierszy)."""
    logger.info(f"Batch transition task started: {len(order_ids)} orders {from_status} -> {to_status}")

    db = SessionLocal()
    try:
        updated = LockingTransitionEngine(db).batch_transition(order_ids, from_status, to_status)
    finally:
        db.close()

    return {"requested": len(set(order_ids)), "updated": updated}
