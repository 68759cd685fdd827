# legacy_orders/celery_worker.py
from celery import Celery

from legacy_orders.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "legacy_orders",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# explicite import taskow, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "legacy_orders.tasks.transitions",
)

celery_app.conf.timezone = "UTC"
