# legacy_orders/api/routers/orders.py
from pathlib import Path

from fastapi import APIRouter, Depends, Query, Request
from fastapi.templating import Jinja2Templates

from legacy_orders.api.routers.orders_api import get_query_service, update_status
from legacy_orders.domain.status import STATUSES
from legacy_orders.services.query_service import OrderQueryService

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["orders"])


def _render(request: Request, listing, current_status: str | None):
    return templates.TemplateResponse(
        request,
        "orders/index.html",
        {
            "orders": listing.orders,
            "statuses": STATUSES,
            "current_status": current_status,
        },
    )


@router.get("/orders")
def index(
    request: Request,
    status_filter: str | None = Query(None, alias="status"),
    svc: OrderQueryService = Depends(get_query_service),
):
    """Widok tylko do odczytu: 50 najnowszych zamowien, opcjonalny filtr statusu."""
    return _render(request, svc.list(status_filter), status_filter)


@router.get("/orders-raw")
def index_raw(
    request: Request,
    status_filter: str | None = Query(None, alias="status"),
    svc: OrderQueryService = Depends(get_query_service),
):
    """Ten sam widok, lista z surowego SQL."""
    return _render(request, svc.list_raw(status_filter), status_filter)


router.add_api_route("/orders/{order_id}/status", update_status, methods=["POST"])
