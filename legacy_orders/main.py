# legacy_orders/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import request_validation_exception_handler
import uvicorn

from legacy_orders.api.routers import orders, orders_api, health
from legacy_orders.utils.responses import error_response
from legacy_orders.utils.logging import get_logger

logger = get_logger(__name__)

# Tabela orders nalezy do zewnetrznego ERP - zadnego create_all / migracji tutaj.

# /api/* oraz webowy POST /orders/{id}/status dziela koperte {success, message}
_ENVELOPE_PREFIXES = ("/api/", "/orders/")


async def api_validation_handler(request: Request, exc: RequestValidationError):
    if request.url.path.startswith(_ENVELOPE_PREFIXES):
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg', 'invalid request')}" if field else "Invalid request"
        return error_response(422, message)
    return await request_validation_exception_handler(request, exc)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    health.close_redis()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Legacy Orders Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(RequestValidationError, api_validation_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(orders.router)
    app.include_router(orders_api.router)

    logger.info("Legacy Orders Service initialized")
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
