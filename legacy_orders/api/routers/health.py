# legacy_orders/api/routers/health.py
import redis
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from legacy_orders.data.database import engine
from legacy_orders.utils.settings import REDIS_URL
from legacy_orders.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


_redis: redis.Redis | None = None


def get_redis() -> redis.Redis:
    """Jeden klient (i pula polaczen) na proces."""
    global _redis
    if _redis is None:
        _redis = redis.Redis.from_url(REDIS_URL, socket_timeout=2, decode_responses=True)
    return _redis


def close_redis() -> None:
    global _redis
    if _redis is not None:
        _redis.close()
        _redis = None


@router.get("/health")
def health_check():
    deps: dict[str, str] = {}
    healthy = True

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        deps["database"] = "ok"
    except Exception as e:
        logger.warning(f"Health check: database unavailable: {e}")
        deps["database"] = f"error: {str(e)[:100]}"
        healthy = False

    try:
        get_redis().ping()
        deps["broker"] = "ok"
    except Exception as e:
        logger.warning(f"Health check: broker unavailable: {e}")
        deps["broker"] = f"error: {str(e)[:100]}"
        healthy = False

    return JSONResponse(
        content={"status": "healthy" if healthy else "degraded", "dependencies": deps},
        status_code=200 if healthy else 503,
    )
