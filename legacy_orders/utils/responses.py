# legacy_orders/utils/responses.py
from typing import Any

from fastapi.responses import JSONResponse


def error_response(
    status_code: int,
    message: str,
    error: str | None = None,
    headers: dict | None = None,
    **extra: Any,
) -> JSONResponse:
    """Koperta bledu {success: false, message[, error]} jak w calym /api."""
    body: dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    body.update(extra)
    return JSONResponse(body, status_code=status_code, headers=headers)
