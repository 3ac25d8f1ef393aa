"""
app/api/responses.py
────────────────────
Translate coordinator ``Result``s into HTTP responses.

This is the only place that maps error kinds to status codes:

- ``Ok(payload)``            → 200 with the payload as JSON.
- ``Err(ClientInputError)``  → 400 ``{"erro": ...}``.
- ``Err(UpstreamError)``     → 500 ``{"erro": ...[, "detalhes": ...]}``.
"""

from typing import Any, Dict

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from core.errors import Result, ServiceError
from schemas.market import ErrorEnvelope

# OpenAPI ``responses=`` entries for routes that can fail.
ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    400: {"model": ErrorEnvelope, "description": "Missing or invalid parameter"},
    500: {"model": ErrorEnvelope, "description": "Yahoo Finance call failed"},
}
UPSTREAM_ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    500: ERROR_RESPONSES[500],
}


def render(result: Result[Any, ServiceError]) -> JSONResponse:
    """Build the HTTP response for ``result``."""
    if result.is_ok:
        return JSONResponse(status_code=200, content=jsonable_encoder(result.value))
    error = result.error
    return JSONResponse(status_code=error.status_code, content=error.envelope())
