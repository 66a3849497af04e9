"""
HTTP request logging middleware.

Binds the request id and, on wallet routes, the endpoint and wallet address
into structlog contextvars so chain failures and price lookups logged during
the request carry them. Emits one ``http_request`` line per request.
"""

import re
import time
import uuid
from typing import Dict

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.stdlib.get_logger("http")

REQUEST_ID_HEADER = "x-request-id"

_WALLET_ROUTE_RE = re.compile(r"^/api/(portfolio|transactions)/([^/]+)/?$")


def wallet_route_context(path: str) -> Dict[str, str]:
    """Endpoint and raw wallet address for ``/api/{portfolio,transactions}/{address}``.

    The address is logged as received; validation happens in the route.
    """
    match = _WALLET_ROUTE_RE.match(path)
    if not match:
        return {}
    return {"endpoint": match.group(1), "address": match.group(2)}


def _log_method_for(status_code: int):
    if status_code >= 500:
        return logger.error
    if status_code >= 400:
        return logger.warning
    return logger.info


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log portfolio API requests with wallet context, timing and status."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        path = request.url.path

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=path,
            **wallet_route_context(path),
        )

        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            _log_method_for(status_code)(
                "http_request",
                method=request.method,
                status=status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 1),
                client=request.client.host if request.client else None,
            )
