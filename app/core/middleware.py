from __future__ import annotations

import logging
import os
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.core.request_context import set_request_id, reset_request_id

logger = logging.getLogger("wms.access")

LOG_REQUESTS = os.getenv("WMS_LOG_REQUESTS", "1") not in ("0", "false", "False")


def _get_request_id(request: Request) -> str:
    rid = request.headers.get("X-Request-Id") or request.headers.get("X-Request-ID")
    if rid:
        return rid
    return str(uuid.uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Correlation id per request (X-Request-Id) plus one access log line."""

    async def dispatch(self, request: Request, call_next):
        request_id = _get_request_id(request)
        token = set_request_id(request_id)
        start = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("%s %s failed", request.method, request.url.path)
                raise
            duration_ms = int((time.perf_counter() - start) * 1000)
            response.headers["X-Request-Id"] = request_id
            if LOG_REQUESTS:
                logger.info("%s %s %s %dms", request.method, request.url.path, response.status_code, duration_ms)
            return response
        finally:
            reset_request_id(token)
