from __future__ import annotations

import logging
import os

from app.core.request_context import get_request_id

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


def configure_logging(level: str | None = None) -> None:
    """Install one stream handler on the root logger. Safe to call twice."""
    root = logging.getLogger()
    root.setLevel((level or LOG_LEVEL).upper())
    for h in root.handlers:
        if getattr(h, "_wms_handler", False):
            return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    handler._wms_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
