"""Logging setup shared by the app, routers and services.

Text logs by default; set JSON_LOGS=1 for one JSON object per record.
"""

from __future__ import annotations

import contextvars
import datetime
import json
import logging
import sys

from autosub.settings import settings

# Per-request context for correlation
REQUEST_ID: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="")

logger = logging.getLogger("autosub")


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload = {
            "ts": datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        rid = REQUEST_ID.get("")
        if rid:
            payload["rid"] = rid
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        rid = REQUEST_ID.get("")
        record.rid = f"[rid={rid}] " if rid else ""
        return True


def setup_logging() -> None:
    fmt_text = "%(asctime)s [%(levelname)s] [%(name)s] %(rid)s%(message)s"
    datefmt = "%H:%M:%S"
    stream = logging.StreamHandler(sys.stdout)
    stream.addFilter(RequestIdFilter())
    if settings.json_logs:
        stream.setFormatter(JSONFormatter())
    else:
        stream.setFormatter(logging.Formatter(fmt_text, datefmt=datefmt))

    level = settings.log_level.upper()
    logger.handlers = [stream]
    logger.setLevel(level)
    logger.propagate = False
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
