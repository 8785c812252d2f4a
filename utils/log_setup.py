"""
Root logging configuration, applied once from the app lifespan.
Text output for local runs, one JSON object per line otherwise.
"""
import logging
from typing import IO, Optional

from pythonjsonlogger.json import JsonFormatter

JSON_LOG_FIELDS = ("asctime", "levelname", "name", "message")

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    # Extras passed via `extra=` (application_id, error_code, ...) are added as keys
    return JsonFormatter(
        " ".join(f"%({field})s" for field in JSON_LOG_FIELDS),
        rename_fields=FIELD_RENAME_MAP,
    )


def setup_logging(level: str = "INFO", fmt: str = "text", stream: Optional[IO[str]] = None) -> logging.Handler:
    root = logging.getLogger()
    # Reloads and repeated lifespans must not stack handlers
    for handler in list(root.handlers):
        if getattr(handler, "_credit_api", False):
            root.removeHandler(handler)
    handler = logging.StreamHandler(stream)
    handler._credit_api = True
    if fmt == "json":
        handler.setFormatter(create_json_formatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
