import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

_PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Extra attributes catalog code attaches through ``logger.x(..., extra={...})``
_CONTEXT_FIELDS = ("operation", "status_code", "failure_kind")


class JsonFormatter(logging.Formatter):
    """Render log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in _CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level: str = "INFO", json_output: bool = False) -> logging.Handler:
    """
    Attach one console handler to the root logger.

    Repeated calls replace the handler installed by a previous call instead of
    stacking duplicates. Returns the installed handler.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    root.handlers = [h for h in root.handlers if not getattr(h, "_spotcat_handler", False)]

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=_PLAIN_FORMAT, datefmt=_DATE_FORMAT))
    handler._spotcat_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)

    # urllib3 logs every connection at DEBUG; keep it at WARNING
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    return handler
