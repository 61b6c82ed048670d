from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict


@dataclass(frozen=True)
class LogContext:
    service: str


class JsonFormatter(logging.Formatter):
    def __init__(self, ctx: LogContext):
        super().__init__()
        self._ctx = ctx

    def format(self, record: logging.LogRecord) -> str:
        base: Dict[str, Any] = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self._ctx.service,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        # patch step correlation
        for k in ("target_path", "step", "insert_at"):
            v = getattr(record, k, None)
            if v is not None:
                base[k] = v
        extra_json = getattr(record, "json", None)
        if isinstance(extra_json, dict):
            base.update(extra_json)
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def configure_logging(service: str, level: str = "INFO") -> None:
    ctx = LogContext(service=service)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # stderr keeps stdout down to the single confirmation line
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter(ctx))
    root.addHandler(handler)
