"""Logging setup for the catalog integration.

``setup_logging`` is called once by the CLI. Library code only logs through
``log_catalog_event``, which attaches an event type and payload to the
record so the JSONL file keeps them as fields.
"""

import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

__all__ = ["setup_logging", "log_catalog_event", "JSONLFormatter", "LOG_DIR"]

LOG_DIR = Path(os.getenv("LOG_DIR", Path(__file__).parent.parent / "logs"))


class JSONLFormatter(logging.Formatter):
    """One JSON object per record, with event fields merged in."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        event_type = getattr(record, "event_type", None)
        if event_type:
            entry["event_type"] = event_type
            entry.update(getattr(record, "event_data", {}))
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(
    level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    console: bool = True,
) -> logging.Logger:
    """Attach handlers to the ``catalog`` logger.

    Human-readable lines go to stdout; every record also lands in
    ``catalog_<YYYYMMDD>.jsonl`` under ``log_dir`` (default LOG_DIR).
    """
    logger = logging.getLogger("catalog")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if console:
        stream = logging.StreamHandler(sys.stdout)
        stream.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S")
        )
        logger.addHandler(stream)

    target = Path(log_dir or LOG_DIR)
    target.mkdir(parents=True, exist_ok=True)
    jsonl = logging.FileHandler(
        target / f"catalog_{datetime.now().strftime('%Y%m%d')}.jsonl", encoding="utf-8"
    )
    jsonl.setFormatter(JSONLFormatter())
    logger.addHandler(jsonl)

    return logger


def log_catalog_event(
    event_type: str,
    data: Dict[str, Any],
    level: int = logging.INFO,
    logger_name: str = "catalog",
) -> None:
    """Log a structured event such as 'vendor_fetch' or 'sync_complete'.

    An optional 'message' key in ``data`` becomes the log message.
    """
    fields = {k: v for k, v in data.items() if k != "message"}
    logging.getLogger(logger_name).log(
        level,
        data.get("message", event_type),
        extra={"event_type": event_type, "event_data": fields},
    )
