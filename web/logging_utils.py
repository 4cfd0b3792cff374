"""Logging utilities for the storefront web app.

Request-level events go to a daily JSONL file, one JSON object per line.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from .config import LOG_DIR

__all__ = ["log_event", "get_log_file", "LOG_DIR"]


def get_log_file(log_dir: Optional[Path] = None) -> Path:
    log_dir = Path(log_dir or LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / f"storefront_{datetime.now().strftime('%Y%m%d')}.jsonl"


def log_event(event_type: str, data: Dict[str, Any]) -> None:
    """Append a structured event to today's JSONL log.

    Args:
        event_type: products_served, products_error, page_rendered, page_error, ...
        data: Event-specific data to log
    """
    log_entry = {"timestamp": datetime.now().isoformat(), "event_type": event_type, **data}
    with open(get_log_file(LOG_DIR), "a", encoding="utf-8") as f:
        f.write(json.dumps(log_entry, ensure_ascii=False, default=str) + "\n")
