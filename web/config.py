"""Centralized configuration for the storefront web app."""

import os
from pathlib import Path

# Determine project root (parent of 'web' directory)
_THIS_DIR = Path(__file__).parent
_PROJECT_ROOT = _THIS_DIR.parent

# Flask app settings (allow env overrides; default debug off for safety)
# Hosting platforms set PORT dynamically; fall back to FLASK_PORT or 5000 for local.
FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
FLASK_PORT = int(os.getenv("FLASK_PORT", os.getenv("PORT", "5000")))
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "False").lower() == "true"

# Where the products page fetches its list from. Empty means the page
# loads the vendor catalog in-process, without an HTTP hop.
PRODUCTS_API_URL = os.getenv("PRODUCTS_API_URL", "")

# Seconds to wait on PRODUCTS_API_URL before showing the error state
STOREFRONT_REQUEST_TIMEOUT = float(os.getenv("STOREFRONT_REQUEST_TIMEOUT", "10"))

# Sort applied when the page URL carries none
DEFAULT_SORT = "newest"

# JSONL request logs
LOG_DIR = Path(os.getenv("LOG_DIR", str(_PROJECT_ROOT / "logs")))
