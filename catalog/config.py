"""Configuration and constants for the vendor catalog integration."""

import os
from typing import Dict, List, Optional

__all__ = [
    "PRINTFUL_API_URL",
    "STORE_PRODUCTS_PATH",
    "API_KEY_ENV",
    "HEADERS",
    "VENDOR_REQUEST_TIMEOUT",
    "DEFAULT_SIZE",
    "PLACEHOLDER_CATEGORY",
    "PLACEHOLDER_TAGS",
    "PLACEHOLDER_IN_STOCK",
    "PLACEHOLDER_IS_NEW",
    "PLACEHOLDER_IS_LIMITED",
    "DB_PATH",
    "OUTPUT_PATH",
    "get_api_key",
]

PRINTFUL_API_URL = os.getenv("PRINTFUL_API_URL", "https://api.printful.com")
STORE_PRODUCTS_PATH = "/store/products"

# Name of the environment variable holding the vendor bearer credential.
# Read on every call, never cached.
API_KEY_ENV = "PRINTFUL_API_KEY"

HEADERS = {
    "User-Agent": "merch-storefront catalog proxy",
    "Accept": "application/json",
}

# Seconds; unset means no timeout (requests' default)
_timeout = os.getenv("VENDOR_REQUEST_TIMEOUT")
VENDOR_REQUEST_TIMEOUT: Optional[float] = float(_timeout) if _timeout else None

# Sentinel size for variants without a size option
DEFAULT_SIZE = "One Size"

# Vendor data carries no storefront metadata yet; these fill the gaps.
PLACEHOLDER_CATEGORY = "t-shirts"
PLACEHOLDER_TAGS: List[str] = ["printful"]
PLACEHOLDER_IN_STOCK = True
PLACEHOLDER_IS_NEW = False
PLACEHOLDER_IS_LIMITED = False

# Local store
DB_PATH = os.getenv("CATALOG_DB_PATH", "data/storefront.db")
OUTPUT_PATH = "data/products_export.csv"


def get_api_key(env: Optional[Dict[str, str]] = None) -> Optional[str]:
    """Return the vendor credential from the environment, or None if unset/empty."""
    source = os.environ if env is None else env
    value = source.get(API_KEY_ENV)
    return value or None
