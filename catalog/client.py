"""HTTP client for the vendor (Printful) catalog API.

One GET per call, no retries, no pagination. Any failure aborts the call
with a CatalogError subclass so the caller can answer with a single error.
"""

import logging
from typing import Any, Dict, List, Optional

import requests  # type: ignore[import-untyped]

from catalog.config import (
    HEADERS,
    PRINTFUL_API_URL,
    STORE_PRODUCTS_PATH,
    VENDOR_REQUEST_TIMEOUT,
    get_api_key,
)
from catalog.errors import ConfigurationError, UpstreamError
from catalog.logging_config import log_catalog_event
from catalog.models import Product
from catalog.normalizer import normalize_catalog

__all__ = [
    "create_session",
    "PrintfulClient",
    "fetch_storefront_products",
]


def create_session() -> requests.Session:
    """Create a requests Session with the default headers applied."""
    session = requests.Session()
    session.headers.update(HEADERS)
    return session


class PrintfulClient:
    """Thin client over ``GET /store/products``.

    Args:
        api_key: Bearer credential. Must be non-empty.
        base_url: API root, without trailing slash.
        session: Optional requests.Session (or anything with a compatible
            ``get``), injected by tests.
        timeout: Seconds, or None for no timeout.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = PRINTFUL_API_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = VENDOR_REQUEST_TIMEOUT,
    ):
        if not api_key:
            raise ConfigurationError("Printful API key not configured")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.session = session or create_session()
        self.timeout = timeout

    @classmethod
    def from_env(cls, **kwargs: Any) -> "PrintfulClient":
        """Build a client from the credential in the process environment."""
        return cls(get_api_key(), **kwargs)

    def fetch_store_products(self) -> Dict[str, Any]:
        """Fetch the raw store products payload.

        Raises:
            UpstreamError: On transport failure, non-success status or a
                body that is not JSON.
        """
        url = f"{self.base_url}{STORE_PRODUCTS_PATH}"
        log_catalog_event("vendor_fetch", {"url": url})

        try:
            response = self.session.get(
                url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log_catalog_event("vendor_error", {"url": url, "error": str(e)}, level=logging.ERROR)
            raise UpstreamError(f"Printful API request failed: {e}") from e

        if not response.ok:
            log_catalog_event(
                "vendor_error",
                {"url": url, "status_code": response.status_code, "reason": response.reason},
                level=logging.ERROR,
            )
            raise UpstreamError(
                f"Printful API error: {response.reason}", status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Printful API returned invalid JSON: {e}") from e

    def list_products(self) -> List[Product]:
        """Fetch and normalize the vendor catalog."""
        products = normalize_catalog(self.fetch_store_products())
        log_catalog_event("catalog_normalized", {"count": len(products)})
        return products


def fetch_storefront_products(
    session: Optional[requests.Session] = None,
    env: Optional[Dict[str, str]] = None,
) -> List[Product]:
    """Read the credential, fetch and normalize in one step.

    The credential is looked up on every call. When it is missing,
    ConfigurationError is raised before any request is made.
    """
    client = PrintfulClient(get_api_key(env), session=session)
    return client.list_products()
