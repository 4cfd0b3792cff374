"""Loads the product list for the products page.

The list comes from a separate catalog endpoint when one is configured,
otherwise straight from the vendor in this process.
"""

import logging
from typing import List, Optional

import requests  # type: ignore[import-untyped]

from catalog.client import fetch_storefront_products
from catalog.errors import CatalogError
from catalog.models import Product

from .config import STOREFRONT_REQUEST_TIMEOUT

__all__ = ["StorefrontUnavailableError", "fetch_product_list", "load_products"]

logger = logging.getLogger(__name__)


class StorefrontUnavailableError(Exception):
    """The catalog endpoint failed or answered with something other than a product list."""


def fetch_product_list(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = STOREFRONT_REQUEST_TIMEOUT,
) -> List[Product]:
    """One GET to the catalog endpoint; no retry.

    Raises:
        StorefrontUnavailableError: Transport failure, non-success status or
            a body that is not a JSON array of products.
    """
    http = session or requests
    try:
        response = http.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise StorefrontUnavailableError(f"Could not reach {url}: {e}") from e

    if not response.ok:
        raise StorefrontUnavailableError(
            f"Catalog endpoint answered {response.status_code}: {response.reason}"
        )

    try:
        data = response.json()
    except ValueError as e:
        raise StorefrontUnavailableError(f"Catalog endpoint returned invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise StorefrontUnavailableError("Catalog endpoint did not return a product list")

    try:
        return [Product.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise StorefrontUnavailableError(f"Malformed product in catalog response: {e}") from e


def load_products(
    url: str = "",
    session: Optional[requests.Session] = None,
    vendor_session: Optional[requests.Session] = None,
) -> List[Product]:
    """Products for the page: GET ``url`` when set, else the vendor catalog directly."""
    if url:
        return fetch_product_list(url, session=session)
    try:
        return fetch_storefront_products(session=vendor_session)
    except CatalogError as e:
        raise StorefrontUnavailableError(str(e)) from e
