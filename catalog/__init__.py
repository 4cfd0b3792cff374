"""Printful catalog client, product normalizer and local store."""

__version__ = "0.1.0"

from catalog.client import PrintfulClient, fetch_storefront_products
from catalog.errors import (
    CatalogError,
    CatalogMappingError,
    ConfigurationError,
    UpstreamError,
)
from catalog.models import Color, Product
from catalog.normalizer import normalize_catalog, normalize_product

__all__ = [
    "__version__",
    # Client
    "PrintfulClient",
    "fetch_storefront_products",
    # Errors
    "CatalogError",
    "CatalogMappingError",
    "ConfigurationError",
    "UpstreamError",
    # Models
    "Color",
    "Product",
    # Mapping
    "normalize_catalog",
    "normalize_product",
]
