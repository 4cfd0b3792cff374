"""Reshape vendor catalog records into storefront products.

Everything here is a pure function of the vendor payload: no network, no
configuration lookups beyond the placeholder constants. A record that
cannot be mapped raises CatalogMappingError and the whole batch fails.
"""

from typing import Any, Dict, Iterable, List

from catalog.config import (
    DEFAULT_SIZE,
    PLACEHOLDER_CATEGORY,
    PLACEHOLDER_IN_STOCK,
    PLACEHOLDER_IS_LIMITED,
    PLACEHOLDER_IS_NEW,
    PLACEHOLDER_TAGS,
)
from catalog.errors import CatalogMappingError
from catalog.models import Color, Product, VendorProduct, VendorVariant

__all__ = [
    "collect_sizes",
    "collect_colors",
    "normalize_product",
    "normalize_products",
    "normalize_catalog",
]


def _unique(values: Iterable[str]) -> List[str]:
    """De-duplicate, keeping first-seen order."""
    return list(dict.fromkeys(values))


def collect_sizes(variants: List[VendorVariant]) -> List[str]:
    """Distinct size values across variants; size-less variants count as DEFAULT_SIZE."""
    return _unique(v.option("size") or DEFAULT_SIZE for v in variants)


def collect_colors(variants: List[VendorVariant]) -> List[Color]:
    """Distinct colours across variants. Variants without a colour are skipped."""
    names = _unique(v.option("color") for v in variants if v.option("color"))
    return [Color.from_name(name) for name in names]


def _first_preview(variant: VendorVariant, product_id: str) -> str:
    if not variant.preview_urls or not variant.preview_urls[0]:
        raise CatalogMappingError(
            f"Vendor product {product_id} has a variant without a preview file"
        )
    return variant.preview_urls[0]


def normalize_product(vendor: VendorProduct) -> Product:
    """Map one vendor product to the storefront shape."""
    if not vendor.variants:
        raise CatalogMappingError(f"Vendor product {vendor.id} has no variants")

    main = vendor.variants[0]
    try:
        price = float(main.retail_price)
    except (TypeError, ValueError) as e:
        raise CatalogMappingError(
            f"Vendor product {vendor.id} has an invalid retail price: {main.retail_price!r}"
        ) from e

    image_urls = [_first_preview(v, vendor.id) for v in vendor.variants]

    return Product(
        id=vendor.id,
        name=vendor.name,
        price=price,
        description=vendor.name,
        image_url=image_urls[0],
        image_urls=image_urls,
        category=PLACEHOLDER_CATEGORY,
        tags=list(PLACEHOLDER_TAGS),
        sizes=collect_sizes(vendor.variants),
        colors=collect_colors(vendor.variants),
        in_stock=PLACEHOLDER_IN_STOCK,
        is_new=PLACEHOLDER_IS_NEW,
        is_limited=PLACEHOLDER_IS_LIMITED,
    )


def normalize_products(records: List[Dict[str, Any]]) -> List[Product]:
    """Map a list of raw vendor product dicts, one Product per record."""
    products = []
    for raw in records:
        try:
            products.append(normalize_product(VendorProduct.from_dict(raw)))
        except (KeyError, TypeError, AttributeError) as e:
            raise CatalogMappingError(f"Malformed vendor product record: {e}") from e
    return products


def normalize_catalog(payload: Dict[str, Any]) -> List[Product]:
    """Map a full vendor response body (``{"result": [...]}``)."""
    records = payload.get("result") if isinstance(payload, dict) else None
    if not isinstance(records, list):
        raise CatalogMappingError("Vendor payload has no product list")
    return normalize_products(records)
