"""Display names for category slugs and price bands."""

from typing import Dict

__all__ = ["CATEGORY_NAMES", "PRICE_BAND_LABELS", "SORT_LABELS", "get_category_name"]

CATEGORY_NAMES: Dict[str, str] = {
    "t-shirts": "T-Shirts",
    "hoodies": "Hoodies",
    "pants": "Pants",
    "accessories": "Accessories",
    "new-arrivals": "New Arrivals",
    "best-sellers": "Best Sellers",
    "limited-drops": "Limited Drops",
}

PRICE_BAND_LABELS: Dict[str, str] = {
    "under-50": "Under $50",
    "50-100": "$50 - $100",
    "100-150": "$100 - $150",
    "over-150": "Over $150",
}

SORT_LABELS: Dict[str, str] = {
    "newest": "Newest",
    "price-low": "Price: Low to High",
    "price-high": "Price: High to Low",
}


def get_category_name(slug: str) -> str:
    """Human-readable name for a category slug; unknown slugs are capitalised."""
    if slug in CATEGORY_NAMES:
        return CATEGORY_NAMES[slug]
    return slug[:1].upper() + slug[1:]
