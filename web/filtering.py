"""Filter and sort the storefront product list.

Pure functions over lists of ``catalog.models.Product``; inputs are never
mutated. Filtering is AND across dimensions and OR within one dimension;
an empty selection for a dimension lets every product through.
"""

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterable, List

from catalog.models import Product

__all__ = [
    "PRICE_BANDS",
    "SORT_KEYS",
    "FilterSelection",
    "in_price_band",
    "matches_filters",
    "filter_products",
    "sort_products",
    "derive_visible_products",
]

# Each band owns its boundaries: 100 and 50 belong to "50-100", 150 to "100-150".
PRICE_BANDS: Dict[str, Callable[[float], bool]] = {
    "under-50": lambda price: price < 50,
    "50-100": lambda price: 50 <= price <= 100,
    "100-150": lambda price: 100 < price <= 150,
    "over-150": lambda price: price > 150,
}

SORT_KEYS = ("newest", "price-low", "price-high")


@dataclass(frozen=True)
class FilterSelection:
    """Chosen categories, price bands and sizes."""

    categories: FrozenSet[str] = frozenset()
    prices: FrozenSet[str] = frozenset()
    sizes: FrozenSet[str] = frozenset()

    @classmethod
    def of(
        cls,
        categories: Iterable[str] = (),
        prices: Iterable[str] = (),
        sizes: Iterable[str] = (),
    ) -> "FilterSelection":
        return cls(frozenset(categories), frozenset(prices), frozenset(sizes))

    @property
    def is_empty(self) -> bool:
        return not (self.categories or self.prices or self.sizes)

    @property
    def total(self) -> int:
        return len(self.categories) + len(self.prices) + len(self.sizes)


def in_price_band(price: float, band: str) -> bool:
    """True if ``price`` lies in ``band``. Unknown bands match nothing."""
    predicate = PRICE_BANDS.get(band)
    return predicate(price) if predicate else False


def matches_filters(product: Product, selection: FilterSelection) -> bool:
    if selection.categories and product.category not in selection.categories:
        return False
    if selection.prices and not any(in_price_band(product.price, b) for b in selection.prices):
        return False
    if selection.sizes and not selection.sizes.intersection(product.sizes):
        return False
    return True


def filter_products(products: List[Product], selection: FilterSelection) -> List[Product]:
    return [p for p in products if matches_filters(p, selection)]


def sort_products(products: List[Product], sort_key: str) -> List[Product]:
    """Return a sorted copy. Unknown keys keep the incoming order."""
    if sort_key == "price-low":
        return sorted(products, key=lambda p: p.price)
    if sort_key == "price-high":
        return sorted(products, key=lambda p: p.price, reverse=True)
    if sort_key == "newest":
        return sorted(products, key=lambda p: not p.is_new)
    return list(products)


def derive_visible_products(
    products: List[Product], selection: FilterSelection, sort_key: str
) -> List[Product]:
    """Filter, then sort. The result is a new list every call."""
    return sort_products(filter_products(products, selection), sort_key)
