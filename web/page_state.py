"""State of the products page.

``ProductsPageState`` is immutable; every transition returns a new state.
The visible product list is derived from (products, filters, sort_by) on
every access rather than stored, so it can never go stale.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Tuple

from catalog.models import Product

from .config import DEFAULT_SORT
from .filtering import FilterSelection, derive_visible_products

__all__ = ["ProductsPageState", "initial_state", "LOAD_ERROR_MESSAGE"]

LOAD_ERROR_MESSAGE = "Failed to load products. Please try again later."


def _toggle(values: frozenset, value: str) -> frozenset:
    return values - {value} if value in values else values | {value}


@dataclass(frozen=True)
class ProductsPageState:
    loading: bool = True
    error: Optional[str] = None
    products: Tuple[Product, ...] = ()
    filters: FilterSelection = field(default_factory=FilterSelection)
    sort_by: str = DEFAULT_SORT
    filter_open: bool = False

    # -- loading lifecycle --

    def start_loading(self) -> "ProductsPageState":
        return replace(self, loading=True)

    def load_succeeded(self, products: Iterable[Product]) -> "ProductsPageState":
        return replace(self, loading=False, error=None, products=tuple(products))

    def load_failed(self, message: str = LOAD_ERROR_MESSAGE) -> "ProductsPageState":
        return replace(self, loading=False, error=message)

    # -- filters --

    def toggle_category(self, category: str) -> "ProductsPageState":
        return replace(
            self, filters=replace(self.filters, categories=_toggle(self.filters.categories, category))
        )

    def toggle_price(self, band: str) -> "ProductsPageState":
        return replace(self, filters=replace(self.filters, prices=_toggle(self.filters.prices, band)))

    def toggle_size(self, size: str) -> "ProductsPageState":
        return replace(self, filters=replace(self.filters, sizes=_toggle(self.filters.sizes, size)))

    def clear_filters(self) -> "ProductsPageState":
        return replace(self, filters=FilterSelection())

    def set_sort(self, sort_by: str) -> "ProductsPageState":
        return replace(self, sort_by=sort_by)

    def toggle_filter_panel(self) -> "ProductsPageState":
        return replace(self, filter_open=not self.filter_open)

    # -- derived --

    @property
    def total_active_filters(self) -> int:
        return self.filters.total

    @property
    def visible_products(self) -> List[Product]:
        return derive_visible_products(list(self.products), self.filters, self.sort_by)

    @property
    def available_sizes(self) -> List[str]:
        """Every size offered by any loaded product, first-seen order."""
        return list(dict.fromkeys(s for p in self.products for s in p.sizes))

    @property
    def available_categories(self) -> List[str]:
        """Categories of the loaded products, then any selected category none of them has."""
        loaded = [p.category for p in self.products]
        return list(dict.fromkeys(loaded + sorted(self.filters.categories)))


def initial_state(category: Optional[str] = None) -> ProductsPageState:
    """Fresh page state, with the category filter seeded from the URL when given."""
    state = ProductsPageState()
    if category:
        state = state.toggle_category(category)
    return state
