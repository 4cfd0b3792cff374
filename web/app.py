"""Flask web app for the merch storefront.

Serves the products page and registers the catalog proxy API.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple, Union

from dotenv import load_dotenv
from flask import Flask, Response, redirect, render_template, request, url_for

# Load environment variables from .env file (explicitly specify path)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from .api import api
from .categories import PRICE_BAND_LABELS, SORT_LABELS, get_category_name
from .config import DEFAULT_SORT, FLASK_DEBUG, FLASK_HOST, FLASK_PORT, PRODUCTS_API_URL
from .logging_utils import log_event
from .page_state import ProductsPageState, initial_state
from .storefront import StorefrontUnavailableError, load_products

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.register_blueprint(api)


# ---------- PAGE STATE <-> URL ----------


def _unique(values: List[str]) -> List[str]:
    return list(dict.fromkeys(v for v in values if v))


def state_from_request() -> ProductsPageState:
    """Build the page's filter/sort state from query parameters.

    ``category``, ``price`` and ``size`` may repeat; ``sort`` picks the
    sort key; ``filters=open`` shows the filter panel.
    """
    categories = _unique(request.args.getlist("category"))
    state = initial_state(categories[0] if categories else None)
    for category in categories[1:]:
        state = state.toggle_category(category)
    for band in _unique(request.args.getlist("price")):
        state = state.toggle_price(band)
    for size in _unique(request.args.getlist("size")):
        state = state.toggle_size(size)

    state = state.set_sort(request.args.get("sort") or DEFAULT_SORT)
    if request.args.get("filters") == "open":
        state = state.toggle_filter_panel()
    return state


def page_url(state: ProductsPageState) -> str:
    """URL that reproduces ``state``'s filters, sort and panel."""
    params: Dict[str, Any] = {
        "category": sorted(state.filters.categories),
        "price": sorted(state.filters.prices),
        "size": sorted(state.filters.sizes),
    }
    if state.sort_by != DEFAULT_SORT:
        params["sort"] = state.sort_by
    if state.filter_open:
        params["filters"] = "open"
    return url_for("products", **{k: v for k, v in params.items() if v})


def _url_builders(state: ProductsPageState) -> Dict[str, Callable[..., str]]:
    toggles = {
        "category": state.toggle_category,
        "price": state.toggle_price,
        "size": state.toggle_size,
    }
    return {
        "toggle_url": lambda kind, value: page_url(toggles[kind](value)),
        "sort_url": lambda key: page_url(state.set_sort(key)),
        "panel_url": lambda: page_url(state.toggle_filter_panel()),
        "clear_url": lambda: page_url(state.clear_filters()),
    }


# ---------- FLASK ROUTES ----------


@app.route("/", methods=["GET"])
def index() -> Response:
    return redirect(url_for("products"))


@app.route("/products", methods=["GET"])
def products() -> Union[str, Tuple[str, int]]:
    """Render the product grid with the filters and sort from the URL."""
    state = state_from_request().start_loading()
    source = PRODUCTS_API_URL or "vendor"

    try:
        items = load_products(
            PRODUCTS_API_URL,
            session=app.config.get("STOREFRONT_SESSION"),
            vendor_session=app.config.get("VENDOR_SESSION"),
        )
    except StorefrontUnavailableError as e:
        logger.error("Error fetching products: %s", e)
        log_event("page_error", {"source": source, "error": str(e)})
        state = state.load_failed()
        return (
            render_template("products.html", state=state, retry_url=request.full_path),
            502,
        )

    state = state.load_succeeded(items)
    visible = state.visible_products
    log_event(
        "page_rendered",
        {"total": len(state.products), "visible": len(visible), "filters": state.total_active_filters},
    )
    return render_template(
        "products.html",
        state=state,
        visible=visible,
        category_name=get_category_name,
        price_bands=PRICE_BAND_LABELS,
        sort_labels=SORT_LABELS,
        **_url_builders(state),
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(host=FLASK_HOST, port=FLASK_PORT, debug=FLASK_DEBUG)
