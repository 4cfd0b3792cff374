"""Shared test fixtures and utilities for the web test suite."""

from typing import Any, List, Optional
from unittest.mock import MagicMock

import pytest

from catalog.models import Color, Product


@pytest.fixture(autouse=True)
def log_dir(tmp_path, monkeypatch):
    """Send JSONL request logs to a temporary directory."""
    from web import logging_utils

    target = tmp_path / "logs"
    monkeypatch.setattr(logging_utils, "LOG_DIR", target)
    return target


@pytest.fixture
def make_product():
    """Factory for storefront products with sensible defaults."""

    def _make(
        product_id: str,
        price: float = 30.0,
        category: str = "t-shirts",
        sizes: Optional[List[str]] = None,
        is_new: bool = False,
        **overrides: Any,
    ) -> Product:
        return Product(
            id=product_id,
            name=overrides.pop("name", f"Product {product_id}"),
            price=price,
            image_url=f"https://files.example.com/{product_id}.png",
            image_urls=[f"https://files.example.com/{product_id}.png"],
            category=category,
            sizes=sizes if sizes is not None else ["M"],
            colors=[Color("Black", "black")],
            is_new=is_new,
            **overrides,
        )

    return _make


@pytest.fixture
def sample_products(make_product) -> List[Product]:
    """Six products spread over categories, prices, sizes and newness."""
    return [
        make_product("tee", 25.0, "t-shirts", ["S", "M", "L"]),
        make_product("hoodie", 65.0, "hoodies", ["M", "L"], is_new=True),
        make_product("pants", 100.0, "pants", ["L", "XL"]),
        make_product("jacket", 150.0, "hoodies", ["XL"]),
        make_product("cap", 15.0, "accessories", ["One Size"], is_new=True),
        make_product("limited", 180.0, "limited-drops", ["M"]),
    ]


def _response(payload: Any = None, status_code: int = 200, reason: str = "OK") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.ok = 200 <= status_code < 400
    response.json.return_value = payload
    return response


@pytest.fixture
def make_response():
    """Factory for fake requests.Response objects."""
    return _response


@pytest.fixture
def vendor_payload():
    """Raw vendor catalog body with two products."""
    return {
        "result": [
            {
                "id": 11,
                "name": "Crew Tee",
                "variants": [
                    {
                        "retail_price": "22.50",
                        "files": [{"preview_url": "https://files.example.com/crew-s.png"}],
                        "options": [{"id": "size", "value": "S"}, {"id": "color", "value": "Sand"}],
                    },
                    {
                        "retail_price": "22.50",
                        "files": [{"preview_url": "https://files.example.com/crew-m.png"}],
                        "options": [{"id": "size", "value": "M"}],
                    },
                ],
            },
            {
                "id": 12,
                "name": "Sticker",
                "variants": [
                    {
                        "retail_price": "3.00",
                        "files": [{"preview_url": "https://files.example.com/sticker.png"}],
                        "options": [],
                    }
                ],
            },
        ]
    }


@pytest.fixture
def app():
    """The Flask app in testing mode, with injected HTTP sessions cleared after use."""
    from web.app import app as flask_app

    flask_app.config["TESTING"] = True
    yield flask_app
    flask_app.config.pop("VENDOR_SESSION", None)
    flask_app.config.pop("STOREFRONT_SESSION", None)


@pytest.fixture
def client(app):
    """Create Flask test client."""
    with app.test_client() as test_client:
        yield test_client
