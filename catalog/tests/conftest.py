"""Shared fixtures for the catalog test suite."""

from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest


def vendor_variant(
    price: str = "25.00",
    preview: str = "https://files.example.com/preview.png",
    size: Optional[str] = None,
    color: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a raw vendor variant dict."""
    options = []
    if size is not None:
        options.append({"id": "size", "value": size})
    if color is not None:
        options.append({"id": "color", "value": color})
    return {
        "id": f"v-{price}-{size}-{color}",
        "retail_price": price,
        "files": [{"preview_url": preview}],
        "options": options,
    }


def vendor_product(product_id: Any, name: str, variants: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"id": product_id, "name": name, "variants": variants}


def fake_response(
    payload: Any = None,
    status_code: int = 200,
    reason: str = "OK",
) -> MagicMock:
    """A stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.ok = 200 <= status_code < 400
    response.json.return_value = payload
    return response


@pytest.fixture
def make_variant():
    return vendor_variant


@pytest.fixture
def make_product():
    return vendor_product


@pytest.fixture
def make_response():
    return fake_response


@pytest.fixture
def tee_payload() -> Dict[str, Any]:
    """A vendor payload with one shirt in three variants and one tote bag."""
    return {
        "code": 200,
        "result": [
            vendor_product(
                101,
                "Logo Tee",
                [
                    vendor_variant("24.99", "https://files.example.com/tee-black-s.png", "S", "Black"),
                    vendor_variant("24.99", "https://files.example.com/tee-black-m.png", "M", "Black"),
                    vendor_variant("26.99", "https://files.example.com/tee-white-m.png", "M", "White"),
                ],
            ),
            vendor_product(
                202,
                "Tote Bag",
                [vendor_variant("18.00", "https://files.example.com/tote.png")],
            ),
        ],
    }


@pytest.fixture
def fake_session():
    """Factory for a fake requests.Session whose get() returns the given response."""

    def _make(response: Any = None, side_effect: Optional[Exception] = None) -> MagicMock:
        session = MagicMock()
        if side_effect is not None:
            session.get.side_effect = side_effect
        else:
            session.get.return_value = response
        return session

    return _make


@pytest.fixture
def db_path(tmp_path) -> str:
    """Path to a fresh, initialised SQLite database."""
    from catalog.db import init_db

    path = str(tmp_path / "storefront.db")
    init_db(path)
    return path
