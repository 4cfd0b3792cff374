"""Test the page-side catalog fetch and category names."""

from unittest.mock import MagicMock

import pytest
import requests

from web.categories import get_category_name
from web.config import STOREFRONT_REQUEST_TIMEOUT
from web.storefront import StorefrontUnavailableError, fetch_product_list, load_products


class TestFetchProductList:
    """fetch_product_list turns the endpoint's JSON array into Products."""

    def test_parses_products(self, make_response, sample_products):
        session = MagicMock()
        session.get.return_value = make_response([p.to_dict() for p in sample_products])

        products = fetch_product_list("http://shop/api/products", session=session)

        assert products == sample_products

    @pytest.mark.parametrize(
        "payload",
        [{"error": "boom"}, None, "products"],
    )
    def test_non_list_body_rejected(self, make_response, payload):
        session = MagicMock()
        session.get.return_value = make_response(payload)
        with pytest.raises(StorefrontUnavailableError):
            fetch_product_list("http://shop/api/products", session=session)

    def test_error_status_rejected(self, make_response):
        session = MagicMock()
        session.get.return_value = make_response(status_code=404, reason="NOT FOUND")
        with pytest.raises(StorefrontUnavailableError, match="404"):
            fetch_product_list("http://shop/api/products", session=session)

    def test_transport_error_wrapped(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(StorefrontUnavailableError, match="Could not reach"):
            fetch_product_list("http://shop/api/products", session=session)

    def test_malformed_product_rejected(self, make_response):
        session = MagicMock()
        session.get.return_value = make_response([{"name": "no id"}])
        with pytest.raises(StorefrontUnavailableError, match="Malformed"):
            fetch_product_list("http://shop/api/products", session=session)

    def test_passes_timeout(self, make_response):
        session = MagicMock()
        session.get.return_value = make_response([])
        fetch_product_list("http://shop/api/products", session=session)
        session.get.assert_called_once_with("http://shop/api/products", timeout=STOREFRONT_REQUEST_TIMEOUT)

    def test_timeout_wrapped(self):
        session = MagicMock()
        session.get.side_effect = requests.Timeout("read timed out")
        with pytest.raises(StorefrontUnavailableError, match="Could not reach"):
            fetch_product_list("http://shop/api/products", session=session, timeout=0.5)


class TestLoadProducts:
    """load_products picks the configured endpoint or the vendor."""

    def test_uses_url_when_set(self, make_response, sample_products):
        session = MagicMock()
        session.get.return_value = make_response([p.to_dict() for p in sample_products])
        vendor = MagicMock()

        products = load_products("http://shop/api/products", session=session, vendor_session=vendor)

        assert products == sample_products
        vendor.get.assert_not_called()

    def test_maps_vendor_catalog_without_url(self, make_response, vendor_payload, monkeypatch):
        monkeypatch.setenv("PRINTFUL_API_KEY", "test-key")
        vendor = MagicMock()
        vendor.get.return_value = make_response(vendor_payload)

        products = load_products("", vendor_session=vendor)

        assert [p.id for p in products] == ["11", "12"]

    def test_vendor_failure_becomes_unavailable(self, make_response, monkeypatch):
        monkeypatch.setenv("PRINTFUL_API_KEY", "test-key")
        vendor = MagicMock()
        vendor.get.return_value = make_response(status_code=503, reason="Service Unavailable")

        with pytest.raises(StorefrontUnavailableError, match="Service Unavailable"):
            load_products("", vendor_session=vendor)


class TestCategoryNames:
    @pytest.mark.parametrize(
        "slug,name",
        [
            ("t-shirts", "T-Shirts"),
            ("new-arrivals", "New Arrivals"),
            ("best-sellers", "Best Sellers"),
            ("socks", "Socks"),
            ("", ""),
        ],
    )
    def test_display_names(self, slug, name):
        assert get_category_name(slug) == name
