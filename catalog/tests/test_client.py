"""Tests for the Printful HTTP client."""

import pytest
import requests

from catalog.client import PrintfulClient, fetch_storefront_products
from catalog.config import get_api_key
from catalog.errors import ConfigurationError, UpstreamError


class TestCredential:
    """The bearer credential is required and read on every call."""

    def test_missing_key_raises_before_any_request(self, fake_session, make_response):
        session = fake_session(make_response([]))
        with pytest.raises(ConfigurationError, match="not configured"):
            fetch_storefront_products(session=session, env={})
        session.get.assert_not_called()

    def test_empty_key_counts_as_missing(self, fake_session):
        session = fake_session()
        with pytest.raises(ConfigurationError):
            fetch_storefront_products(session=session, env={"PRINTFUL_API_KEY": ""})
        session.get.assert_not_called()

    def test_key_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("PRINTFUL_API_KEY", "secret-123")
        assert get_api_key() == "secret-123"
        monkeypatch.delenv("PRINTFUL_API_KEY")
        assert get_api_key() is None


class TestFetchStoreProducts:
    """One GET to /store/products, bearer-authenticated."""

    def test_sends_bearer_token_to_store_products(self, fake_session, make_response, tee_payload):
        session = fake_session(make_response(tee_payload))
        client = PrintfulClient("abc", base_url="https://api.example.com/", session=session)

        client.fetch_store_products()

        session.get.assert_called_once()
        args, kwargs = session.get.call_args
        assert args[0] == "https://api.example.com/store/products"
        assert kwargs["headers"]["Authorization"] == "Bearer abc"

    def test_list_products_normalizes_payload(self, fake_session, make_response, tee_payload):
        session = fake_session(make_response(tee_payload))
        products = fetch_storefront_products(session=session, env={"PRINTFUL_API_KEY": "abc"})
        assert [p.name for p in products] == ["Logo Tee", "Tote Bag"]
        assert session.get.call_count == 1

    def test_non_success_status_raises_with_reason(self, fake_session, make_response):
        session = fake_session(make_response({"error": "nope"}, status_code=401, reason="Unauthorized"))
        client = PrintfulClient("abc", session=session)

        with pytest.raises(UpstreamError) as excinfo:
            client.fetch_store_products()

        assert str(excinfo.value) == "Printful API error: Unauthorized"
        assert excinfo.value.status_code == 401

    def test_transport_failure_raises_upstream_error(self, fake_session):
        session = fake_session(side_effect=requests.ConnectionError("connection refused"))
        client = PrintfulClient("abc", session=session)

        with pytest.raises(UpstreamError, match="request failed"):
            client.fetch_store_products()

    def test_invalid_json_raises_upstream_error(self, fake_session, make_response):
        response = make_response()
        response.json.side_effect = ValueError("Expecting value")
        client = PrintfulClient("abc", session=fake_session(response))

        with pytest.raises(UpstreamError, match="invalid JSON"):
            client.fetch_store_products()

    def test_no_retry_after_failure(self, fake_session, make_response):
        session = fake_session(make_response(status_code=503, reason="Service Unavailable"))
        client = PrintfulClient("abc", session=session)

        with pytest.raises(UpstreamError):
            client.list_products()
        assert session.get.call_count == 1
