"""Catalog proxy endpoint.

``GET /api/products`` fetches the Printful store catalog and answers with
the storefront product list. Every response, errors and preflights
included, carries permissive CORS headers.
"""

import logging
from typing import Tuple, Union

from flask import Blueprint, Response, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from catalog.client import fetch_storefront_products
from catalog.errors import CatalogError

from .logging_utils import log_event

__all__ = ["api", "CORS_HEADERS"]

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

api = Blueprint("api", __name__, url_prefix="/api")


@api.after_request
def add_cors_headers(response: Response) -> Response:
    response.headers.update(CORS_HEADERS)
    return response


@api.errorhandler(CatalogError)
def handle_catalog_error(exc: CatalogError) -> Tuple[Response, int]:
    logger.error("Error in products endpoint: %s", exc)
    log_event("products_error", {"error_type": type(exc).__name__, "error": str(exc)})
    return jsonify({"error": str(exc)}), 500


@api.errorhandler(Exception)
def handle_unexpected_error(exc: Exception) -> Union[HTTPException, Tuple[Response, int]]:
    if isinstance(exc, HTTPException):
        return exc
    logger.exception("Unexpected error in products endpoint")
    log_event("products_error", {"error_type": type(exc).__name__, "error": str(exc)})
    return jsonify({"error": str(exc)}), 500


@api.route("/products", methods=["GET", "OPTIONS"])
def list_products() -> Union[Response, Tuple[Response, int]]:
    """Return the normalized vendor catalog as a JSON array."""
    if request.method == "OPTIONS":
        return Response(status=200)

    # Tests inject a fake requests.Session through app config
    session = current_app.config.get("VENDOR_SESSION")
    products = fetch_storefront_products(session=session)

    log_event("products_served", {"count": len(products)})
    return jsonify([p.to_dict() for p in products])
