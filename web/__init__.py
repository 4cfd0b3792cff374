"""Merch storefront web app: products page and catalog proxy API."""
