"""Exception types raised by the catalog integration."""

from typing import Optional

__all__ = [
    "CatalogError",
    "ConfigurationError",
    "UpstreamError",
    "CatalogMappingError",
]


class CatalogError(Exception):
    """Base class for failures that abort a catalog request."""


class ConfigurationError(CatalogError):
    """A required setting (the vendor credential) is missing."""


class UpstreamError(CatalogError):
    """The vendor API answered with a non-success status or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CatalogMappingError(CatalogError):
    """A vendor product could not be reshaped into a storefront product."""
