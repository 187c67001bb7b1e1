"""Storage listing providers."""

from lakepath.services.storage.base import ListingProvider, RawPath
from lakepath.services.storage.factory import ProviderFactory

__all__ = ["ListingProvider", "ProviderFactory", "RawPath"]
