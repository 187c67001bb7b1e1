"""Picks the listing provider for a container based on the configured mode."""

from __future__ import annotations

import logging
from pathlib import Path

from lakepath.schemas.datalake import DataLakeConfig
from lakepath.services.storage.base import ListingProvider

logger = logging.getLogger(__name__)


class ProviderFactory:
    """Creates one provider per request; providers are not shared between calls."""

    def __init__(self, mode: str, local_root: str, connection_string: str = ""):
        self._mode = mode
        self._local_root = Path(local_root)
        self._connection_string = connection_string or None

    @property
    def mode(self) -> str:
        return self._mode

    def create(self, config: DataLakeConfig) -> ListingProvider:
        if self._mode == "dev":
            from lakepath.services.storage.local import LocalListingProvider

            logger.debug("Local provider for container %s", config.container)
            return LocalListingProvider(self._local_root / config.container)

        from lakepath.services.storage.azure_datalake import AzureDataLakeProvider

        return AzureDataLakeProvider(config, connection_string=self._connection_string)
