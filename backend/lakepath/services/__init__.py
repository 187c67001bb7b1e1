"""Business logic services: singleton registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lakepath.config import settings

if TYPE_CHECKING:
    from lakepath.services.storage.factory import ProviderFactory

logger = logging.getLogger(__name__)

_provider_factory: ProviderFactory | None = None


async def init_services() -> None:
    """Create and wire up all service singletons."""
    global _provider_factory

    from lakepath.services.storage.factory import ProviderFactory

    _provider_factory = ProviderFactory(
        mode=settings.mode,
        local_root=settings.local_root,
        connection_string=settings.azure_connection_string,
    )
    if settings.is_dev_mode:
        logger.info("Dev mode: serving containers from %s", settings.local_root)
    elif not settings.azure_connection_string:
        logger.info("No connection string configured (LAKEPATH_AZURE_CONNECTION_STRING), using DefaultAzureCredential")


async def shutdown_services() -> None:
    global _provider_factory
    _provider_factory = None


def get_provider_factory() -> ProviderFactory:
    if _provider_factory is None:
        raise RuntimeError("Services not initialized, call init_services() first")
    return _provider_factory
