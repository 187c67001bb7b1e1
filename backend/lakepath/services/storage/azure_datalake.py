"""Azure Data Lake Storage Gen2 listing provider (async SDK)."""

from __future__ import annotations

import functools
import logging

import azure.core.exceptions as ace
from azure.identity.aio import DefaultAzureCredential
from azure.storage.filedatalake.aio import FileSystemClient

from lakepath.exceptions import StorageError
from lakepath.schemas.datalake import DataLakeConfig
from lakepath.services.storage.base import ListingProvider, RawPath
from lakepath.utils.storage import is_root, join_path

logger = logging.getLogger(__name__)


def wrap_azure_errors(cb):
    """Convert Azure SDK errors into StorageError with recoverable set properly."""

    @functools.wraps(cb)
    async def _inner(*args, **kwargs):
        try:
            return await cb(*args, **kwargs)
        except ace.ClientAuthenticationError as ex:
            raise StorageError(f"Azure: client authentication error: {ex.__class__.__name__}: {ex}") from ex
        except ace.ServiceRequestError as ex:
            raise StorageError(f"Azure: connection error: {ex.__class__.__name__}: {ex}", True) from ex
        except ace.ResourceNotFoundError as ex:
            raise StorageError(f"Azure: resource not found: {ex.__class__.__name__}: {ex}") from ex
        except ace.AzureError as ex:
            raise StorageError(f"Azure: {ex.__class__.__name__}: {ex}") from ex

    return _inner


def _is_folder(properties) -> bool:
    metadata = properties.metadata or {}
    return metadata.get("hdi_isfolder", "").lower() == "true"


class AzureDataLakeProvider(ListingProvider):
    """Lists one Data Lake container (file system)."""

    def __init__(self, config: DataLakeConfig, connection_string: str | None = None):
        self._config = config
        self._credential: DefaultAzureCredential | None = None
        if connection_string:
            self._client = FileSystemClient.from_connection_string(
                connection_string,
                file_system_name=config.container,
            )
        else:
            self._credential = DefaultAzureCredential()
            self._client = FileSystemClient(
                account_url=config.account_url,
                file_system_name=config.container,
                credential=self._credential,
            )

    async def close(self) -> None:
        await self._client.close()
        if self._credential is not None:
            await self._credential.close()

    @wrap_azure_errors
    async def list_paths(self, directory: str | None = None, recursive: bool = False) -> list[RawPath]:
        path = join_path(directory) or None
        logger.debug("Listing '%s' in %s (recursive=%s)", path or "/", self._config.base_url, recursive)
        paths: list[RawPath] = []
        async for props in self._client.get_paths(path=path, recursive=recursive):
            paths.append(RawPath(
                name=props.name,
                is_directory=bool(props.is_directory),
                content_length=props.content_length,
                last_modified=props.last_modified,
            ))
        return paths

    @wrap_azure_errors
    async def exists_as_directory(self, path: str | None) -> bool:
        if is_root(path):
            return await self._client.exists()
        try:
            props = await self._client.get_directory_client(join_path(path)).get_directory_properties()
        except ace.ResourceNotFoundError:
            return False
        return _is_folder(props)

    @wrap_azure_errors
    async def exists_as_file(self, path: str) -> bool:
        if is_root(path):
            return False
        try:
            props = await self._client.get_file_client(join_path(path)).get_file_properties()
        except ace.ResourceNotFoundError:
            return False
        return not _is_folder(props)
