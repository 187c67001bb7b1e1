"""Data lake routes: path case checking and item listing."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from lakepath.api.deps import get_datalake_config, get_filters, get_provider
from lakepath.exceptions import AmbiguousMatch, DirectoryNotFound, InvalidSortField, StorageError
from lakepath.schemas.datalake import DataLakeConfig
from lakepath.schemas.items import CheckPathResponse, InvalidFilter, ItemsResponse
from lakepath.services.filters import FilterSpec
from lakepath.services.listing_query import ListingQuery, ListingRequest, ListingResult
from lakepath.services.path_resolver import PathResolver
from lakepath.services.storage.base import ListingProvider
from lakepath.utils.storage import is_root

logger = logging.getLogger(__name__)
router = APIRouter()


def _storage_failure(e: StorageError) -> HTTPException:
    """503 when retrying may help, 502 otherwise."""
    return HTTPException(503 if e.is_recoverable else 502, str(e))


def _envelope(result: ListingResult) -> ItemsResponse:
    response = ItemsResponse(corrected_file_path=result.corrected_directory)
    if result.all_filters_valid:
        response.file_count = len(result.items)
        response.files = result.items
    else:
        response.invalid_filters = [
            InvalidFilter(field=spec.field, operator=spec.operator, value=spec.operand, error=spec.error or "")
            for spec in result.invalid_filters
        ]
    return response


@router.get("/checkPathCase", response_model=CheckPathResponse)
async def check_path_case(
    path: str,
    is_directory: bool = Query(False, alias="isDirectory"),
    provider: ListingProvider = Depends(get_provider),
):
    """Return the stored casing of a file or directory path."""
    if is_root(path):
        return CheckPathResponse(validated_path="/")

    try:
        validated = await PathResolver(provider).resolve(path, is_directory)
    except AmbiguousMatch as e:
        raise HTTPException(409, str(e))
    except StorageError as e:
        logger.error("Storage failure checking '%s': %s", path, e)
        raise _storage_failure(e)

    if validated is None:
        raise HTTPException(404, f"No {'directory' if is_directory else 'file'} matching '{path}' was found")
    return CheckPathResponse(validated_path=validated)


@router.get("/getItems", response_model=ItemsResponse, response_model_exclude_none=True)
async def get_items(
    directory: str | None = None,
    recursive: bool = False,
    ignore_directory_case: bool = Query(False, alias="ignoreDirectoryCase"),
    order_by_column: str | None = Query(None, alias="orderByColumn"),
    order_by_descending: bool = Query(False, alias="orderByDescending"),
    limit: int = 0,
    filters: list[FilterSpec] = Depends(get_filters),
    config: DataLakeConfig = Depends(get_datalake_config),
    provider: ListingProvider = Depends(get_provider),
):
    """List, filter, sort and limit the items of a directory."""
    request = ListingRequest(
        directory=directory,
        recursive=recursive,
        case_insensitive_directory=ignore_directory_case,
        filters=filters,
        order_by=order_by_column,
        order_by_descending=order_by_descending,
        limit=limit,
    )
    try:
        result = await ListingQuery(provider).execute(config.base_url, request)
    except InvalidSortField as e:
        raise HTTPException(400, str(e))
    except DirectoryNotFound as e:
        raise HTTPException(404, str(e))
    except AmbiguousMatch as e:
        raise HTTPException(409, str(e))
    except StorageError as e:
        logger.error("Storage failure listing '%s': %s", directory, e)
        raise _storage_failure(e)
    return _envelope(result)
