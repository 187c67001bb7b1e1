"""Listing pipeline: resolve → fetch → filter → sort → limit."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timezone

from lakepath.exceptions import DirectoryNotFound, InvalidSortField
from lakepath.schemas.items import PathItem
from lakepath.services.filters import FilterSpec, lookup_field
from lakepath.services.path_resolver import PathResolver
from lakepath.services.storage.base import ListingProvider, RawPath
from lakepath.utils.storage import is_root, join_path, leaf_name, parent_directory, url_combine

logger = logging.getLogger(__name__)


@dataclass
class ListingRequest:
    """Caller parameters for one listing. ``limit <= 0`` means no limit."""
    directory: str | None = None
    recursive: bool = False
    case_insensitive_directory: bool = False
    filters: list[FilterSpec] = field(default_factory=list)
    order_by: str | None = None
    order_by_descending: bool = False
    limit: int = 0


@dataclass
class ListingResult:
    items: list[PathItem]
    all_filters_valid: bool
    corrected_directory: str | None = None
    invalid_filters: list[FilterSpec] = field(default_factory=list)


def to_path_item(raw: RawPath, base_url: str) -> PathItem:
    """Map a provider entry to a PathItem, defaulting missing metadata."""
    last_modified = raw.last_modified
    if last_modified is not None and last_modified.tzinfo is not None:
        last_modified = last_modified.astimezone(timezone.utc)
    return PathItem(
        name=leaf_name(raw.name),
        directory=parent_directory(raw.name),
        url=url_combine(base_url, raw.name),
        is_directory=bool(raw.is_directory),
        content_length=raw.content_length or 0,
        last_modified=last_modified,
    )


def sort_items(items: list[PathItem], order_by: str, descending: bool = False) -> list[PathItem]:
    """Stable sort by a public field name; raises InvalidSortField for unknown names."""
    item_field = lookup_field(order_by)
    if item_field is None:
        raise InvalidSortField(order_by)

    def _key(item: PathItem):
        value = getattr(item, item_field.attribute)
        # None sorts before any value
        return (value is not None, value if value is not None else 0)

    return sorted(items, key=_key, reverse=descending)


class ListingQuery:
    """Runs a ListingRequest against one container."""

    def __init__(self, provider: ListingProvider):
        self._provider = provider
        self._resolver = PathResolver(provider)

    async def execute(self, base_url: str, request: ListingRequest) -> ListingResult:
        if request.order_by and lookup_field(request.order_by) is None:
            raise InvalidSortField(request.order_by)

        directory = request.directory
        if request.case_insensitive_directory:
            directory = await self._resolver.resolve(request.directory, is_directory=True)
            if directory is None and not is_root(request.directory):
                raise DirectoryNotFound(request.directory)

        if not await self._provider.exists_as_directory(directory):
            raise DirectoryNotFound(directory)

        raw_paths = await self._provider.list_paths(directory, recursive=request.recursive)
        items = [to_path_item(raw, base_url) for raw in raw_paths]
        logger.info("Listed %d paths under '%s'", len(items), join_path(directory) or "/")

        invalid = [spec for spec in request.filters if not spec.is_valid]
        for spec in request.filters:
            if not spec.is_valid:
                continue
            logger.info("Applying filter: %s %s '%s'", spec.field, spec.operator, spec.operand)
            items = spec.apply(items)

        if request.order_by:
            items = sort_items(items, request.order_by, request.order_by_descending)

        if 0 < request.limit < len(items):
            items = items[:request.limit]

        corrected = None
        if request.case_insensitive_directory and directory is not None and directory != request.directory:
            corrected = directory

        if invalid:
            logger.warning("%d of %d filters are not valid, discarding results", len(invalid), len(request.filters))
            return ListingResult(
                items=[],
                all_filters_valid=False,
                corrected_directory=corrected,
                invalid_filters=invalid,
            )
        return ListingResult(items=items, all_filters_valid=True, corrected_directory=corrected)
