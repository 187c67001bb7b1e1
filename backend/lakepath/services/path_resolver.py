"""Case-insensitive path resolution against a case-sensitive container."""

from __future__ import annotations

import logging

from lakepath.exceptions import AmbiguousMatch
from lakepath.services.storage.base import ListingProvider
from lakepath.utils.storage import (
    is_root,
    join_path,
    leaf_name,
    normalize_separators,
    parent_directory,
    split_segments,
)

logger = logging.getLogger(__name__)


class PathResolver:
    """Finds the stored casing of a path, one segment at a time.

    Each directory segment costs one listing of its parent, so resolution never
    lists the whole tree and ambiguity is reported at the shallowest segment
    where two stored names collapse under a case-insensitive compare.
    """

    def __init__(self, provider: ListingProvider):
        self._provider = provider

    async def resolve(self, path: str | None, is_directory: bool) -> str | None:
        """Return the stored path, or None when nothing matches.

        Raises AmbiguousMatch when more than one sibling matches a segment.
        """
        if is_root(path):
            return None

        exists = (
            await self._provider.exists_as_directory(path)
            if is_directory
            else await self._provider.exists_as_file(path)
        )
        if exists:
            return path

        logger.info(
            "%s '%s' not found, checking path case using case insensitive compare",
            "Directory" if is_directory else "File", path,
        )

        normalized = normalize_separators(path)
        directory_path = normalized if is_directory else parent_directory(normalized)
        filename = None if is_directory else leaf_name(normalized)

        valid_directory: str | None = None
        for segment in split_segments(directory_path):
            matches = await self._match(valid_directory, segment, want_directory=True)
            if not matches:
                logger.info("No directory matching '%s' under '%s'", segment, valid_directory or "/")
                return None
            if len(matches) > 1:
                raise AmbiguousMatch(segment, matches)
            valid_directory = matches[0]

        if is_directory:
            return valid_directory

        # Only the directory casing may have been wrong
        candidate = join_path(valid_directory, filename)
        if await self._provider.exists_as_file(candidate):
            return candidate

        matches = await self._match(valid_directory, filename, want_directory=False)
        if len(matches) > 1:
            raise AmbiguousMatch(filename, matches)
        return matches[0] if matches else None

    async def _match(self, directory: str | None, search: str, want_directory: bool) -> list[str]:
        """Full paths of children of ``directory`` whose leaf equals ``search`` ignoring case."""
        wanted = search.casefold()
        children = await self._provider.list_paths(directory, recursive=False)
        return [
            child.name
            for child in children
            if child.is_directory == want_directory and leaf_name(child.name).casefold() == wanted
        ]
