"""Listing provider interface shared by every storage backend."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class RawPath:
    """A path as reported by the storage backend.

    ``name`` is the full path relative to the container root, ``/``-separated.
    """
    name: str
    is_directory: bool = False
    content_length: int | None = None
    last_modified: datetime | None = None


class ListingProvider:
    """Read-only view of one container.

    Paths are ``/``-separated and relative to the container root; ``None`` or
    ``""`` as a directory means the root. Providers are async context managers
    and must be closed after use.
    """

    async def __aenter__(self) -> "ListingProvider":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release backend connections."""
        pass

    async def list_paths(self, directory: str | None = None, recursive: bool = False) -> list[RawPath]:
        """List paths under a directory; immediate children unless recursive."""
        raise NotImplementedError

    async def exists_as_directory(self, path: str | None) -> bool:
        """Check if the path exists with this exact casing and is a directory."""
        raise NotImplementedError

    async def exists_as_file(self, path: str) -> bool:
        """Check if the path exists with this exact casing and is a file."""
        raise NotImplementedError
