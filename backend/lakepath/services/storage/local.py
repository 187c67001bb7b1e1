"""Local directory tree served as a data lake container (dev mode).

Casing is only meaningful on a case-sensitive filesystem.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from datetime import datetime, timezone
from pathlib import Path

from lakepath.exceptions import StorageError
from lakepath.services.storage.base import ListingProvider, RawPath
from lakepath.utils.storage import is_root, join_path

logger = logging.getLogger(__name__)


def local_error_wrap(cb):
    """Convert local filesystem errors into StorageError."""

    @functools.wraps(cb)
    async def _inner(*args, **kwargs):
        try:
            return await cb(*args, **kwargs)
        except FileNotFoundError as ex:
            raise StorageError("Local path not found") from ex
        except PermissionError as ex:
            raise StorageError("Access to local path denied", True) from ex
        except NotADirectoryError as ex:
            raise StorageError("Local path is not a directory") from ex
        except OSError as ex:
            raise StorageError(f"Exception reading local path: {ex.__class__.__name__}: {ex}") from ex

    return _inner


class LocalListingProvider(ListingProvider):
    """Serves ``root`` as the container root."""

    def __init__(self, root: Path):
        self._root = Path(root).expanduser().absolute()

    def _target(self, path: str | None) -> Path:
        target = self._root / join_path(path)
        if not target.resolve().is_relative_to(self._root.resolve()):
            raise StorageError(f"Path '{path}' escapes the container root")
        return target

    def _to_raw(self, entry: Path) -> RawPath:
        stat = entry.stat()
        is_dir = entry.is_dir()
        return RawPath(
            name=entry.relative_to(self._root).as_posix(),
            is_directory=is_dir,
            content_length=0 if is_dir else stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime, timezone.utc),
        )

    def _list_sync(self, directory: str | None, recursive: bool) -> list[RawPath]:
        start = self._target(directory)
        paths: list[RawPath] = []
        work = [start]
        while work:
            current = work.pop(0)
            for entry in sorted(current.iterdir()):
                paths.append(self._to_raw(entry))
                if recursive and entry.is_dir():
                    work.append(entry)
        return paths

    @local_error_wrap
    async def list_paths(self, directory: str | None = None, recursive: bool = False) -> list[RawPath]:
        return await asyncio.to_thread(self._list_sync, directory, recursive)

    @local_error_wrap
    async def exists_as_directory(self, path: str | None) -> bool:
        if is_root(path):
            return await asyncio.to_thread(self._root.is_dir)
        return await asyncio.to_thread(self._target(path).is_dir)

    @local_error_wrap
    async def exists_as_file(self, path: str) -> bool:
        if is_root(path):
            return False
        return await asyncio.to_thread(self._target(path).is_file)
