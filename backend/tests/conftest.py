"""Test fixtures: in-memory data lake provider and FastAPI test client."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from lakepath.api.deps import get_datalake_config, get_provider
from lakepath.main import create_app
from lakepath.schemas.datalake import DataLakeConfig
from lakepath.services.storage.base import ListingProvider, RawPath
from lakepath.utils.storage import is_root, join_path, parent_directory, split_segments

FIXED_TIME = datetime(2024, 3, 1, 12, 30, 45, 123456, tzinfo=timezone.utc)


class FakeProvider(ListingProvider):
    """Case-sensitive in-memory container that records every call."""

    def __init__(self):
        self.entries: dict[str, RawPath] = {}
        self.calls: list[tuple[str, str | None]] = []
        self.closed = False

    def add_directory(self, path: str, last_modified: datetime = FIXED_TIME) -> None:
        parts = split_segments(path)
        for i in range(1, len(parts) + 1):
            name = "/".join(parts[:i])
            self.entries.setdefault(name, RawPath(name=name, is_directory=True, last_modified=last_modified))

    def add_file(self, path: str, size: int = 0, last_modified: datetime = FIXED_TIME) -> None:
        self.add_directory(parent_directory(path))
        name = join_path(path)
        self.entries[name] = RawPath(
            name=name, is_directory=False, content_length=size, last_modified=last_modified,
        )

    @property
    def listing_calls(self) -> list[str | None]:
        return [arg for kind, arg in self.calls if kind == "list"]

    async def close(self) -> None:
        self.closed = True

    async def list_paths(self, directory: str | None = None, recursive: bool = False) -> list[RawPath]:
        self.calls.append(("list", directory))
        prefix = join_path(directory)
        result = []
        for name in sorted(self.entries):
            if recursive:
                if not prefix or name.startswith(prefix + "/"):
                    result.append(self.entries[name])
            elif parent_directory(name) == prefix:
                result.append(self.entries[name])
        return result

    async def exists_as_directory(self, path: str | None) -> bool:
        self.calls.append(("exists_dir", path))
        if is_root(path):
            return True
        entry = self.entries.get(join_path(path))
        return entry is not None and entry.is_directory

    async def exists_as_file(self, path: str) -> bool:
        self.calls.append(("exists_file", path))
        entry = self.entries.get(join_path(path))
        return entry is not None and not entry.is_directory


@pytest.fixture
def provider() -> FakeProvider:
    """A small lake with one case-mismatch friendly reports folder."""
    fake = FakeProvider()
    fake.add_file("Reports/Jan.csv", 100)
    fake.add_file("Reports/feb.CSV", 200)
    fake.add_file("Reports/summary.txt", 50)
    fake.add_file("Reports/Archive/old.csv", 10)
    fake.add_file("readme.md", 5)
    return fake


@pytest.fixture
def lake_config() -> DataLakeConfig:
    return DataLakeConfig(account="mydatalake", container="mycontainer")


@pytest_asyncio.fixture
async def client(provider: FakeProvider, lake_config: DataLakeConfig):
    """Provide an async test client bound to the fake provider."""
    app = create_app()

    async def _override_provider():
        yield provider

    app.dependency_overrides[get_provider] = _override_provider
    app.dependency_overrides[get_datalake_config] = lambda: lake_config

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
