"""Tests for the data lake HTTP routes."""

from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from conftest import FakeProvider
from lakepath.exceptions import StorageError
from lakepath.main import create_app


class TestCheckPathCase:
    @pytest.mark.asyncio
    async def test_exact_path(self, client: AsyncClient, provider: FakeProvider):
        resp = await client.get("/api/datalake/checkPathCase", params={"path": "Reports/Jan.csv"})
        assert resp.status_code == 200
        assert resp.json() == {"validatedPath": "Reports/Jan.csv"}
        assert provider.listing_calls == []

    @pytest.mark.asyncio
    async def test_corrected_directory(self, client: AsyncClient):
        resp = await client.get(
            "/api/datalake/checkPathCase",
            params={"path": "reports/archive", "isDirectory": "true"},
        )
        assert resp.status_code == 200
        assert resp.json()["validatedPath"] == "Reports/Archive"

    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient, provider: FakeProvider):
        resp = await client.get("/api/datalake/checkPathCase", params={"path": "/", "isDirectory": "true"})
        assert resp.status_code == 200
        assert resp.json()["validatedPath"] == "/"
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_not_found(self, client: AsyncClient):
        resp = await client.get("/api/datalake/checkPathCase", params={"path": "reports/missing.csv"})
        assert resp.status_code == 404
        assert "reports/missing.csv" in resp.json()["detail"]

    @pytest.mark.asyncio
    async def test_ambiguous(self, client: AsyncClient, provider: FakeProvider):
        provider.add_directory("reports")
        resp = await client.get(
            "/api/datalake/checkPathCase",
            params={"path": "REPORTS", "isDirectory": "true"},
        )
        assert resp.status_code == 409
        assert "REPORTS" in resp.json()["detail"]

    @pytest.mark.asyncio
    async def test_recoverable_storage_failure(self, client: AsyncClient, provider: FakeProvider):
        with patch.object(provider, "exists_as_file", side_effect=StorageError("Azure: connection error", True)):
            resp = await client.get("/api/datalake/checkPathCase", params={"path": "x.csv"})
        assert resp.status_code == 503

    @pytest.mark.asyncio
    async def test_permanent_storage_failure(self, client: AsyncClient, provider: FakeProvider):
        with patch.object(provider, "exists_as_file", side_effect=StorageError("Azure: client authentication error")):
            resp = await client.get("/api/datalake/checkPathCase", params={"path": "x.csv"})
        assert resp.status_code == 502


class TestGetItems:
    @pytest.mark.asyncio
    async def test_end_to_end(self, client: AsyncClient):
        resp = await client.get(
            "/api/datalake/getItems",
            params=[
                ("directory", "reports"),
                ("ignoreDirectoryCase", "true"),
                ("filter[name]", "contains:.csv"),
                ("orderByColumn", "contentLength"),
                ("orderByDescending", "true"),
                ("limit", "1"),
            ],
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["correctedFilePath"] == "Reports"
        assert data["fileCount"] == 1
        assert "invalidFilters" not in data
        file = data["files"][0]
        assert file == {
            "name": "feb.CSV",
            "directory": "Reports",
            "url": "https://mydatalake.dfs.core.windows.net/mycontainer/Reports/feb.CSV",
            "isDirectory": False,
            "contentLength": 200,
            "lastModified": "2024-03-01T12:30:45.123Z",
        }

    @pytest.mark.asyncio
    async def test_no_correction_omits_corrected_path(self, client: AsyncClient):
        resp = await client.get("/api/datalake/getItems", params={"directory": "Reports"})
        assert resp.status_code == 200
        data = resp.json()
        assert "correctedFilePath" not in data
        assert data["fileCount"] == 4

    @pytest.mark.asyncio
    async def test_multiple_filters_in_order(self, client: AsyncClient):
        resp = await client.get(
            "/api/datalake/getItems",
            params=[
                ("directory", "Reports"),
                ("recursive", "true"),
                ("filter[name]", "like:*.csv"),
                ("filter[contentLength]", "lt:150"),
                ("orderByColumn", "name"),
            ],
        )
        assert resp.status_code == 200
        assert [f["name"] for f in resp.json()["files"]] == ["Jan.csv", "old.csv"]

    @pytest.mark.asyncio
    async def test_bare_url_filter(self, client: AsyncClient):
        resp = await client.get(
            "/api/datalake/getItems",
            params=[
                ("directory", "Reports"),
                ("filter[url]", "https://mydatalake.dfs.core.windows.net/mycontainer/Reports/Jan.csv"),
            ],
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["fileCount"] == 1
        assert data["files"][0]["name"] == "Jan.csv"

    @pytest.mark.asyncio
    async def test_recoverable_storage_failure_while_listing(self, client: AsyncClient, provider: FakeProvider):
        with patch.object(provider, "list_paths", side_effect=StorageError("Azure: connection error", True)):
            resp = await client.get("/api/datalake/getItems", params={"directory": "Reports"})
        assert resp.status_code == 503

    @pytest.mark.asyncio
    async def test_invalid_filter_omits_files(self, client: AsyncClient):
        resp = await client.get(
            "/api/datalake/getItems",
            params=[
                ("directory", "Reports"),
                ("filter[name]", "contains:.csv"),
                ("filter[colour]", "eq:blue"),
            ],
        )
        assert resp.status_code == 200
        data = resp.json()
        assert "files" not in data
        assert "fileCount" not in data
        assert data["invalidFilters"][0]["field"] == "colour"
        assert "colour" in data["invalidFilters"][0]["error"]

    @pytest.mark.asyncio
    async def test_unknown_sort_column(self, client: AsyncClient):
        resp = await client.get(
            "/api/datalake/getItems",
            params={"directory": "Reports", "orderByColumn": "size"},
        )
        assert resp.status_code == 400
        assert "size" in resp.json()["detail"]

    @pytest.mark.asyncio
    async def test_missing_directory(self, client: AsyncClient):
        resp = await client.get("/api/datalake/getItems", params={"directory": "reports"})
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_ambiguous_directory(self, client: AsyncClient, provider: FakeProvider):
        provider.add_directory("reports")
        resp = await client.get(
            "/api/datalake/getItems",
            params={"directory": "REPORTS", "ignoreDirectoryCase": "true"},
        )
        assert resp.status_code == 409


@pytest.mark.asyncio
async def test_missing_storage_location_rejected():
    """Without account/container in the query or settings the request fails early."""
    app = create_app()
    with patch("lakepath.api.deps.settings") as mock_settings:
        mock_settings.default_account = ""
        mock_settings.default_container = ""
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            resp = await c.get("/api/datalake/getItems", params={"account": "mydatalake"})

    assert resp.status_code == 400
    assert "container" in resp.json()["detail"]
