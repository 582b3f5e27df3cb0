from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import pytest
from aiohttp.test_utils import TestClient, TestServer

from barangay.api import create_app
from barangay.backend import MemoryBackend
from barangay.config import BarangayConfig
from barangay.exceptions import BackingStoreError
from barangay.store import ProfileStore

_PUROK = {
    "name": "Purok 1",
    "province": "Lanao del Norte",
    "captain": "Zosima Anduyan",
    "demographics": {
        "gender": {"male": 10, "female": 5},
        "employment": {"employed": 8, "unemployed": 7},
        "fourPs": {"members": 3, "nonMembers": 12},
    },
}


class _DownBackend(MemoryBackend):
    async def get(self, key: str) -> str | None:
        raise BackingStoreError("connection refused", key=key)

    async def keys(self, pattern: str) -> list[str]:
        raise BackingStoreError("connection refused", key=pattern)

    async def ping(self) -> bool:
        raise BackingStoreError("connection refused")


@asynccontextmanager
async def _client(
    backend: MemoryBackend | None = None,
    config: BarangayConfig | None = None,
) -> AsyncIterator[TestClient]:
    store = ProfileStore(backend or MemoryBackend())
    async with TestClient(TestServer(create_app(store, config))) as client:
        yield client


@pytest.mark.asyncio
async def test_index_lists_endpoints() -> None:
    async with _client() as client:
        resp = await client.get("/")
        assert resp.status == 200
        body = await resp.json()
        assert body["message"] == "Barangay Profiling API"
        assert {"method": "GET", "path": "/api/profile/stats", "description": "Get demographic statistics"} in body[
            "endpoints"
        ]


@pytest.mark.asyncio
async def test_create_and_fetch() -> None:
    async with _client() as client:
        resp = await client.post("/api/profiles", json={"name": "Purok 1", "province": "X", "captain": "Y"})
        assert resp.status == 201
        created = await resp.json()
        assert created["population"] == 0
        assert created["demographics"]["fourPs"] == {"members": 0, "nonMembers": 0}

        resp = await client.get(f"/api/profiles/{created['_id']}")
        assert resp.status == 200
        assert await resp.json() == created

        resp = await client.get("/api/profiles")
        assert await resp.json() == [created]


@pytest.mark.asyncio
async def test_create_requires_name_province_captain() -> None:
    async with _client() as client:
        resp = await client.post("/api/profiles", json={"name": "Purok 1", "province": "X"})
        assert resp.status == 400
        body = await resp.json()
        assert body["message"] == "Missing required fields (name, province, and captain are required)"

        resp = await client.get("/api/profiles")
        assert await resp.json() == []


@pytest.mark.asyncio
async def test_create_rejects_bad_json() -> None:
    async with _client() as client:
        resp = await client.post("/api/profiles", data="{oops", headers={"Content-Type": "application/json"})
        assert resp.status == 400
        assert (await resp.json())["message"] == "Request body is not valid JSON"

        resp = await client.post("/api/profiles", json=["not", "an", "object"])
        assert resp.status == 400

        resp = await client.post(
            "/api/profiles", data=b'{"name": "\xff\xfe"}', headers={"Content-Type": "application/json"}
        )
        assert resp.status == 400
        assert (await resp.json())["message"] == "Request body is not valid JSON"


@pytest.mark.asyncio
async def test_create_rejects_negative_counter() -> None:
    async with _client() as client:
        payload = {**_PUROK, "demographics": {"gender": {"male": -3}}}
        resp = await client.post("/api/profiles", json=payload)
        assert resp.status == 400
        assert (await resp.json())["errors"]


@pytest.mark.asyncio
async def test_update_deep_merges() -> None:
    async with _client() as client:
        created = await (await client.post("/api/profiles", json=_PUROK)).json()

        resp = await client.put(
            f"/api/profiles/{created['_id']}",
            json={"_id": "forged", "demographics": {"gender": {"male": 99}}},
        )

        assert resp.status == 200
        updated = await resp.json()
        assert updated["_id"] == created["_id"]
        assert updated["demographics"]["gender"] == {"male": 99, "female": 5}
        assert updated["demographics"]["employment"] == created["demographics"]["employment"]
        assert updated["demographics"]["fourPs"] == created["demographics"]["fourPs"]


@pytest.mark.asyncio
async def test_missing_profile_is_404() -> None:
    async with _client() as client:
        for method in ("GET", "PUT", "DELETE"):
            kwargs = {"json": {"name": "x"}} if method == "PUT" else {}
            resp = await client.request(method, "/api/profiles/nope", **kwargs)
            assert resp.status == 404, method
            assert (await resp.json())["message"] == "Profile not found"


@pytest.mark.asyncio
async def test_delete_echoes_profile() -> None:
    async with _client() as client:
        created = await (await client.post("/api/profiles", json=_PUROK)).json()

        resp = await client.delete(f"/api/profiles/{created['_id']}")

        assert resp.status == 200
        body = await resp.json()
        assert body["message"] == "Profile deleted successfully"
        assert body["profile"] == created
        assert (await client.get(f"/api/profiles/{created['_id']}")).status == 404


@pytest.mark.asyncio
async def test_stats() -> None:
    async with _client() as client:
        await client.post("/api/profiles", json=_PUROK)
        await client.post("/api/profiles", json=_PUROK)

        resp = await client.get("/api/profile/stats")

        assert resp.status == 200
        body = await resp.json()
        assert body["genderStats"] == [{"_id": "Male", "count": 20}, {"_id": "Female", "count": 10}]
        assert body["fourPsStats"] == [{"_id": "Members", "count": 6}, {"_id": "Non-Members", "count": 24}]


@pytest.mark.asyncio
async def test_health_ok() -> None:
    async with _client() as client:
        resp = await client.get("/api/health")
        assert resp.status == 200
        assert (await resp.json())["status"] == "OK"


@pytest.mark.asyncio
async def test_backend_down() -> None:
    async with _client(_DownBackend()) as client:
        resp = await client.get("/api/health")
        assert resp.status == 500
        assert (await resp.json())["status"] == "Error"

        resp = await client.get("/api/profiles")
        assert resp.status == 500
        assert (await resp.json())["message"] == "An unexpected error occurred"

        resp = await client.get("/api/profile/stats")
        assert resp.status == 500


@pytest.mark.asyncio
async def test_backend_down_exposes_message_when_configured() -> None:
    async with _client(_DownBackend(), BarangayConfig(expose_errors=True)) as client:
        resp = await client.get("/api/profiles/abc")
        assert resp.status == 500
        assert "connection refused" in (await resp.json())["message"]


@pytest.mark.asyncio
async def test_unknown_endpoint() -> None:
    async with _client() as client:
        resp = await client.get("/api/nothing-here")
        assert resp.status == 404
        assert (await resp.json())["message"] == "Endpoint not found"
