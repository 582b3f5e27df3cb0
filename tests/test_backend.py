from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from barangay.backend import MemoryBackend, RedisBackend, open_backend
from barangay.exceptions import BackingStoreError, BarangayConfigError, CorruptRecordError


class _FakeRedis:
    """Minimal stand-in for ``redis.asyncio.Redis``."""

    def __init__(self, *, fail: bool = False) -> None:
        self.data: dict[str, str] = {}
        self.fail = fail
        self.closed = False

    def _check(self) -> None:
        if self.fail:
            raise RedisConnectionError("Error 111 connecting to localhost:6379")

    async def get(self, key: str) -> bytes | None:
        self._check()
        value = self.data.get(key)
        return value.encode("utf-8") if value is not None else None

    async def set(self, key: str, value: str) -> bool:
        self._check()
        self.data[key] = value
        return True

    async def delete(self, key: str) -> int:
        self._check()
        return 1 if self.data.pop(key, None) is not None else 0

    async def scan_iter(self, match: str) -> AsyncIterator[str]:
        self._check()
        prefix = match.rstrip("*")
        for key in list(self.data):
            if key.startswith(prefix):
                yield key

    async def ping(self) -> bool:
        self._check()
        return True

    async def aclose(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_memory_backend_glob_keys() -> None:
    backend = MemoryBackend({"profile:1": "a", "profile:2": "b", "user:1": "c"})
    assert sorted(await backend.keys("profile:*")) == ["profile:1", "profile:2"]


@pytest.mark.asyncio
async def test_memory_backend_delete_reports_count() -> None:
    backend = MemoryBackend({"k": "v"})
    assert await backend.delete("k") == 1
    assert await backend.delete("k") == 0
    assert await backend.get("k") is None


@pytest.mark.asyncio
async def test_redis_backend_round_trip() -> None:
    fake = _FakeRedis()
    async with RedisBackend(fake) as backend:  # type: ignore[arg-type]
        await backend.set("profile:1", '{"_id": "1"}')
        assert await backend.get("profile:1") == '{"_id": "1"}'
        assert await backend.keys("profile:*") == ["profile:1"]
        assert await backend.ping() is True
        assert await backend.delete("profile:1") == 1
    assert fake.closed


@pytest.mark.asyncio
async def test_redis_errors_become_backing_store_errors() -> None:
    backend = RedisBackend(_FakeRedis(fail=True))  # type: ignore[arg-type]

    with pytest.raises(BackingStoreError) as exc_info:
        await backend.get("profile:1")
    assert exc_info.value.key == "profile:1"
    assert isinstance(exc_info.value.__cause__, RedisConnectionError)

    with pytest.raises(BackingStoreError):
        await backend.keys("profile:*")
    with pytest.raises(BackingStoreError):
        await backend.ping()


@pytest.mark.asyncio
async def test_open_backend_schemes() -> None:
    assert isinstance(open_backend("memory://"), MemoryBackend)

    backend = open_backend("redis://localhost:6379/0")
    assert isinstance(backend, RedisBackend)
    await backend.close()

    with pytest.raises(BarangayConfigError):
        open_backend("mongodb://localhost")


class _RawBytesRedis(_FakeRedis):
    async def get(self, key: str) -> bytes | None:
        return b"\xff\xfe{}"


class _DecodingRedis(_FakeRedis):
    """Behaves like a client created with ``decode_responses=True``."""

    async def get(self, key: str) -> str | None:
        return b"\xff\xfe{}".decode("utf-8")


@pytest.mark.asyncio
@pytest.mark.parametrize("client_cls", [_RawBytesRedis, _DecodingRedis])
async def test_non_utf8_value_becomes_corrupt_record(client_cls: type[_FakeRedis]) -> None:
    backend = RedisBackend(client_cls())  # type: ignore[arg-type]

    with pytest.raises(CorruptRecordError) as exc_info:
        await backend.get("profile:bad")
    assert exc_info.value.key == "profile:bad"
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
