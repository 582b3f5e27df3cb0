"""Key-value backends for the profile store.

The store depends only on five primitives: ``get``, ``set``, ``delete``,
``keys`` and ``ping``.  :class:`RedisBackend` is the production
implementation; :class:`MemoryBackend` keeps everything in a dict and is
used for development (``memory://``) and tests.
"""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeVar

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from barangay.exceptions import BackingStoreError, BarangayConfigError, CorruptRecordError

_logger = logging.getLogger(__name__)

T = TypeVar("T")

_REDIS_SCHEMES = ("redis://", "rediss://", "unix://")
_MEMORY_SCHEME = "memory://"


class KeyValueBackend(Protocol):
    """Structural backend interface used by :class:`~barangay.store.ProfileStore`.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`RedisBackend`) concrete.
    """

    async def get(self, key: str) -> str | None:
        ...

    async def set(self, key: str, value: str) -> None:
        ...

    async def delete(self, key: str) -> int:
        ...

    async def keys(self, pattern: str) -> list[str]:
        ...

    async def ping(self) -> bool:
        ...

    async def close(self) -> None:
        ...


class RedisBackend:
    """Backend over a ``redis.asyncio`` client.

    Every :class:`redis.exceptions.RedisError` is re-raised as
    :class:`BackingStoreError`; a value that does not decode as UTF-8
    becomes :class:`CorruptRecordError`.
    """

    def __init__(self, client: aioredis.Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> RedisBackend:
        kwargs.setdefault("decode_responses", True)
        return cls(aioredis.Redis.from_url(url, **kwargs))

    async def __aenter__(self) -> RedisBackend:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def _run(self, op: str, key: str, fn: Callable[[], Awaitable[T]]) -> T:
        try:
            return await fn()
        except RedisError as exc:
            raise BackingStoreError(f"Redis {op} {key!r} failed: {exc}", key=key) from exc
        except UnicodeDecodeError as exc:
            raise CorruptRecordError(f"Redis {op} {key!r} returned non UTF-8 data", key=key) from exc

    async def get(self, key: str) -> str | None:
        async def _get() -> str | None:
            value = await self._client.get(key)
            return value.decode("utf-8") if isinstance(value, bytes) else value

        return await self._run("GET", key, _get)

    async def set(self, key: str, value: str) -> None:
        await self._run("SET", key, lambda: self._client.set(key, value))

    async def delete(self, key: str) -> int:
        removed = await self._run("DEL", key, lambda: self._client.delete(key))
        return int(removed)

    async def keys(self, pattern: str) -> list[str]:
        async def _scan() -> list[str]:
            found: list[str] = []
            async for key in self._client.scan_iter(match=pattern):
                found.append(key.decode("utf-8") if isinstance(key, bytes) else key)
            return found

        return await self._run("SCAN", pattern, _scan)

    async def ping(self) -> bool:
        return bool(await self._run("PING", "", lambda: self._client.ping()))

    async def close(self) -> None:
        await self._client.aclose()


class MemoryBackend:
    """In-process dict backend with glob-style key matching."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(data) if data else {}

    async def __aenter__(self) -> MemoryBackend:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> int:
        return 1 if self._data.pop(key, None) is not None else 0

    async def keys(self, pattern: str) -> list[str]:
        return [key for key in self._data if fnmatch.fnmatchcase(key, pattern)]

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        return None


def open_backend(url: str) -> RedisBackend | MemoryBackend:
    """Create a backend for *url*.

    Raises
    ------
    BarangayConfigError
        If the URL scheme is not supported.
    """
    if url.startswith(_MEMORY_SCHEME):
        _logger.debug("Using in-memory profile store")
        return MemoryBackend()
    if url.startswith(_REDIS_SCHEMES):
        _logger.debug("Using Redis profile store")
        return RedisBackend.from_url(url)
    raise BarangayConfigError(f"Unsupported store URL: {url!r}")
