"""Profile store over a key-value backend.

Each profile is stored as a JSON string under ``<key_prefix><id>``.
There is no in-process locking: ``update()`` is a read-modify-write, and
two concurrent updates of the same id are last-write-wins.
"""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from barangay._constants import DEFAULT_KEY_PREFIX
from barangay.backend import KeyValueBackend
from barangay.exceptions import BarangayError, CorruptRecordError, HealthCheckError
from barangay.merge import build_profile, merge_profile
from barangay.models.health import HealthStatus
from barangay.models.profile import Profile
from barangay.models.stats import DemographicStats
from barangay.outcome import Found, Lookup, NotFound
from barangay.stats import compute_stats

_logger = logging.getLogger(__name__)


class ProfileStore:
    """CRUD, statistics and health probe for barangay profiles.

    Usage::

        async with RedisBackend.from_url("redis://localhost:6379/0") as backend:
            store = ProfileStore(backend)
            profile = await store.create({"name": "Purok 1", "province": "X", "captain": "Y"})
            outcome = await store.get_by_id(profile.id)
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        self._backend = backend
        self._key_prefix = key_prefix

    @property
    def key_prefix(self) -> str:
        return self._key_prefix

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _key(self, profile_id: str) -> str:
        return f"{self._key_prefix}{profile_id}"

    @staticmethod
    def _decode(key: str, raw: str) -> Profile:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptRecordError(f"Stored value at {key!r} is not JSON: {raw[:64]}", key=key) from exc
        if not isinstance(data, dict):
            raise CorruptRecordError(f"Stored value at {key!r} is not an object", key=key)
        try:
            return Profile.model_validate(data)
        except ValidationError as exc:
            raise CorruptRecordError(f"Stored value at {key!r} is not a valid profile: {exc}", key=key) from exc

    @staticmethod
    def _encode(profile: Profile) -> str:
        return json.dumps(profile.to_wire(), separators=(",", ":"))

    async def _read(self, profile_id: str) -> tuple[str, Profile | None]:
        key = self._key(profile_id)
        raw = await self._backend.get(key)
        if raw is None:
            return key, None
        return key, self._decode(key, raw)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def create(self, data: Mapping[str, Any]) -> Profile:
        """Persist a new profile with a fresh id and return it.

        Required fields are not checked here; see
        :func:`~barangay.models.profile.missing_required_fields`.
        """
        profile = build_profile(str(uuid.uuid4()), data)
        await self._backend.set(self._key(profile.id), self._encode(profile))
        _logger.debug("Created profile id=%s", profile.id)
        return profile

    async def get_all(self) -> list[Profile]:
        """Return every stored profile, in no particular order."""
        keys = await self._backend.keys(f"{self._key_prefix}*")
        profiles: list[Profile] = []
        for key in keys:
            raw = await self._backend.get(key)
            if raw is None:
                # Deleted between enumeration and read.
                continue
            profiles.append(self._decode(key, raw))
        _logger.debug("Loaded %d profiles", len(profiles))
        return profiles

    async def get_by_id(self, profile_id: str) -> Lookup[Profile]:
        _key, profile = await self._read(profile_id)
        if profile is None:
            return NotFound(profile_id)
        return Found(profile)

    async def update(self, profile_id: str, patch: Mapping[str, Any]) -> Lookup[Profile]:
        """Deep-merge *patch* into the stored profile and persist the result."""
        key, existing = await self._read(profile_id)
        if existing is None:
            return NotFound(profile_id)
        merged = merge_profile(existing, patch)
        await self._backend.set(key, self._encode(merged))
        _logger.debug("Updated profile id=%s", profile_id)
        return Found(merged)

    async def delete(self, profile_id: str) -> Lookup[Profile]:
        """Remove a profile, returning the deleted value."""
        key, existing = await self._read(profile_id)
        if existing is None:
            return NotFound(profile_id)
        await self._backend.delete(key)
        _logger.debug("Deleted profile id=%s", profile_id)
        return Found(existing)

    # ------------------------------------------------------------------
    # Aggregation / health
    # ------------------------------------------------------------------

    async def get_stats(self) -> DemographicStats:
        """Demographic totals over the profiles stored right now."""
        return compute_stats(await self.get_all())

    async def check_health(self) -> HealthStatus:
        """Ping the backend.

        Raises
        ------
        HealthCheckError
            If the round trip fails or the backend does not answer.
        """
        try:
            alive = await self._backend.ping()
        except BarangayError as exc:
            _logger.warning("Store health check failed: %s", exc)
            raise HealthCheckError("Profile store connection failed") from exc
        if not alive:
            raise HealthCheckError("Profile store did not answer ping")
        return HealthStatus(status="OK", message="Server is running and connected to the profile store")
