"""Service configuration for barangay."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from barangay._constants import DEFAULT_KEY_PREFIX, DEFAULT_PORT, DEFAULT_STORE_URL
from barangay.exceptions import BarangayConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_port(value: str) -> int:
    try:
        port = int(value.strip())
    except ValueError as exc:
        raise BarangayConfigError(f"PORT must be an integer, got {value!r}") from exc
    if not 0 < port < 65536:
        raise BarangayConfigError(f"PORT out of range: {port}")
    return port


@dataclasses.dataclass(frozen=True)
class BarangayConfig:
    """Service configuration.

    Parameters
    ----------
    store_url : str
        Backing store URL.  ``redis://``, ``rediss://`` and ``unix://``
        select Redis; ``memory://`` selects the in-process store.
    key_prefix : str
        Prefix prepended to every profile id to form the store key.
    host : str
        Interface the HTTP server binds to.
    port : int
        Port the HTTP server listens on.
    jwt_secret : str or None
        Shared secret for bearer token verification.  When ``None`` the
        auth middleware is not installed.
    jwt_algorithm : str
        JWT signing algorithm.
    backup_dir : str
        Directory that JSON/CSV exports are written to.
    seed_on_start : bool
        Seed the Barangay Santiago sample data when the store is empty.
    expose_errors : bool
        Include the exception message in 500 responses (development only).
    """

    store_url: str = DEFAULT_STORE_URL
    key_prefix: str = DEFAULT_KEY_PREFIX
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    backup_dir: str = "backups"
    seed_on_start: bool = False
    expose_errors: bool = False

    @property
    def auth_enabled(self) -> bool:
        return bool(self.jwt_secret)

    @classmethod
    def from_env(cls, **overrides: Any) -> BarangayConfig:
        """Create configuration from environment variables.

        Reads ``BARANGAY_*`` variables plus the conventional ``REDIS_URL``,
        ``PORT`` and ``JWT_SECRET``.  Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        BarangayConfig
            Populated configuration.

        Raises
        ------
        BarangayConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "BARANGAY_KEY_PREFIX": "key_prefix",
            "BARANGAY_HOST": "host",
            "JWT_SECRET": "jwt_secret",
            "BARANGAY_JWT_ALGORITHM": "jwt_algorithm",
            "BARANGAY_BACKUP_DIR": "backup_dir",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # BARANGAY_STORE_URL wins over the generic REDIS_URL
        store_url = env.get("BARANGAY_STORE_URL") or env.get("REDIS_URL")
        if store_url:
            config_kwargs["store_url"] = store_url

        port_env = env.get("BARANGAY_PORT") or env.get("PORT")
        if port_env is not None and "port" not in overrides:
            config_kwargs["port"] = _env_port(port_env)

        if "seed_on_start" not in overrides:
            config_kwargs["seed_on_start"] = _env_bool(env.get("BARANGAY_SEED"), False)

        if "expose_errors" not in overrides:
            config_kwargs["expose_errors"] = _env_bool(env.get("BARANGAY_EXPOSE_ERRORS"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
