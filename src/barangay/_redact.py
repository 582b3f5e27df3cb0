"""Masking of credentials in DEBUG request logs.

Only two things are logged per request: the header mapping and the
decoded JSON body.  Both go through here first.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_MASK = "<redacted>"
_MAX_STRING = 256

_SENSITIVE_HEADERS: frozenset[str] = frozenset({"authorization", "cookie", "set-cookie", "proxy-authorization"})
_SENSITIVE_FIELDS: frozenset[str] = frozenset({"password", "token", "accesstoken", "refreshtoken", "secret"})


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy *headers* with credentials masked.

    The scheme of an ``Authorization`` header is kept, so ``Bearer <redacted>``
    still shows which kind of credential was sent.
    """
    masked: dict[str, str] = {}
    for name, value in headers.items():
        lowered = name.lower()
        if lowered not in _SENSITIVE_HEADERS:
            masked[name] = value
            continue
        scheme, _, credential = value.partition(" ")
        masked[name] = f"{scheme} {_MASK}" if lowered.endswith("authorization") and credential else _MASK
    return masked


def redact_body(value: Any) -> Any:
    """Copy a decoded JSON value with sensitive fields masked and long strings cut."""
    if isinstance(value, dict):
        return {key: _MASK if key.lower() in _SENSITIVE_FIELDS else redact_body(item) for key, item in value.items()}
    if isinstance(value, list):
        return [redact_body(item) for item in value]
    if isinstance(value, str) and len(value) > _MAX_STRING:
        return f"{value[:_MAX_STRING]}...<truncated>"
    return value
