"""Bearer token middleware.

Verifies an HS256 (by default) JWT from the ``Authorization`` header and
attaches its claims to the request.  Roles:

* ``admin`` may read and write everything.
* ``resident`` may only read; ``/api/profiles/{id}`` only for the id in
  its ``residentId`` claim.

Token issuance belongs to the account service; :func:`issue_token` is
here for tooling and tests.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import jwt
from aiohttp import web

_logger = logging.getLogger(__name__)

#: Request key holding the decoded claims.
CLAIMS_KEY = "barangay.claims"

_PUBLIC_PATHS = frozenset({"/", "/api/health"})
_MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def bearer_token(header: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not header:
        return None
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def issue_token(
    claims: Mapping[str, Any],
    secret: str,
    *,
    algorithm: str = "HS256",
    expires_in: float | None = None,
) -> str:
    payload = dict(claims)
    if expires_in is not None:
        payload["exp"] = int(time.time() + expires_in)
    return jwt.encode(payload, secret, algorithm=algorithm)


def _deny(status: int, message: str) -> web.Response:
    return web.json_response({"error": message}, status=status)


def make_auth_middleware(secret: str, *, algorithm: str = "HS256") -> Callable[..., Awaitable[web.StreamResponse]]:
    """Build the aiohttp middleware enforcing the role rules above."""

    @web.middleware
    async def auth_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
        if request.path in _PUBLIC_PATHS or not request.path.startswith("/api/"):
            return await handler(request)

        token = bearer_token(request.headers.get("Authorization"))
        if token is None:
            return _deny(401, "Access denied. No token provided.")

        try:
            claims: dict[str, Any] = jwt.decode(token, secret, algorithms=[algorithm])
        except jwt.PyJWTError as exc:
            _logger.debug("Rejected bearer token: %s", exc)
            return _deny(403, "Invalid token.")

        request[CLAIMS_KEY] = claims
        role = claims.get("role")

        if request.method in _MUTATING_METHODS and role != "admin":
            return _deny(403, "Access denied. Admin rights required.")

        if role == "resident":
            profile_id = request.match_info.get("id")
            if profile_id and claims.get("residentId") != profile_id:
                return _deny(403, "Access denied. You can only access your own information.")

        return await handler(request)

    return auth_middleware
