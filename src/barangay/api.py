"""aiohttp REST API over :class:`~barangay.store.ProfileStore`.

Maps store outcomes to HTTP: :class:`~barangay.outcome.NotFound` → 404,
missing creation fields or invalid values → 400, backing-store failures
→ 500.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from aiohttp import web

from barangay import __version__
from barangay._redact import redact_body, redact_headers
from barangay.auth import make_auth_middleware
from barangay.backend import open_backend
from barangay.config import BarangayConfig
from barangay.exceptions import HealthCheckError, ProfileValidationError
from barangay.models.profile import missing_required_fields
from barangay.outcome import Failure, NotFound, Outcome, settle
from barangay.seed import seed_sample_data
from barangay.store import ProfileStore

_logger = logging.getLogger(__name__)

STORE_KEY = web.AppKey("store", ProfileStore)
CONFIG_KEY = web.AppKey("config", BarangayConfig)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

_ENDPOINTS: tuple[tuple[str, str, str], ...] = (
    ("GET", "/api/profiles", "Get all barangay profiles"),
    ("GET", "/api/profiles/:id", "Get a specific barangay profile"),
    ("POST", "/api/profiles", "Create a new barangay profile"),
    ("PUT", "/api/profiles/:id", "Update a barangay profile"),
    ("DELETE", "/api/profiles/:id", "Delete a barangay profile"),
    ("GET", "/api/profile/stats", "Get demographic statistics"),
    ("GET", "/api/health", "Check server health"),
)


def _message(status: int, message: str, **extra: Any) -> web.Response:
    return web.json_response({"message": message, **extra}, status=status)


def _respond(
    request: web.Request,
    outcome: Outcome[Any],
    render: Callable[[Any], Any],
    *,
    status: int = 200,
) -> web.Response:
    if isinstance(outcome, NotFound):
        return _message(404, "Profile not found")
    if isinstance(outcome, Failure):
        cause = outcome.cause
        if isinstance(cause, ProfileValidationError):
            return _message(400, str(cause), errors=cause.errors)
        _logger.error("%s %s failed: %s", request.method, request.path, cause, exc_info=cause)
        config = request.app[CONFIG_KEY]
        return _message(500, str(cause) if config.expose_errors else "An unexpected error occurred")
    return web.json_response(render(outcome.value), status=status)


async def _json_object(request: web.Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError
        raise web.HTTPBadRequest(
            text=json.dumps({"message": "Request body is not valid JSON"}),
            content_type="application/json",
        ) from exc
    if not isinstance(body, dict):
        raise web.HTTPBadRequest(
            text=json.dumps({"message": "Request body must be a JSON object"}),
            content_type="application/json",
        )
    _logger.debug("%s %s body=%s", request.method, request.path, redact_body(body))
    return body


# ----------------------------------------------------------------------
# Handlers
# ----------------------------------------------------------------------


async def index(request: web.Request) -> web.Response:
    return web.json_response(
        {
            "message": "Barangay Profiling API",
            "version": __version__,
            "endpoints": [
                {"method": method, "path": path, "description": description}
                for method, path, description in _ENDPOINTS
            ],
        }
    )


async def list_profiles(request: web.Request) -> web.Response:
    outcome = await settle(request.app[STORE_KEY].get_all())
    return _respond(request, outcome, lambda profiles: [profile.to_wire() for profile in profiles])


async def get_profile(request: web.Request) -> web.Response:
    outcome = await settle(request.app[STORE_KEY].get_by_id(request.match_info["id"]))
    return _respond(request, outcome, lambda profile: profile.to_wire())


async def create_profile(request: web.Request) -> web.Response:
    body = await _json_object(request)
    if missing_required_fields(body):
        return _message(400, "Missing required fields (name, province, and captain are required)")
    outcome = await settle(request.app[STORE_KEY].create(body))
    return _respond(request, outcome, lambda profile: profile.to_wire(), status=201)


async def update_profile(request: web.Request) -> web.Response:
    body = await _json_object(request)
    outcome = await settle(request.app[STORE_KEY].update(request.match_info["id"], body))
    return _respond(request, outcome, lambda profile: profile.to_wire())


async def delete_profile(request: web.Request) -> web.Response:
    outcome = await settle(request.app[STORE_KEY].delete(request.match_info["id"]))
    return _respond(
        request,
        outcome,
        lambda profile: {"message": "Profile deleted successfully", "profile": profile.to_wire()},
    )


async def profile_stats(request: web.Request) -> web.Response:
    outcome = await settle(request.app[STORE_KEY].get_stats())
    return _respond(request, outcome, lambda stats: stats.to_wire())


async def health(request: web.Request) -> web.Response:
    try:
        status = await request.app[STORE_KEY].check_health()
    except HealthCheckError as exc:
        _logger.error("Health check failed: %s", exc)
        return web.json_response(
            {"status": "Error", "message": "Server is running but the profile store connection failed"},
            status=500,
        )
    return web.json_response(status.to_wire())


# ----------------------------------------------------------------------
# Middlewares
# ----------------------------------------------------------------------


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    try:
        return await handler(request)
    except web.HTTPNotFound:
        return _message(404, "Endpoint not found")
    except web.HTTPException:
        raise
    except Exception:
        _logger.exception("Unhandled error on %s %s", request.method, request.path)
        return _message(500, "An unexpected error occurred")


@web.middleware
async def request_log_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    _logger.info("%s %s", request.method, request.path_qs)
    _logger.debug("headers=%s", redact_headers(request.headers))
    return await handler(request)


# ----------------------------------------------------------------------
# Application factories
# ----------------------------------------------------------------------


def create_app(store: ProfileStore, config: BarangayConfig | None = None) -> web.Application:
    """Build the API application around an existing store."""
    config = config or BarangayConfig()
    middlewares: list[Any] = [error_middleware, request_log_middleware]
    if config.jwt_secret:
        middlewares.append(make_auth_middleware(config.jwt_secret, algorithm=config.jwt_algorithm))

    app = web.Application(middlewares=middlewares)
    app[STORE_KEY] = store
    app[CONFIG_KEY] = config

    app.router.add_get("/", index)
    app.router.add_get("/api/profiles", list_profiles)
    app.router.add_post("/api/profiles", create_profile)
    app.router.add_get("/api/profiles/{id}", get_profile)
    app.router.add_put("/api/profiles/{id}", update_profile)
    app.router.add_delete("/api/profiles/{id}", delete_profile)
    app.router.add_get("/api/profile/stats", profile_stats)
    app.router.add_get("/api/health", health)
    return app


async def create_service_app(config: BarangayConfig) -> web.Application:
    """Build the application with its own backend connection.

    The backend is closed on application cleanup; sample data is seeded
    on startup when ``config.seed_on_start`` is set.
    """
    backend = open_backend(config.store_url)
    store = ProfileStore(backend, key_prefix=config.key_prefix)
    app = create_app(store, config)
    _logger.info("Bearer token auth %s", "enabled" if config.auth_enabled else "disabled")

    async def _backend_lifecycle(_app: web.Application) -> AsyncIterator[None]:
        if config.seed_on_start:
            await seed_sample_data(store)
        yield
        await backend.close()

    app.cleanup_ctx.append(_backend_lifecycle)
    return app
