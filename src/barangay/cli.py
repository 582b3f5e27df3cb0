"""Command-line entry point.

Usage
-----
Configuration comes from the environment (see
:meth:`barangay.config.BarangayConfig.from_env`)::

    export BARANGAY_STORE_URL="redis://localhost:6379/0"
    python -m barangay serve --seed
    python -m barangay stats
    python -m barangay export --format csv

Commands::

    serve               Run the REST API
    seed                Load the Barangay Santiago sample puroks into an empty store
    stats               Print demographic totals as JSON
    health              Ping the store (exit code 1 when unreachable)
    export              Write a JSON or CSV snapshot of all profiles
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from aiohttp import web

from barangay.api import create_service_app
from barangay.backend import open_backend
from barangay.config import BarangayConfig
from barangay.exceptions import BarangayError, HealthCheckError
from barangay.export import export_profiles_csv, export_profiles_json
from barangay.seed import seed_sample_data
from barangay.store import ProfileStore

_logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _with_store(config: BarangayConfig, fn: Callable[[ProfileStore], Awaitable[T]]) -> T:
    async with open_backend(config.store_url) as backend:
        return await fn(ProfileStore(backend, key_prefix=config.key_prefix))


async def _cmd_seed(store: ProfileStore) -> int:
    created = await seed_sample_data(store)
    print(f"Created {created} profiles")
    return 0


async def _cmd_stats(store: ProfileStore) -> int:
    stats = await store.get_stats()
    print(json.dumps(stats.to_wire(), indent=2))
    return 0


async def _cmd_health(store: ProfileStore) -> int:
    try:
        status = await store.check_health()
    except HealthCheckError as exc:
        print(json.dumps({"status": "Error", "message": str(exc)}))
        return 1
    print(json.dumps(status.to_wire()))
    return 0


def _cmd_export(config: BarangayConfig, fmt: str, output: str | None) -> Callable[[ProfileStore], Awaitable[int]]:
    async def _run(store: ProfileStore) -> int:
        profiles = await store.get_all()
        directory = output or config.backup_dir
        if fmt == "csv":
            result = export_profiles_csv(profiles, directory)
        else:
            result = export_profiles_json(profiles, directory)
        print(json.dumps(result.model_dump(mode="json")))
        return 0

    return _run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="barangay", description="Barangay profile store and REST API")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--store-url", help="Override BARANGAY_STORE_URL")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the REST API")
    serve.add_argument("--host", help="Bind address (default: BARANGAY_HOST or 0.0.0.0)")
    serve.add_argument("--port", type=int, help="Port (default: PORT or 5000)")
    serve.add_argument("--seed", action="store_true", help="Seed sample data when the store is empty")

    sub.add_parser("seed", help="Load sample puroks into an empty store")
    sub.add_parser("stats", help="Print demographic totals")
    sub.add_parser("health", help="Ping the store")

    export = sub.add_parser("export", help="Write a snapshot of all profiles")
    export.add_argument("--format", choices=("json", "csv"), default="json", dest="fmt")
    export.add_argument("--output", "-o", help="Directory (default: BARANGAY_BACKUP_DIR or ./backups)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    overrides: dict[str, object] = {}
    if args.store_url:
        overrides["store_url"] = args.store_url
    if args.command == "serve":
        if args.host:
            overrides["host"] = args.host
        if args.port:
            overrides["port"] = args.port
        if args.seed:
            overrides["seed_on_start"] = True

    try:
        config = BarangayConfig.from_env(**overrides)
    except BarangayError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    if args.command == "serve":
        web.run_app(create_service_app(config), host=config.host, port=config.port)
        return 0

    commands: dict[str, Callable[[ProfileStore], Awaitable[int]]] = {
        "seed": _cmd_seed,
        "stats": _cmd_stats,
        "health": _cmd_health,
        "export": _cmd_export(config, getattr(args, "fmt", "json"), getattr(args, "output", None)),
    }
    try:
        return asyncio.run(_with_store(config, commands[args.command]))
    except BarangayError as exc:
        _logger.error("%s failed: %s", args.command, exc)
        return 1
