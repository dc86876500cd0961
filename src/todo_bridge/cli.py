"""Command line entry point: ``python -m todo_bridge worker|serve|stats``."""
from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import signal
import sys
from typing import Any

from todo_bridge.bootstrap import Container, build_container
from todo_bridge.config import BridgeSettings, ConfigError, DotenvSettingsLoader, EnvSettingsLoader
from todo_bridge.kernel.errors import TransportError
from todo_bridge.observability.logging import JsonLoggerFactory, get_logger

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="todo_bridge", description="Todo service and RabbitMQ request bridge")
    parser.add_argument("--env-file", default=None, help="Read TODO_BRIDGE_* settings from a dotenv file")
    parser.add_argument("--log-level", default=None, help="Override TODO_BRIDGE_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("worker", help="Consume the request queue until SIGINT/SIGTERM")
    serve = sub.add_parser("serve", help="Run the HTTP API and the request-queue consumers in one process")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--no-consumers", action="store_true", help="Serve HTTP only; do not connect to RabbitMQ")
    sub.add_parser("stats", help="Print topology and supported actions as JSON")
    return parser.parse_args(argv)


def load_settings(env_file: str | None = None) -> BridgeSettings:
    loader = DotenvSettingsLoader(env_file) if env_file else EnvSettingsLoader()
    return loader.load(BridgeSettings)


async def run_worker(container: Container, stop: asyncio.Event | None = None) -> None:
    stop = stop or asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, stop.set)
    try:
        subscriptions = await container.run_worker()
        logger.info("worker_started", consumers=len(subscriptions), queue=container.topology.request_queue)
        await stop.wait()
        logger.info("worker_stopping")
    finally:
        await container.aclose()


def stats(container: Container) -> dict[str, Any]:
    return {
        "topology": container.topology.describe(),
        "supported_actions": list(container.dispatcher.actions),
        "prefetch_count": container.settings.prefetch_count,
        "consumer_count": container.settings.consumer_count,
        "min_credential_length": container.settings.min_credential_length,
    }


def serve(container: Container, host: str, port: int) -> None:
    import uvicorn

    from todo_bridge.adapters.fastapi import create_app

    uvicorn.run(create_app(container), host=host, port=port, log_config=None)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings(args.env_file)
    except ConfigError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return 2
    JsonLoggerFactory.configure(args.log_level or settings.log_level, json=settings.log_json)

    if args.command == "stats":
        container = build_container(settings, with_broker=False)
        print(json.dumps(stats(container), indent=2))
        return 0

    if args.command == "serve":
        serve(build_container(settings, with_broker=not args.no_consumers), args.host, args.port)
        return 0

    try:
        asyncio.run(run_worker(build_container(settings)))
    except TransportError as exc:
        logger.error("worker_failed", error=exc.message, error_code=exc.code)
        return 1
    return 0


__all__ = ["load_settings", "main", "parse_args", "run_worker", "stats"]
