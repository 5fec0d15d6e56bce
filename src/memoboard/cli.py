"""
CLI entry point.

Commands:
- serve: Start the HTTP API
- init: Initialize data directory (and SQLite schema)
- health: Check store connectivity
- token <email>: Issue a dev session token (SQLite backend only)

Flags:
- --debug: Enable debug logging to file
"""

import asyncio
import logging
import sys

from memoboard.core.config import Settings, get_settings
from memoboard.core.logging import get_logger, setup_logging
from memoboard.store.factory import build_backend
from memoboard.store.sqlite import SQLiteStore

USAGE = """Usage: memoboard [--debug] <command>
Commands: serve, init, health, token <email>
Flags: --debug (enable debug logging to data/memoboard.log)"""


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = list(sys.argv[1:] if argv is None else argv)
    settings = get_settings()

    debug_mode = "--debug" in args
    if debug_mode:
        args.remove("--debug")

    log_level = logging.DEBUG if debug_mode else logging.INFO
    log_file = settings.data_dir / "memoboard.log"
    setup_logging(level=log_level, log_file=log_file)
    logger = get_logger("cli")

    logger.info(f"Logging to {log_file}" + (" (debug mode)" if debug_mode else ""))

    if not args:
        print(USAGE)
        return 1

    command = args[0]

    if command == "serve":
        return _serve(settings)

    if command == "init":
        return asyncio.run(_init(settings))

    if command == "health":
        return asyncio.run(_health_check(settings))

    if command == "token":
        if len(args) < 2:
            print("Usage: memoboard token <email>")
            return 1
        return asyncio.run(_issue_token(settings, args[1]))

    print(f"Unknown command: {command}")
    return 1


def _serve(settings: Settings) -> int:
    """Run the API under uvicorn."""
    import uvicorn

    from memoboard.api.app import create_app

    logger = get_logger("cli.serve")
    if not settings.store_configured:
        logger.warning("Store is not configured; data endpoints will return 500")

    logger.info(f"Listening on http://{settings.host}:{settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)
    return 0


async def _init(settings: Settings) -> int:
    """Create the data directory, and the schema when using SQLite."""
    logger = get_logger("cli.init")
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Initialized data directory: {settings.data_dir}")
    print(f"Created: {settings.data_dir}")

    if settings.store_backend == "sqlite":
        store = SQLiteStore(settings.db_path)
        await store.connect()
        await store.close()
        print(f"Schema ready: {settings.db_path}")
    return 0


async def _health_check(settings: Settings) -> int:
    """Check that the configured store answers."""
    backend = build_backend(settings)
    if backend is None:
        print(f"✗ store ({settings.store_backend}): not configured")
        return 1

    try:
        await backend.connect()
        healthy = await backend.health_check()
    finally:
        await backend.close()

    print(f"{'✓' if healthy else '✗'} store ({settings.store_backend}): {'OK' if healthy else 'unreachable'}")
    return 0 if healthy else 1


async def _issue_token(settings: Settings, email: str) -> int:
    """Create a SQLite session and print its bearer token."""
    if settings.store_backend != "sqlite":
        print("Tokens can only be issued with the sqlite backend")
        return 1

    store = SQLiteStore(settings.db_path)
    await store.connect()
    try:
        token = await store.create_session(email)
    finally:
        await store.close()
    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
