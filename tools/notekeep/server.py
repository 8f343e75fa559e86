#!/usr/bin/env python3
"""notekeep server: aiohttp entry point for the auth and notes API.

Usage:
    notekeep-server --config .notekeep/config.json
    notekeep-server --config .notekeep/config.json --log-level DEBUG
    notekeep-server --test-mode --config tools/config.json.example
"""

import argparse
import asyncio
import logging
import signal
import sys

from aiohttp import web

from .config import DEFAULT_CONFIG_PATH, ConfigError, Settings, load_config
from .events import configure_event_log, log_event
from .web import build_app

logger = logging.getLogger("notekeep.server")


async def run_server(settings: Settings, test_mode: bool = False) -> None:
    """Serve the API until SIGINT/SIGTERM.

    Args:
        settings: Loaded configuration
        test_mode: If True, build the app, report the config and exit
    """
    app = build_app(settings)

    if test_mode:
        print("notekeep server: test mode")
        print(f"  Users file: {settings.users_path}")
        print(f"  Notes file: {settings.notes_path}")
        print(f"  Listen: {settings.host}:{settings.port}")
        print("Config valid. Exiting test mode.")
        return

    shutdown_event = asyncio.Event()

    def signal_handler():
        logger.info("Shutdown signal received")
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, settings.host, settings.port)
    try:
        await site.start()
        logger.info(f"Server is running at http://{settings.host}:{settings.port}")
        logger.info(f"Using file persistence under {settings.data_dir}")
        log_event(
            "server_started",
            component="server",
            host=settings.host,
            port=settings.port,
            data_dir=str(settings.data_dir),
        )

        await shutdown_event.wait()
    finally:
        logger.info("Shutting down...")
        log_event("server_stopped", component="server")
        await runner.cleanup()
        logger.info("Server offline")


def main():
    parser = argparse.ArgumentParser(
        prog="notekeep-server",
        description="notekeep: note-taking backend with JSON file storage",
        usage="%(prog)s [options]",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to config.json (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--test-mode",
        "-t",
        action="store_true",
        help="Validate config and exit without starting",
    )
    parser.add_argument(
        "--log-level",
        "-l",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        settings = load_config(args.config)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    configure_event_log(settings.event_log)

    try:
        asyncio.run(run_server(settings, test_mode=args.test_mode))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
