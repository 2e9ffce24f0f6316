from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from typing import Sequence

import aiohttp
import structlog
import uvloop
from pydantic import ValidationError

from lifxctl import __version__
from lifxctl.commands import build_desired_state, list_lights, set_lights
from lifxctl.errors import LifxError
from lifxctl.lifx import LifxCloud
from lifxctl.logging_conf import configure_logging
from lifxctl.settings import Settings, load_log_settings, load_settings

logger = structlog.getLogger(__name__)

# Anything in here aborts the run with exit code 1
FATAL_ERRORS = (
    LifxError,
    aiohttp.ClientError,
    asyncio.TimeoutError,
    json.JSONDecodeError,
    ValidationError,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lifxctl", description="Control the LIFX bulbs on your account")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        default=os.environ.get("LIFX_CONFIG_FILE"),
        help="YAML settings file (default: $LIFX_CONFIG_FILE)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="{list,set}")
    subparsers.add_parser("list", help="Lists all available lights")

    set_parser = subparsers.add_parser("set", help="Updates state of one or more lights")
    set_parser.add_argument("--on", action="store_true", help="turn the lights on (wins over --off)")
    set_parser.add_argument("--off", action="store_true", help="turn the lights off")
    set_parser.add_argument("-c", "--colour", "--color", dest="colour", help='LIFX colour, e.g. "red" or "kelvin:4000"')
    set_parser.add_argument("-b", "--brightness", help="brightness from 0.0 to 1.0")
    set_parser.add_argument(
        "-s",
        "--selector",
        help="only lights whose label or group contains this text (default: every light, in one request)",
    )
    return parser


async def main(args: argparse.Namespace, settings: Settings) -> None:
    state = None
    if args.command == "set":
        state = build_desired_state(on=args.on, off=args.off, brightness=args.brightness, colour=args.colour)

    async with LifxCloud(
        access_token=settings.lifx.token,
        api_url=settings.lifx.api_url,
        timeout=settings.lifx.timeout,
    ) as cloud:
        lights = await cloud.get_lights()

        if args.command == "list":
            list_lights(lights)
        elif state is not None:
            await set_lights(cloud, lights, state, selector=args.selector)


def _run_async(coro) -> None:
    if sys.version_info >= (3, 11):
        with asyncio.Runner(loop_factory=uvloop.new_event_loop) as runner:
            runner.run(coro)
    else:
        event_loop = uvloop.new_event_loop()
        try:
            event_loop.run_until_complete(coro)
        finally:
            event_loop.close()


def run(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    configure_logging()
    try:
        log_settings = load_log_settings(args.config)
        configure_logging(log_settings.level, console_colors=log_settings.colors)
        settings = load_settings(args.config)
        _run_async(main(args, settings))
    except FATAL_ERRORS as e:
        logger.error("Command failed", command=args.command, error=str(e), error_type=type(e).__name__)
        logger.debug("Failure details", exc_info=e)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit("\nTerminated!\n")
