#!/usr/bin/env python3
"""
RC car controller - Main Entry Point

Usage:
    robocar                  # Run with the servo board attached
    robocar --no-arduino     # Run the web interface without hardware
"""

import argparse
import asyncio
import logging
from pathlib import Path

from .actuators import ServoBoard
from .config import SERVO_BOARD_POLL_S, SERVO_BOARD_PORT, WEB_HOST, WEB_PORT
from .control import CommandDispatcher, RobotContext
from .params import PARAMS_FILE, Parameters
from .web import run_server

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="RC Car Controller")
    parser.add_argument(
        "--no-arduino",
        action="store_true",
        help="Skip the servo board entirely (no actuator effects)",
    )
    parser.add_argument(
        "--serial-port",
        default=SERVO_BOARD_PORT,
        help="Serial port of the servo board",
    )
    parser.add_argument("--host", default=WEB_HOST, help="Web server bind address")
    parser.add_argument("--port", type=int, default=WEB_PORT, help="Web server port")
    parser.add_argument(
        "--params",
        type=Path,
        default=PARAMS_FILE,
        help="JSON file overriding the named command values",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace):
    """Connect the board, serve until cancelled, then park the car."""
    board = None if args.no_arduino else ServoBoard(port=args.serial_port)
    context = RobotContext(Parameters.load(args.params), board=board)
    dispatcher = CommandDispatcher(context)

    if board is not None and not board.connect():
        logger.warning("Running without actuator link; commands will be ignored")

    runner = await run_server(context, dispatcher, host=args.host, port=args.port)
    logger.info("Press Ctrl+C to stop")
    try:
        while True:
            if board is not None and board.is_connected:
                board.drain()
            await asyncio.sleep(SERVO_BOARD_POLL_S)
    except asyncio.CancelledError:
        pass
    finally:
        await runner.cleanup()
        if board is not None:
            board.disconnect()


def main():
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)

    logger.info("RC car controller starting...")
    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.info("Stopped")


if __name__ == "__main__":
    main()
