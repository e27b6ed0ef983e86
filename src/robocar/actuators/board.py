"""
Servo board link - Arduino communication.

Handles:
- Attaching servos (pin, range, type) on the board
- Sending servo positions
- Draining board status/error lines
- Notifying listeners once the link is ready
"""

from __future__ import annotations

import logging
from typing import Callable

import serial

from ..config import (
    SERVO_BOARD_BAUDRATE,
    SERVO_BOARD_MAX_LINES,
    SERVO_BOARD_PORT,
    SERVO_BOARD_WRITE_TIMEOUT,
)
from .servo import ServoConfig

logger = logging.getLogger(__name__)


class ServoBoard:
    """
    Arduino servo board communication.

    Protocol:
        Commands (Pi -> board):
            A:<pin>,<min>,<max>,<type>\\n  - attach servo
            W:<pin>,<value>\\n            - write servo position

        Status (board -> Pi):
            E:<error_code>\\n
            anything else is informational
    """

    def __init__(self, port: str = SERVO_BOARD_PORT, baudrate: int = SERVO_BOARD_BAUDRATE):
        self.port = port
        self.baudrate = baudrate

        self._serial: serial.Serial | None = None
        self._connected = False
        self._ready_callbacks: list[Callable[[], None]] = []

    @property
    def is_connected(self) -> bool:
        return self._connected

    def on_ready(self, callback: Callable[[], None]):
        """Register a callback fired once the serial link is open."""
        self._ready_callbacks.append(callback)

    def connect(self) -> bool:
        """Open serial connection to the board."""
        try:
            self._serial = serial.Serial(
                port=self.port,
                baudrate=self.baudrate,
                timeout=0.005,
                write_timeout=SERVO_BOARD_WRITE_TIMEOUT,
            )
        except serial.SerialException as e:
            logger.error(f"Failed to connect to servo board: {e}")
            self._connected = False
            return False

        self._connected = True
        logger.info(f"Connected to servo board on {self.port}")
        for callback in self._ready_callbacks:
            callback()
        return True

    def disconnect(self):
        """Close serial connection."""
        if self._serial:
            self._serial.close()
            self._serial = None
        self._connected = False
        logger.info("Disconnected from servo board")

    def attach(self, config: ServoConfig):
        self._send(f"A:{config.pin},{config.min},{config.max},{config.type.value}")

    def write(self, pin: int, value: int):
        self._send(f"W:{pin},{value}")

    def update(self) -> bool:
        """
        Read one status line from the board (non-blocking).

        Returns:
            True if a line was received
        """
        if not self._serial:
            return False

        try:
            if not self._serial.in_waiting:
                return False
            line = self._serial.readline().decode(errors="ignore").strip()
        except serial.SerialException as e:
            logger.error(f"Error reading servo board status: {e}")
            return False

        if line.startswith("E:"):
            logger.error(f"Servo board error: {line[2:]}")
        elif line:
            logger.debug(f"Board: {line}")
        return True

    def drain(self, max_lines: int = SERVO_BOARD_MAX_LINES) -> int:
        """
        Read up to max_lines pending status lines.

        Returns:
            Number of lines read
        """
        count = 0
        while count < max_lines and self.update():
            count += 1
        return count

    def _send(self, command: str):
        if not self._serial:
            logger.warning("Not connected to servo board")
            return

        try:
            self._serial.write(f"{command}\n".encode())
        except serial.SerialException as e:
            logger.error(f"Failed to send {command!r} to servo board: {e}")
            return
        logger.debug(f"Sent: {command}")
