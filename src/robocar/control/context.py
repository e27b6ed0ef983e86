"""
Robot context - the state the dispatcher works against.

Owns:
- ServerStatus (link flags, AI mode)
- Named value table (read-only)
- Servo board and the servos attached to it
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..actuators import Servo, ServoBoard, acceleration_servo, steering_servo
from ..actuators.servo import ServoConfig
from ..params import Parameters
from .status import ServerStatus

logger = logging.getLogger(__name__)


class RobotContext:
    """
    Shared controller state.

    Usage:
        context = RobotContext(Parameters.load(), board=ServoBoard())
        board.connect()  # fires the ready callback, servos attach
    """

    def __init__(
        self,
        params: Parameters,
        board: Optional[ServoBoard] = None,
        servo_configs: Optional[list[ServoConfig]] = None,
    ):
        """
        Args:
            params: Named values for command tokens
            board: Servo board, or None to run without actuators
            servo_configs: Override the servos from config (tests)
        """
        self.params = params
        self.named_values: Mapping[str, int] = params.named_values()
        self.status = ServerStatus()
        self.board = board
        self.servos: dict[str, Servo] = {}
        self._servo_configs = servo_configs or [acceleration_servo(), steering_servo()]

        if board is not None:
            board.on_ready(self._on_board_ready)
        else:
            logger.info("No servo board, actuator subsystem disabled")

    @property
    def throttle(self) -> Servo:
        return self.servos["acceleration"]

    @property
    def steering(self) -> Servo:
        return self.servos["steering"]

    def _on_board_ready(self):
        """Board link is up: attach servos and advertise the link."""
        self.servos = {
            config.name: Servo(config, self.board) for config in self._servo_configs
        }
        for servo in self.servos.values():
            servo.attach()
        self.status.has_actuator_link = True
        logger.info("Actuator link ready")

    def snapshot(self) -> dict:
        """Servo positions for introspection."""
        return {name: servo.to_dict() for name, servo in self.servos.items()}
