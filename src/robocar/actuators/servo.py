"""
Servo actuator - one degree of freedom (throttle or steering).

Handles:
- Range clamping before anything reaches the board
- Initial position (explicit start or center of range)
- Current position for introspection
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from ..config import (
    ACCELERATION_CENTER,
    ACCELERATION_PIN,
    ACCELERATION_RANGE,
    ACCELERATION_START,
    ACCELERATION_TYPE,
    STEERING_CENTER,
    STEERING_PIN,
    STEERING_RANGE,
    STEERING_START,
    STEERING_TYPE,
)

logger = logging.getLogger(__name__)


class ServoType(Enum):
    """Servo kind as understood by the board firmware."""

    STANDARD = "standard"
    CONTINUOUS = "continuous"


@dataclass(frozen=True)
class ServoConfig:
    """Static servo wiring and limits."""

    name: str
    pin: int
    range: tuple[int, int] = (0, 180)
    type: ServoType = ServoType.STANDARD
    start_at: Optional[int] = None
    center: bool = False

    def __post_init__(self):
        low, high = self.range
        if low > high:
            raise ValueError(f"Servo {self.name}: range min {low} > max {high}")

    @property
    def min(self) -> int:
        return self.range[0]

    @property
    def max(self) -> int:
        return self.range[1]

    @property
    def initial_position(self) -> Optional[int]:
        """Where the servo goes on attach, or None to leave it alone."""
        if self.center:
            return (self.min + self.max) // 2
        if self.start_at is not None:
            return self.clamp(self.start_at)
        return None

    def clamp(self, value: int) -> int:
        return max(self.min, min(self.max, value))


class ServoDriver(Protocol):
    """What a Servo needs from the hardware link."""

    def attach(self, config: ServoConfig) -> None: ...

    def write(self, pin: int, value: int) -> None: ...


class Servo:
    """
    A single servo on the board.

    Out-of-range requests are clamped to the configured range and logged;
    the board never sees a value outside it.
    """

    def __init__(self, config: ServoConfig, driver: ServoDriver):
        self.config = config
        self.driver = driver
        self._position: Optional[int] = None

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def position(self) -> Optional[int]:
        return self._position

    def attach(self):
        """Register with the board and move to the initial position."""
        self.driver.attach(self.config)
        initial = self.config.initial_position
        if initial is not None:
            self.move_to(initial)
        logger.info(f"Servo {self.name} attached on pin {self.config.pin} at {self._position}")

    def move_to(self, value: int) -> int:
        """
        Move to value, clamped into the configured range.

        Returns:
            The position actually sent to the board
        """
        clamped = self.config.clamp(value)
        if clamped != value:
            logger.warning(
                f"Servo {self.name}: {value} outside {self.config.range}, clamped to {clamped}"
            )
        self._position = clamped
        self.driver.write(self.config.pin, clamped)
        return clamped

    def to_dict(self) -> dict:
        return {
            "pin": self.config.pin,
            "range": list(self.config.range),
            "type": self.config.type.value,
            "position": self._position,
        }


def acceleration_servo() -> ServoConfig:
    """Throttle servo from config."""
    return ServoConfig(
        name="acceleration",
        pin=ACCELERATION_PIN,
        range=ACCELERATION_RANGE,
        type=ServoType(ACCELERATION_TYPE),
        start_at=ACCELERATION_START,
        center=ACCELERATION_CENTER,
    )


def steering_servo() -> ServoConfig:
    """Steering servo from config."""
    return ServoConfig(
        name="steering",
        pin=STEERING_PIN,
        range=STEERING_RANGE,
        type=ServoType(STEERING_TYPE),
        start_at=STEERING_START,
        center=STEERING_CENTER,
    )
