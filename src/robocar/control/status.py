"""
Server status - what the controller knows about its links and AI mode.
"""

from dataclasses import dataclass
from enum import Enum


class AIMode(Enum):
    """Vision mode advertised to the AI subsystem."""

    NONE = "none"
    UPPER_BODY = "upper_body"
    RED = "red"


@dataclass
class ServerStatus:
    """Process-wide link and AI mode state."""

    has_actuator_link: bool = False
    has_sensor_link: bool = False
    current_ai: AIMode = AIMode.NONE

    def to_dict(self) -> dict:
        return {
            "has_actuator_link": self.has_actuator_link,
            "has_sensor_link": self.has_sensor_link,
            "current_ai": self.current_ai.value,
        }
