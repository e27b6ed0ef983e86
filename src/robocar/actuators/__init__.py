"""
Actuator Layer - Hardware interfaces.

Provides:
- Servo: one clamped degree of freedom (throttle or steering)
- ServoBoard: serial link to the Arduino driving the servos
"""

from .board import ServoBoard
from .servo import Servo, ServoConfig, ServoType, acceleration_servo, steering_servo

__all__ = [
    "Servo",
    "ServoBoard",
    "ServoConfig",
    "ServoType",
    "acceleration_servo",
    "steering_servo",
]
