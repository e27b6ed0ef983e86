"""
Control Layer - command interpretation and actuator safety.
"""

from .commands import CommandError, parse_command, split_command
from .context import RobotContext
from .dispatcher import CommandDispatcher
from .safety_timer import SafetyTimer
from .status import AIMode, ServerStatus

__all__ = [
    "AIMode",
    "CommandDispatcher",
    "CommandError",
    "RobotContext",
    "SafetyTimer",
    "ServerStatus",
    "parse_command",
    "split_command",
]
