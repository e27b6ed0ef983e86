"""
Command dispatcher - turns command strings into servo moves and mode changes.

Each command is evaluated on its own against the current ServerStatus:
- no actuator link: ignored
- manual throttle: move throttle, (re)arm the safety timer
- manual turn: move steering
- face / red: set the advertised AI mode
- anything else: stop (steering neutral, throttle stop)
"""

from __future__ import annotations

import logging
from typing import Optional

from .commands import (
    AIModeCommand,
    Command,
    CommandError,
    StopCommand,
    ThrottleCommand,
    TurnCommand,
    parse_command,
    split_command,
)
from .context import RobotContext
from .safety_timer import SafetyTimer

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """
    Core command state machine.

    Usage:
        dispatcher = CommandDispatcher(context)
        dispatcher.dispatch("manual-throttle-forward-1000")
    """

    def __init__(self, context: RobotContext):
        self.context = context
        self.throttle_timer = SafetyTimer(self._throttle_timeout)
        self._positions: dict = {}

    @property
    def positions(self) -> dict:
        """Servo positions as of the last actuator change."""
        return self._positions

    def dispatch(self, command: str) -> Optional[Command]:
        """
        Execute a raw command string.

        Returns:
            The executed command, or None if it was ignored
        """
        logger.info(f"Command: {split_command(command)}")

        if not self.context.status.has_actuator_link:
            logger.debug("No actuator link, command ignored")
            return None

        try:
            parsed = parse_command(
                command,
                self.context.named_values,
                self.context.named_values["throttleTime"],
            )
        except CommandError as e:
            logger.warning(f"Ignoring command {command!r}: {e}")
            return None

        self.execute(parsed)
        return parsed

    def execute(self, command: Command):
        """Apply a parsed command."""
        status = self.context.status

        if isinstance(command, ThrottleCommand):
            self.throttle_timer.arm(command.duration_ms)
            self.context.throttle.move_to(command.value)
            self._inspect()

        elif isinstance(command, TurnCommand):
            self.context.steering.move_to(command.value)
            self._inspect()

        elif isinstance(command, AIModeCommand):
            status.current_ai = command.mode
            logger.info(f"AI mode: {command.mode.value}")

        elif isinstance(command, StopCommand):
            self.stop_all()

    def stop_all(self):
        """Steering to neutral, throttle to stop, no pending timeout."""
        if not self.context.status.has_actuator_link:
            return
        self.throttle_timer.cancel()
        self.context.steering.move_to(self.context.named_values["neutral"])
        self.context.throttle.move_to(self.context.named_values["stop"])
        self._inspect()

    def _throttle_timeout(self):
        self.context.throttle.move_to(self.context.named_values["stop"])
        self._inspect()

    def _inspect(self):
        """Refresh the read-only position snapshot."""
        self._positions = self.context.snapshot()
        logger.debug(f"Servos: {self._positions}")
