"""
Command parsing.

Commands are hyphen-delimited positional tokens, category first:

    manual-throttle-<value>[-<duration>]
    manual-turn-<value>
    face-<begin|...>
    red-<begin|...>
    <anything else>          -> stop

Values are either a named token ("forward", "left", ...) or an integer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Union

from ..config import MAX_THROTTLE_MS
from .status import AIMode

SEPARATOR = "-"


class CommandError(Exception):
    """A command that cannot be executed."""


class UnknownCommandError(CommandError):
    """Too few tokens or an unknown action for the category."""


class InvalidValueError(CommandError):
    """A value token that is neither a named value nor an integer."""


@dataclass(frozen=True)
class ThrottleCommand:
    value: int
    duration_ms: int


@dataclass(frozen=True)
class TurnCommand:
    value: int


@dataclass(frozen=True)
class AIModeCommand:
    mode: AIMode


@dataclass(frozen=True)
class StopCommand:
    pass


Command = Union[ThrottleCommand, TurnCommand, AIModeCommand, StopCommand]


def split_command(command: str) -> list[str]:
    """Split a raw command into its tokens. No validation."""
    return command.split(SEPARATOR)


def resolve_value(token: str, named_values: Mapping[str, int]) -> int:
    """Look up a named value, falling back to a base-10 integer."""
    if token in named_values:
        return named_values[token]
    if not (token.isascii() and token.isdigit()):
        raise InvalidValueError(f"'{token}' is not a named value or an integer")
    try:
        return int(token)
    except ValueError:
        # Past the interpreter's digit limit
        raise InvalidValueError(f"'{token[:20]}...' is too long") from None


def parse_command(
    command: str, named_values: Mapping[str, int], default_duration_ms: int
) -> Command:
    """
    Parse a raw command string into a typed command.

    Args:
        command: Raw command, e.g. "manual-throttle-forward-1000"
        named_values: Symbolic token lookup table
        default_duration_ms: Throttle duration when none is given

    Raises:
        UnknownCommandError: malformed manual command
        InvalidValueError: unresolvable value or duration
    """
    tokens = split_command(command)
    category = tokens[0]

    if category == "manual":
        return _parse_manual(tokens, named_values, default_duration_ms)
    if category == "face":
        return AIModeCommand(_ai_mode(tokens, AIMode.UPPER_BODY))
    if category == "red":
        return AIModeCommand(_ai_mode(tokens, AIMode.RED))
    return StopCommand()


def _parse_manual(tokens, named_values, default_duration_ms) -> Command:
    if len(tokens) < 2:
        raise UnknownCommandError("manual command without an action")

    action = tokens[1]
    if action not in ("throttle", "turn"):
        raise UnknownCommandError(f"unknown manual action '{action}'")
    if len(tokens) < 3:
        raise UnknownCommandError(f"manual {action} without a value")

    value = resolve_value(tokens[2], named_values)
    if action == "turn":
        return TurnCommand(value)

    if len(tokens) < 4:
        duration = default_duration_ms
    else:
        duration = resolve_value(tokens[3], named_values)
    if duration <= 0:
        # Zero would leave the throttle running with no timeout
        raise InvalidValueError(f"throttle duration must be positive, got {duration}")
    if duration > MAX_THROTTLE_MS:
        raise InvalidValueError(f"throttle duration {duration} over {MAX_THROTTLE_MS} ms")
    return ThrottleCommand(value, duration)


def _ai_mode(tokens, begin_mode: AIMode) -> AIMode:
    if len(tokens) > 1 and tokens[1] == "begin":
        return begin_mode
    return AIMode.NONE
