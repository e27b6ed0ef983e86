import pytest

from robocar.control import CommandDispatcher, RobotContext
from robocar.params import Parameters


class FakeBoard:
    """Records what would go over the serial link."""

    def __init__(self) -> None:
        self.attached: list[int] = []
        self.writes: list[tuple[int, int]] = []
        self._ready_callbacks = []

    def on_ready(self, callback):
        self._ready_callbacks.append(callback)

    def connect(self) -> bool:
        for callback in self._ready_callbacks:
            callback()
        return True

    def attach(self, config) -> None:
        self.attached.append(config.pin)

    def write(self, pin: int, value: int) -> None:
        self.writes.append((pin, value))


@pytest.fixture
def board():
    return FakeBoard()


@pytest.fixture
def context(board):
    """Context with the board link up."""
    context = RobotContext(Parameters(), board=board)
    board.connect()
    board.writes.clear()
    return context


@pytest.fixture
def dispatcher(context):
    return CommandDispatcher(context)
