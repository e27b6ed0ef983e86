"""
Tests for the servo actuator abstraction.
"""

import pytest

from robocar.actuators import Servo, ServoConfig, ServoType, acceleration_servo, steering_servo

from conftest import FakeBoard


class TestServoConfig:

    def test_center_overrides_start(self):
        config = ServoConfig("steering", pin=10, range=(40, 100), start_at=75, center=True)
        assert config.initial_position == 70

    def test_start_at(self):
        config = ServoConfig("acceleration", pin=9, range=(0, 180), start_at=90)
        assert config.initial_position == 90

    def test_no_initial_position(self):
        assert ServoConfig("x", pin=3).initial_position is None

    def test_inverted_range_rejected(self):
        with pytest.raises(ValueError):
            ServoConfig("x", pin=3, range=(100, 40))

    def test_immutable(self):
        config = ServoConfig("x", pin=3)
        with pytest.raises(AttributeError):
            config.pin = 4

    def test_defaults_from_config(self):
        assert acceleration_servo().pin == 9
        assert acceleration_servo().range == (0, 180)
        assert steering_servo().range == (40, 100)
        assert steering_servo().type == ServoType.STANDARD


class TestServo:

    def setup_method(self):
        self.board = FakeBoard()
        self.servo = Servo(ServoConfig("steering", pin=10, range=(40, 100), center=True), self.board)

    def test_attach_moves_to_initial_position(self):
        self.servo.attach()
        assert self.board.attached == [10]
        assert self.board.writes == [(10, 70)]
        assert self.servo.position == 70

    def test_move_in_range(self):
        assert self.servo.move_to(55) == 55
        assert self.board.writes == [(10, 55)]

    def test_move_clamps(self):
        assert self.servo.move_to(5) == 40
        assert self.servo.move_to(500) == 100
        assert self.board.writes == [(10, 40), (10, 100)]
        assert self.servo.position == 100

    def test_to_dict(self):
        self.servo.move_to(60)
        assert self.servo.to_dict() == {
            "pin": 10,
            "range": [40, 100],
            "type": "standard",
            "position": 60,
        }
