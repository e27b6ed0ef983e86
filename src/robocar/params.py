"""
Named command values with JSON overrides.

The values are calibration for a particular car: which servo angle means
"forward", where the steering is straight, how long a throttle pulse lasts.
They are loaded once at startup and shared read-only afterwards.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

PARAMS_FILE = Path(__file__).parent / "params.json"


@dataclass
class Parameters:
    """Symbolic command values."""

    # Throttle
    forward: int = 65
    reverse: int = 105
    stop: int = 90
    throttle_time: int = 500  # ms a throttle command lasts without a duration token

    # Steering
    left: int = 40
    right: int = 100
    neutral: int = 75

    def update(self, **kwargs):
        """Update parameters from dict (e.g., from the JSON file)."""
        for key, value in kwargs.items():
            if hasattr(self, key):
                expected_type = type(getattr(self, key))
                try:
                    setattr(self, key, expected_type(value))
                except (TypeError, ValueError):
                    logger.warning(f"Invalid value for {key}: {value}")
            else:
                logger.warning(f"Unknown parameter {key}, ignoring")

    @classmethod
    def load(cls, path: Path = PARAMS_FILE) -> Parameters:
        """Load from JSON file, or return defaults."""
        path = Path(path)
        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
                params = cls()
                params.update(**data)
                logger.info(f"Parameters loaded from {path}")
                return params
            except Exception as e:
                logger.warning(f"Failed to load {path}: {e}, using defaults")
        return cls()

    def named_values(self) -> Mapping[str, int]:
        """Lookup table for command tokens, keyed by the token itself."""
        return MappingProxyType({
            "forward": self.forward,
            "reverse": self.reverse,
            "stop": self.stop,
            "throttleTime": self.throttle_time,
            "left": self.left,
            "right": self.right,
            "neutral": self.neutral,
        })

    def to_dict(self) -> dict:
        """Convert to dict for JSON API."""
        return asdict(self)
