"""
Throttle safety timer.

Every throttle command arms a single-shot timer that puts the throttle back
to stop. A new throttle command replaces the pending timer, so the car only
keeps moving while commands keep arriving.

Runs on the asyncio event loop; arm/cancel/fire never interleave.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class SafetyTimer:
    """At most one pending deferred stop."""

    def __init__(self, on_expire: Callable[[], None]):
        """
        Args:
            on_expire: Called on the event loop when the timer runs out
        """
        self._on_expire = on_expire
        self._handle: Optional[asyncio.TimerHandle] = None
        self._generation = 0
        self._duration_ms: Optional[int] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def duration_ms(self) -> Optional[int]:
        """Duration of the pending timer, None when idle."""
        return self._duration_ms if self._handle is not None else None

    def arm(self, duration_ms: int):
        """
        Replace any pending timer with one firing after duration_ms.

        If the delay cannot be computed the pending timer is left in place.
        """
        delay = duration_ms / 1000.0
        loop = asyncio.get_running_loop()
        self.cancel()
        self._generation += 1
        self._duration_ms = duration_ms
        self._handle = loop.call_later(delay, self._fire, self._generation)
        logger.debug(f"Safety timer armed for {duration_ms} ms")

    def cancel(self):
        """Drop the pending timer, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            logger.debug("Safety timer cancelled")

    def _fire(self, generation: int):
        # A superseded handle that slipped through cancel() must not stop the car
        if generation != self._generation or self._handle is None:
            return
        self._handle = None
        logger.info(f"Throttle timeout after {self._duration_ms} ms, stopping")
        self._on_expire()
