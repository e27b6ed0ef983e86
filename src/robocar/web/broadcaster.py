"""
Status broadcaster - relays "robot update" reports to the other observers.

Observers are WebSocket connections (browser UI, vision process). An update
from one of them is merged with what the server knows and fanned out to
everyone else; the sender never gets its own update back.
"""

import logging

from aiohttp import web

from ..control.status import ServerStatus

logger = logging.getLogger(__name__)

STATUS_EVENT = "robot status"
CONNECTED_MESSAGE = "server connected"
ACTUATOR_LINK_KEY = "Arduino Attached"


class StatusBroadcaster:
    """Fan-out of status reports to connected WebSocket observers."""

    def __init__(self, status: ServerStatus):
        self.status = status
        self._observers: set[web.WebSocketResponse] = set()

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    async def connect(self, ws: web.WebSocketResponse):
        """Greet an observer, then register it for broadcasts."""
        await ws.send_json({"event": STATUS_EVENT, "data": CONNECTED_MESSAGE})
        self._observers.add(ws)

    def disconnect(self, ws: web.WebSocketResponse):
        self._observers.discard(ws)

    def merge(self, update: dict) -> dict:
        """Overlay server-known flags on a reported status."""
        merged = dict(update)
        merged[ACTUATOR_LINK_KEY] = self.status.has_actuator_link
        return merged

    async def broadcast(self, sender, update):
        """Send a merged update to every observer except the sender."""
        if not isinstance(update, dict):
            logger.warning(f"Dropping status update that is not an object: {update!r}")
            return

        message = {"event": STATUS_EVENT, "data": self.merge(update)}
        for ws in list(self._observers):
            if ws is sender:
                continue
            if ws.closed:
                self._observers.discard(ws)
                continue
            try:
                await ws.send_json(message)
            except (ConnectionResetError, ConnectionAbortedError) as e:
                logger.warning(f"Dropping observer: {e}")
                self._observers.discard(ws)
