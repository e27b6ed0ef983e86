"""
Web Layer - remote control interface.

Provides:
- Control page and static UI
- HTTP command endpoint
- WebSocket command/status channel
"""

from .broadcaster import StatusBroadcaster
from .server import create_app, run_server

__all__ = ["StatusBroadcaster", "create_app", "run_server"]
