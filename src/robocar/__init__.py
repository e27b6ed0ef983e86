"""
RC car controller.

Drives a steering and a throttle servo from commands received over HTTP or
WebSocket, with an automatic throttle timeout.
"""

__version__ = "0.1.0"
