"""
Web server - aiohttp application for the remote control interface.
"""

import json
import logging
from pathlib import Path

from aiohttp import web

from ..config import WEB_HOST, WEB_PORT
from ..control import CommandDispatcher, RobotContext
from .broadcaster import StatusBroadcaster

logger = logging.getLogger(__name__)

# Path to static files and templates
WEB_DIR = Path(__file__).parent
STATIC_DIR = WEB_DIR / "static"
TEMPLATES_DIR = WEB_DIR / "templates"

COMMAND_EVENT = "robot command"
UPDATE_EVENT = "robot update"


class WebServer:
    """
    Remote control server.

    Provides:
    - Control page
    - Command endpoint (HTTP)
    - Pub/sub WebSocket for commands and status relay
    - Read-only status, servo and parameter queries
    """

    def __init__(self, context: RobotContext, dispatcher: CommandDispatcher):
        self.context = context
        self.dispatcher = dispatcher
        self.broadcaster = StatusBroadcaster(context.status)
        self.app = web.Application()
        self._setup_routes()
        self.app.on_shutdown.append(self._on_shutdown)

    def _setup_routes(self):
        """Configure routes."""
        # Pages
        self.app.router.add_get("/", self.index)

        # Commands
        self.app.router.add_get("/command", self.command)
        self.app.router.add_get("/command/", self.command)

        # API
        self.app.router.add_get("/api/status", self.api_status)
        self.app.router.add_get("/api/servos", self.api_servos)
        self.app.router.add_get("/api/params", self.api_params)

        # WebSocket
        self.app.router.add_get("/ws", self.ws_robot)

        # Static files
        if STATIC_DIR.exists():
            self.app.router.add_static("/static", STATIC_DIR)

    async def index(self, request):
        """Control page."""
        html = self._render_template("index.html")
        return web.Response(text=html, content_type="text/html")

    async def command(self, request):
        """GET /command?command=... - dispatch, always acknowledge."""
        command = request.query.get("command")
        if command is None:
            logger.warning("Command request without a command parameter")
            return web.Response(text="command: ")

        self.dispatcher.dispatch(command)
        return web.Response(text=f"command: {command}")

    async def api_status(self, request):
        """Get current server status."""
        return web.json_response(self.context.status.to_dict())

    async def api_servos(self, request):
        """Servo positions as of the last actuator change."""
        return web.json_response(self.dispatcher.positions)

    async def api_params(self, request):
        """Named values used to resolve command tokens."""
        return web.json_response(self.context.params.to_dict())

    async def ws_robot(self, request):
        """WebSocket pub/sub: robot command / robot update in, robot status out."""
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        logger.info("Robot WebSocket connected")
        await self.broadcaster.connect(ws)

        try:
            async for msg in ws:
                if msg.type == web.WSMsgType.TEXT:
                    await self._handle_message(ws, msg.data)
                elif msg.type == web.WSMsgType.ERROR:
                    logger.error(f"Robot WebSocket error: {ws.exception()}")
        finally:
            self.broadcaster.disconnect(ws)
            logger.info("Robot WebSocket disconnected")

        return ws

    async def _handle_message(self, ws, raw: str):
        try:
            message = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid WebSocket message: {e}")
            return
        if not isinstance(message, dict):
            logger.warning(f"Invalid WebSocket message: {raw!r}")
            return

        event = message.get("event")
        data = message.get("data")

        if event == COMMAND_EVENT:
            if isinstance(data, str):
                self.dispatcher.dispatch(data)
            else:
                logger.warning(f"Robot command is not a string: {data!r}")
        elif event == UPDATE_EVENT:
            await self.broadcaster.broadcast(ws, data)
        else:
            logger.warning(f"Unknown WebSocket event: {event!r}")

    async def _on_shutdown(self, app):
        """Park the car before connections close."""
        self.dispatcher.stop_all()

    def _render_template(self, name: str) -> str:
        """Render a template file."""
        template_path = TEMPLATES_DIR / name
        if template_path.exists():
            return template_path.read_text()

        # Fallback if template doesn't exist
        return f"""
        <!DOCTYPE html>
        <html>
        <head><title>RC Car - {name}</title></head>
        <body>
            <h1>RC Car Controller</h1>
            <p>Template '{name}' not found. Create it at:</p>
            <pre>{template_path}</pre>
        </body>
        </html>
        """


def create_app(context: RobotContext, dispatcher: CommandDispatcher) -> web.Application:
    """Create the web application."""
    server = WebServer(context, dispatcher)
    return server.app


async def run_server(context: RobotContext, dispatcher: CommandDispatcher, host=WEB_HOST, port=WEB_PORT):
    """Run the web server."""
    app = create_app(context, dispatcher)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info(f"Web server running at http://{host}:{port}")
    return runner
