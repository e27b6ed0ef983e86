"""
Tests for the web transport: HTTP command endpoint, WebSocket pub/sub,
status broadcast and query API.
"""

import asyncio

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from robocar.control import CommandDispatcher, RobotContext
from robocar.params import Parameters
from robocar.web import create_app

from conftest import FakeBoard


@pytest_asyncio.fixture
async def robot():
    board = FakeBoard()
    context = RobotContext(Parameters(), board=board)
    board.connect()
    board.writes.clear()
    dispatcher = CommandDispatcher(context)

    client = TestClient(TestServer(create_app(context, dispatcher)))
    await client.start_server()
    try:
        yield client, context, board
    finally:
        await client.close()


async def receive(ws, timeout=1.0):
    return await asyncio.wait_for(ws.receive_json(), timeout)


@pytest.mark.asyncio
async def test_http_command_dispatches_and_echoes(robot):
    client, context, board = robot

    response = await client.get("/command", params={"command": "manual-turn-left"})

    assert response.status == 200
    assert await response.text() == "command: manual-turn-left"
    assert context.steering.position == 40


@pytest.mark.asyncio
async def test_http_command_trailing_slash(robot):
    client, context, board = robot

    response = await client.get("/command/", params={"command": "red-begin"})

    assert response.status == 200
    assert context.status.current_ai.value == "red"


@pytest.mark.asyncio
async def test_http_command_bad_value_still_200(robot):
    client, context, board = robot

    response = await client.get("/command", params={"command": "manual-throttle-warp"})

    assert response.status == 200
    assert await response.text() == "command: manual-throttle-warp"
    assert board.writes == []


@pytest.mark.asyncio
async def test_http_command_missing_parameter(robot):
    client, context, board = robot

    response = await client.get("/command")

    assert response.status == 200
    assert board.writes == []


@pytest.mark.asyncio
async def test_index_served(robot):
    client, _, _ = robot

    response = await client.get("/")

    assert response.status == 200
    assert "RC Car Controller" in await response.text()


@pytest.mark.asyncio
async def test_api_status_reports_ai_mode(robot):
    client, _, _ = robot
    await client.get("/command", params={"command": "face-begin"})

    response = await client.get("/api/status")

    assert await response.json() == {
        "has_actuator_link": True,
        "has_sensor_link": False,
        "current_ai": "upper_body",
    }


@pytest.mark.asyncio
async def test_api_servos_after_command(robot):
    client, _, _ = robot
    await client.get("/command", params={"command": "stop"})

    data = await (await client.get("/api/servos")).json()

    assert data["steering"]["position"] == 75
    assert data["acceleration"]["position"] == 90


@pytest.mark.asyncio
async def test_api_params(robot):
    client, _, _ = robot

    data = await (await client.get("/api/params")).json()

    assert data["forward"] == 65
    assert data["throttle_time"] == 500


@pytest.mark.asyncio
async def test_ws_greets_new_observer(robot):
    client, _, _ = robot

    ws = await client.ws_connect("/ws")

    assert await receive(ws) == {"event": "robot status", "data": "server connected"}
    await ws.close()


@pytest.mark.asyncio
async def test_ws_command_dispatches(robot):
    client, context, _ = robot
    ws = await client.ws_connect("/ws")
    await receive(ws)

    await ws.send_json({"event": "robot command", "data": "manual-turn-right"})
    # Let the server handle the message
    await asyncio.sleep(0.05)

    assert context.steering.position == 100
    await ws.close()


@pytest.mark.asyncio
async def test_ws_update_broadcast_excludes_sender(robot):
    client, _, _ = robot
    sender = await client.ws_connect("/ws")
    observer = await client.ws_connect("/ws")
    await receive(sender)
    await receive(observer)

    await sender.send_json({
        "event": "robot update",
        "data": {"fps": 12, "Arduino Attached": False},
    })

    assert await receive(observer) == {
        "event": "robot status",
        "data": {"fps": 12, "Arduino Attached": True},
    }
    # The observer answers; if the sender had been echoed, the echo would arrive first
    await observer.send_json({"event": "robot update", "data": {"from": "observer"}})
    assert await receive(sender) == {
        "event": "robot status",
        "data": {"from": "observer", "Arduino Attached": True},
    }

    await sender.close()
    await observer.close()


@pytest.mark.asyncio
async def test_ws_bad_messages_keep_connection(robot):
    client, context, _ = robot
    ws = await client.ws_connect("/ws")
    await receive(ws)

    await ws.send_str("{not json")
    await ws.send_json(["robot command"])
    await ws.send_json({"event": "robot dance", "data": 1})
    await ws.send_json({"event": "robot command", "data": 42})
    await ws.send_json({"event": "robot command", "data": "manual-turn-left"})
    await asyncio.sleep(0.05)

    assert not ws.closed
    assert context.steering.position == 40
    await ws.close()


@pytest.mark.asyncio
async def test_http_oversized_duration_still_200_and_stops(robot):
    client, context, board = robot
    await client.get("/command", params={"command": "manual-throttle-forward-30"})

    response = await client.get(
        "/command", params={"command": "manual-throttle-forward-1" + "0" * 400}
    )
    assert response.status == 200

    await asyncio.sleep(0.1)
    assert context.throttle.position == 90
