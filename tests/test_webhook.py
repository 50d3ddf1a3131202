from models.command import CommandContext
from models.minecraft import ServerAddress
from services.webhook import create_app

from .conftest import STATUS, close_after_handshake, reply_with, status_frame

FORM = {
    "token": "xxx",
    "team_id": "T0001",
    "channel_name": "minecraft",
    "timestamp": "1400000000.000001",
    "user_id": "U2147483697",
    "user_name": "Steve",
    "trigger_word": "jack",
}


async def test_post_status(aiohttp_client, mock_server):
    server = mock_server(reply_with(status_frame(STATUS)))
    client = await aiohttp_client(create_app(CommandContext(server.address, timeout=5)))

    resp = await client.post("/jack/", data={**FORM, "text": "jack status"})
    assert resp.status == 200
    assert resp.content_type == "text/json"
    assert await resp.json(content_type=None) == {"text": "Steve: *A Minecraft Server* has *3*/20 players on."}


async def test_post_unknown_command(aiohttp_client):
    client = await aiohttp_client(create_app(CommandContext(ServerAddress("localhost"), timeout=5)))

    resp = await client.post("/jack/", data={**FORM, "text": "jack jump"})
    assert await resp.json(content_type=None) == {"text": "Steve: The term “jump” is not a known command."}


async def test_post_error_becomes_oops(aiohttp_client, mock_server):
    server = mock_server(close_after_handshake)
    client = await aiohttp_client(create_app(CommandContext(server.address, timeout=5)))

    resp = await client.post("/jack/", data={**FORM, "text": "jack status"})
    assert resp.status == 200
    data = await resp.json(content_type=None)
    assert data["text"].startswith("Oops: ")


async def test_get_report(aiohttp_client, mock_server):
    server = mock_server(reply_with(status_frame(STATUS)))
    client = await aiohttp_client(create_app(CommandContext(server.address, timeout=5), path="/mc/"))

    resp = await client.get("/mc/")
    assert resp.status == 200
    assert await resp.text() == "*A Minecraft Server* has *3*/20 players on."


async def test_get_report_error(aiohttp_client, mock_server):
    server = mock_server(close_after_handshake)
    client = await aiohttp_client(create_app(CommandContext(server.address, timeout=5)))

    resp = await client.get("/jack/")
    assert resp.status == 500
    assert "stream ended" in await resp.text()
