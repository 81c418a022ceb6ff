from __future__ import annotations

import asyncio
import socket
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from relay.transport.client import send_payload


def _unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.mark.asyncio
async def test_send_writes_payload_and_closes():
    received: list[bytes] = []
    done = asyncio.Event()

    async def handler(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        received.append(await reader.read())  # until the client closes
        writer.close()
        done.set()

    server = await asyncio.start_server(handler, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        ok = await send_payload("Total memory: 1 KB\n", "127.0.0.1", port)
        await asyncio.wait_for(done.wait(), timeout=2.0)
    finally:
        server.close()
        await server.wait_closed()

    assert ok is True
    assert received == [b"Total memory: 1 KB\n"]


@pytest.mark.asyncio
async def test_connect_failure_is_logged(caplog):
    ok = await send_payload("hello", "127.0.0.1", _unused_port())

    assert ok is False
    assert "Could not connect to server" in caplog.text


@pytest.mark.asyncio
async def test_write_failure_is_logged(caplog):
    writer = MagicMock()
    writer.drain = AsyncMock(side_effect=ConnectionResetError("reset by peer"))
    writer.wait_closed = AsyncMock()

    with patch(
        "relay.transport.client.asyncio.open_connection",
        new=AsyncMock(return_value=(MagicMock(), writer)),
    ):
        ok = await send_payload("hello", "127.0.0.1", 8080)

    assert ok is False
    assert "Failed to send data" in caplog.text
    writer.close.assert_called_once()


@pytest.mark.asyncio
async def test_new_connection_per_call():
    connections = 0

    async def handler(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        nonlocal connections
        connections += 1
        await reader.read()
        writer.close()

    server = await asyncio.start_server(handler, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        for _ in range(3):
            assert await send_payload("x", "127.0.0.1", port) is True
        for _ in range(20):
            if connections == 3:
                break
            await asyncio.sleep(0.05)
    finally:
        server.close()
        await server.wait_closed()

    assert connections == 3
