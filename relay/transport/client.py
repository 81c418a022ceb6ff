from __future__ import annotations

import asyncio
import logging

logger = logging.getLogger(__name__)


async def send_payload(payload: str, host: str, port: int) -> bool:
    """Open a fresh connection, write ``payload`` once and close.

    Errors are logged and reported through the return value; there is no
    retry.
    """
    try:
        _reader, writer = await asyncio.open_connection(host, port)
    except OSError as exc:
        logger.error("Could not connect to server %s:%d: %s", host, port, exc)
        return False

    try:
        writer.write(payload.encode("utf-8"))
        await writer.drain()
    except OSError as exc:
        logger.error("Failed to send data to %s:%d: %s", host, port, exc)
        return False
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as exc:
            logger.debug("Close after send to %s:%d failed: %s", host, port, exc)

    logger.debug("Sent %d bytes to %s:%d", len(payload), host, port)
    return True
