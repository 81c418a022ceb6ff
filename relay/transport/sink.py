from __future__ import annotations

import asyncio
import logging
import socket

logger = logging.getLogger(__name__)


class Sink:
    """TCP listener that reads one buffer per connection and acknowledges it.

    Connections are handled strictly one at a time: the accept loop awaits
    the current handler before accepting the next connection, so later
    clients queue in the kernel backlog. There is no framing; anything
    beyond ``buffer_size`` bytes is left unread when the connection closes.
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 8080,
        buffer_size: int = 1024,
        ack_message: str = "Data received\n",
        backlog: int = 128,
    ) -> None:
        self.host = host
        self.port = port
        self.buffer_size = buffer_size
        self.ack = ack_message.encode("utf-8")
        self.backlog = backlog
        self.connections_handled = 0
        self._sock: socket.socket | None = None
        self._running = False
        self._task: asyncio.Task | None = None

    # ── lifecycle ────────────────────────────────────────

    async def start(self) -> None:
        """Bind and begin accepting. A bind failure raises ``OSError``."""
        if self._running:
            return
        self._sock = self._bind()
        self._running = True
        self._task = asyncio.create_task(self._accept_loop())
        host, port = self.address
        logger.info("Sink listening on %s:%d", host, port)

    async def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self._sock:
            self._sock.close()
            self._sock = None
        logger.info("Sink stopped")

    async def serve_forever(self) -> None:
        await self.start()
        try:
            await self._task
        except asyncio.CancelledError:
            # stop() called from elsewhere is a normal exit
            if self._running:
                raise
        finally:
            await self.stop()

    # ── connection handling ─────────────────────────────

    async def handle_connection(self, conn: socket.socket, peer=None) -> str | None:
        """Single bounded read, log, acknowledge.

        Returns the decoded text, or None when the read failed.
        """
        loop = asyncio.get_running_loop()
        try:
            data = await loop.sock_recv(conn, self.buffer_size)
        except OSError as exc:
            logger.error("Failed to read from connection %s: %s", peer, exc)
            return None

        text = data.decode("utf-8", errors="replace")
        logger.info("Received data: %s", text)

        # An empty read (peer closed without sending) is still acknowledged.
        try:
            await loop.sock_sendall(conn, self.ack)
        except OSError as exc:
            logger.error("Failed to send acknowledgment to %s: %s", peer, exc)
        return text

    # ── internals ───────────────────────────────────────

    def _bind(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.host, self.port))
            sock.listen(self.backlog)
            sock.setblocking(False)
        except OSError:
            sock.close()
            raise
        return sock

    async def _accept_loop(self) -> None:
        loop = asyncio.get_running_loop()
        while self._running:
            try:
                conn, peer = await loop.sock_accept(self._sock)
            except asyncio.CancelledError:
                raise
            except OSError as exc:
                logger.error("Failed to establish a connection: %s", exc)
                continue
            with conn:
                conn.setblocking(False)
                await self.handle_connection(conn, peer)
            self.connections_handled += 1

    # ── introspection ───────────────────────────────────

    @property
    def address(self) -> tuple[str, int]:
        if self._sock is None:
            return self.host, self.port
        host, port = self._sock.getsockname()[:2]
        return host, port

    @property
    def running(self) -> bool:
        return self._running
