from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class BaseCollector(ABC):
    """Abstract base for periodic collectors.

    Subclasses implement ``collect()`` which returns a payload and
    ``deliver()`` which ships it. The base class handles the async loop,
    interval timing, and graceful shutdown. Every cycle is independent:
    a failure is logged and the next cycle still runs after ``interval``.
    """

    name: str = "base"
    interval: float = 5.0  # seconds between cycles

    def __init__(self, interval: float | None = None) -> None:
        if interval is not None:
            self.interval = interval
        self._running = False
        self._task: asyncio.Task | None = None
        self.cycles = 0

    # ── lifecycle ────────────────────────────────────────

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._loop())
        logger.info("Collector [%s] started (interval=%.1fs)", self.name, self.interval)

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
        logger.info("Collector [%s] stopped", self.name)

    async def wait(self) -> None:
        """Block until the loop task finishes (i.e. until ``stop()``)."""
        if self._task:
            try:
                await self._task
            except asyncio.CancelledError:
                if self._running:
                    raise

    # ── abstract methods ────────────────────────────────

    @abstractmethod
    async def collect(self) -> str:
        """Gather data and return the payload to deliver."""
        ...

    @abstractmethod
    async def deliver(self, payload: str) -> bool:
        """Ship one payload. Returns False when delivery failed."""
        ...

    # ── internals ───────────────────────────────────────

    async def run_once(self) -> bool:
        self.cycles += 1
        payload = await self.collect()
        return await self.deliver(payload)

    async def _loop(self) -> None:
        while self._running:
            try:
                await self.run_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Collector [%s] error during cycle", self.name)
            await asyncio.sleep(self.interval)

    @property
    def running(self) -> bool:
        return self._running
