from __future__ import annotations

import psutil

from relay.collectors.base import BaseCollector
from relay.models.sample import MetricSample
from relay.transport.client import send_payload


class MetricsCollector(BaseCollector):
    """Samples memory and first-core CPU usage and pushes them to the sink.

    A new connection is opened for every cycle; the acknowledgment is
    never read.
    """

    name = "metrics_collector"

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 8080,
        interval: float = 5.0,
    ) -> None:
        super().__init__(interval=interval)
        self.host = host
        self.port = port

    def sample(self) -> MetricSample:
        memory = psutil.virtual_memory()
        # percpu readings are relative to the previous call
        per_cpu = psutil.cpu_percent(interval=0, percpu=True)
        return MetricSample(
            total_memory_kb=memory.total // 1024,
            available_memory_kb=memory.available // 1024,
            cpu_usage_percent=float(per_cpu[0]) if per_cpu else 0.0,
        )

    async def collect(self) -> str:
        return self.sample().to_text()

    async def deliver(self, payload: str) -> bool:
        return await send_payload(payload, self.host, self.port)
