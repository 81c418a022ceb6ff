from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field

PAYLOAD_TEMPLATE = (
    "Total memory: {total} KB\n"
    "Available memory: {available} KB\n"
    "CPU load: {cpu}%\n"
)


class MetricSample(BaseModel):
    """Point-in-time host reading sent by the collector each cycle."""

    total_memory_kb: int = Field(ge=0)
    available_memory_kb: int = Field(ge=0)
    cpu_usage_percent: float  # first core, not clamped
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def to_text(self) -> str:
        return PAYLOAD_TEMPLATE.format(
            total=self.total_memory_kb,
            available=self.available_memory_kb,
            cpu=self.cpu_usage_percent,
        )
