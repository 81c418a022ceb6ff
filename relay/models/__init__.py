from .sample import MetricSample, PAYLOAD_TEMPLATE

__all__ = [
    "MetricSample",
    "PAYLOAD_TEMPLATE",
]
