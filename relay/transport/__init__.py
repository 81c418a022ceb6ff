from .client import send_payload
from .sink import Sink

__all__ = [
    "Sink",
    "send_payload",
]
