"""Host telemetry relay: a metrics collector and a TCP sink."""

__version__ = "0.1.0"
