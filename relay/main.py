"""Process entry points for the sink and the collector.

Usage:
    relay-sink                      # listen on 127.0.0.1:8080
    relay-collector --interval 2    # sample every 2 seconds
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from relay.collectors import MetricsCollector
from relay.config import settings
from relay.transport import Sink

logger = logging.getLogger("relay")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class _BelowWarning(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def configure_logging(level: str | int = "INFO") -> None:
    """Informational records go to stdout, warnings and failures to stderr."""
    formatter = logging.Formatter(LOG_FORMAT)

    out = logging.StreamHandler(sys.stdout)
    out.addFilter(_BelowWarning())
    out.setFormatter(formatter)

    err = logging.StreamHandler(sys.stderr)
    err.setLevel(logging.WARNING)
    err.setFormatter(formatter)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(out)
    root.addHandler(err)
    root.setLevel(level)


def _parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--host", default=settings.host, help="address to use")
    parser.add_argument("--port", type=int, default=settings.port, help="TCP port")
    return parser


# ── sink ─────────────────────────────────────────────


def run_sink(argv: list[str] | None = None) -> int:
    args = _parser("Receive metric payloads over TCP.").parse_args(argv)
    configure_logging(settings.log_level)

    sink = Sink(
        host=args.host,
        port=args.port,
        buffer_size=settings.buffer_size,
        ack_message=settings.ack_message,
    )
    try:
        asyncio.run(sink.serve_forever())
    except OSError as exc:
        logger.error("Could not bind %s:%d: %s", args.host, args.port, exc)
        return 1
    except KeyboardInterrupt:
        logger.info("Sink interrupted")
    return 0


# ── collector ────────────────────────────────────────


async def _collect(collector: MetricsCollector) -> None:
    await collector.start()
    try:
        await collector.wait()
    finally:
        await collector.stop()


def run_collector(argv: list[str] | None = None) -> int:
    parser = _parser("Sample host metrics and push them to the sink.")
    parser.add_argument(
        "--interval",
        type=float,
        default=settings.collect_interval,
        help="seconds between samples",
    )
    args = parser.parse_args(argv)
    configure_logging(settings.log_level)

    collector = MetricsCollector(host=args.host, port=args.port, interval=args.interval)
    try:
        asyncio.run(_collect(collector))
    except KeyboardInterrupt:
        logger.info("Collector interrupted")
    return 0


def sink_main() -> None:
    sys.exit(run_sink())


def collector_main() -> None:
    sys.exit(run_collector())
