"""Command line entry point: print the NIP-71 event for a PeerTube link."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from .config import AppConfig, ConfigError, load_config
from .errors import ConverterError
from .logging_utils import configure_logging
from .service import convert

LOGGER = logging.getLogger(__name__)
HASH_NOTE = "Note: SHA256 file hashes (x tag) are not available from PeerTube's API."
EXIT_OK = 0
EXIT_CONVERSION_FAILED = 1
EXIT_BAD_CONFIG = 2


@dataclass(frozen=True, slots=True)
class RunContext:
    """Captures immutable metadata for a single conversion invocation."""

    trace_id: str
    wall_clock_ns: int
    monotonic_ns: int

    @property
    def started_at_iso(self) -> str:
        """Return the ISO8601 timestamp (UTC) for when the run began."""
        seconds = self.wall_clock_ns / 1_000_000_000
        return datetime.fromtimestamp(seconds, tz=timezone.utc).isoformat().replace("+00:00", "Z")

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter_ns() - self.monotonic_ns) / 1_000_000


def _build_run_context() -> RunContext:
    return RunContext(
        trace_id=os.getenv("APP_TRACE_ID") or uuid.uuid4().hex,
        wall_clock_ns=time.time_ns(),
        monotonic_ns=time.perf_counter_ns(),
    )


def _log_event(level: int, event: str, context: RunContext, **fields: Any) -> None:
    """Emit a run event; the JSON file log receives the fields as top-level keys."""
    payload: dict[str, Any] = {
        "trace_id": context.trace_id,
        "started_at": context.started_at_iso,
        **fields,
    }
    summary = " ".join(f"{key}={value}" for key, value in fields.items())
    LOGGER.log(
        level,
        f"{event} {summary}".rstrip(),
        extra={"event": event, "extra_fields": payload},
    )


def _emit_metric(name: str, value: float, unit: str, context: RunContext, **labels: Any) -> None:
    """Record lightweight metrics via structured logs for downstream scraping."""
    metric_fields = {"metric_name": name, "value": value, "unit": unit, **labels}
    _log_event(logging.INFO, "metric", context, **metric_fields)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="peertube-nip71",
        description="Convert a PeerTube video link into an unsigned Nostr NIP-71 event",
    )
    p.add_argument("url", help="PeerTube video URL (/w/{id}, /videos/watch/{id} or /api/v1/videos/{id})")
    p.add_argument("--env-file", type=Path, help="Load configuration from this .env file")
    p.add_argument("--output", type=Path, help="Also write the event JSON to this file")
    p.add_argument("--compact", action="store_true", help="Print JSON without indentation")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging and print API caveats")
    return p


async def main_async(args: argparse.Namespace, config: AppConfig) -> int:
    context = _build_run_context()
    _log_event(logging.DEBUG, "convert.start", context, url=args.url)
    try:
        event = await convert(args.url, timeout=config.http_timeout_seconds)
    except ConverterError as exc:
        error_fields = {"error_type": type(exc).__name__, "error_message": str(exc)}
        _emit_metric("convert_failure", 1.0, "count", context, **error_fields)
        _log_event(logging.ERROR, "convert.failed", context, **error_fields)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_CONVERSION_FAILED

    _emit_metric("convert_duration_ms", round(context.elapsed_ms, 2), "milliseconds", context)

    rendered = event.to_json(indent=None if args.compact else config.json_indent)
    print(rendered)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(rendered + "\n", encoding="utf-8")
        LOGGER.info("Event written: %s", args.output)
    if args.verbose:
        print(HASH_NOTE, file=sys.stderr)
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.env_file)
    except ConfigError as exc:
        cause = f" ({exc.__cause__})" if exc.__cause__ else ""
        print(f"Error: {exc}{cause}", file=sys.stderr)
        return EXIT_BAD_CONFIG

    configure_logging(config)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    LOGGER.debug(
        "Configuration loaded",
        extra={
            "event": "config.loaded",
            "extra_fields": {
                "log_path": str(config.log_path) if config.log_path else None,
                "http_timeout_seconds": config.http_timeout_seconds,
            },
        },
    )
    return asyncio.run(main_async(args, config))


if __name__ == "__main__":
    sys.exit(main())
