from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from prime_stream.adapters.clocks import SystemClock
from prime_stream.adapters.log_sinks import build_log_sink
from prime_stream.config.loader import load_config
from prime_stream.config.models import LoggingSection, StreamConfig, default_config
from prime_stream.kernel.engine import StreamEngine
from prime_stream.observability import StreamLogger
from prime_stream.ports.clock import Clock
from prime_stream.presentation.view import build_view, render_groups, render_status

# Thin shell around the engine: parse flags, build config, run headless, print the view.


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="prime-stream", description="Synchronized prime number stream")
    parser.add_argument("--config", help="Path to YAML config (defaults are used when omitted)")
    parser.add_argument("--duration-ms", type=int, default=3000, help="How long to run the stream")
    parser.add_argument(
        "--live",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Whether the consumer sits at the live edge (enables trickle reveal)",
    )
    parser.add_argument(
        "--demand-every-ms",
        type=int,
        help="Raise the demand trigger at this interval, as a scrolling consumer would",
    )
    parser.add_argument("--log-path", help="Override logging with a JSONL file sink")
    parser.add_argument("--tail", type=int, default=10, help="How many rendered history lines to print")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def resolve_config(args: argparse.Namespace) -> StreamConfig:
    config = load_config(Path(args.config)) if args.config else default_config()
    apply_logging_override(config, args)
    return config


def apply_logging_override(config: StreamConfig, args: argparse.Namespace) -> None:
    # CLI overrides take precedence over config.
    if args.log_path is not None:
        config.logging = LoggingSection(sink="jsonl", path=args.log_path)


def run(
    argv: Sequence[str] | None = None,
    *,
    clock: Clock | None = None,
    out: TextIO | None = None,
) -> int:
    args = parse_args(argv)
    if args.duration_ms < 0:
        raise SystemExit("--duration-ms must be non-negative")
    if args.demand_every_ms is not None and args.demand_every_ms <= 0:
        raise SystemExit("--demand-every-ms must be positive")
    config = resolve_config(args)
    out = out if out is not None else sys.stdout

    sink = build_log_sink(config.logging.sink, config.logging.path)
    engine = StreamEngine(
        clock=clock if clock is not None else SystemClock(),
        config=config,
        logger=StreamLogger(sink=sink),
    )
    try:
        engine.start()
        engine.set_consumer_live(args.live)
        if args.demand_every_ms is not None:
            engine.scheduler.call_every(
                args.demand_every_ms,
                engine.request_more,
                token=engine.token,
                name="demand_source",
            )
        engine.run_for(args.duration_ms)
    finally:
        engine.stop()
        sink.close()

    view = build_view(engine.state, epoch_ms=config.stream.epoch_ms)
    lines = render_groups(view.groups)
    for line in lines[-args.tail :] if args.tail > 0 else []:
        out.write(line + "\n")
    out.write(render_status(view) + "\n")
    return 0
