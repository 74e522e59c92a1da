from __future__ import annotations

import argparse
import asyncio
import json
import logging

from wsbench.config import RunConfig, TargetConfig
from wsbench.loadgen.runner import run_benchmark
from wsbench.metrics.report import render


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _build_config(args: argparse.Namespace) -> RunConfig:
    target = TargetConfig(url=args.target, timeout_sec=args.timeout)
    return RunConfig(
        target=target,
        amount=args.amount,
        concurrent=args.concurrent,
        messages=args.messages,
        message_size=args.buffer,
        binary=args.binary,
        generator=args.generator,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="WebSocket load generator")
    parser.add_argument("target", help="Target URL, ws:// or wss://")
    parser.add_argument("-A", "--amount", type=int, default=10000, help="Total connections to open")
    parser.add_argument("-C", "--concurrent", type=int, default=None, help="Connections in flight at once")
    parser.add_argument("-M", "--messages", type=int, default=1, help="Messages sent per connection")
    parser.add_argument("-B", "--buffer", type=int, default=1024, help="Payload size in bytes")
    parser.add_argument("-W", "--binary", action="store_true", help="Send binary payloads")
    parser.add_argument("-G", "--generator", default=None, help="Module providing utf8(size) and binary(size)")
    parser.add_argument("--timeout", type=float, default=10.0)
    parser.add_argument("--json", action="store_true", help="Print raw summary values as JSON")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        config = _build_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    result = asyncio.run(run_benchmark(config))
    summary = result.metrics.summary()
    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(render(summary))


if __name__ == "__main__":
    main()
