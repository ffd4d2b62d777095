"""Command line interface for mockcollector."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import cast, get_args

from ..core.collector_config import LogLevel
from .inspect_cmd import VerbosityArg, run_inspect
from .serve_cmd import run_serve

DEFAULT_URL = "http://127.0.0.1:14268"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mockcollector")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run a collector in the foreground")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    serve_parser.add_argument("--port", type=int, default=14268, help="Port to listen on")
    serve_parser.add_argument(
        "--log-level",
        choices=list(get_args(LogLevel)),
        default="info",
        help="Server log level",
    )

    inspect_parser = subparsers.add_parser("inspect", help="Inspect a trace held by a collector")
    inspect_parser.add_argument("trace_id", help="32 character hex trace id")
    inspect_parser.add_argument(
        "--url",
        default=DEFAULT_URL,
        help="Base URL of the running collector",
    )
    inspect_parser.add_argument(
        "--verbosity",
        choices=["minimal", "standard", "full"],
        default="standard",
        help="Console render verbosity",
    )
    inspect_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable summary JSON instead of text output",
    )
    inspect_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional output file path for --json summary",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        return run_serve(host=args.host, port=args.port, log_level=args.log_level)

    if args.command == "inspect":
        return run_inspect(
            args.trace_id,
            args.url,
            cast(VerbosityArg, args.verbosity),
            as_json=args.json,
            output_path=args.output,
        )

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
