"""Command line entrypoint for scanning a checkout."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from .config import ConfigError
from .core import scan_repository
from .logging import configure_logging, get_logger
from .summary import render_summary

logger = get_logger("cli")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="pnpm-workspace-scan")
    parser.add_argument("--root", type=Path, default=Path("."))
    parser.add_argument("--summary", action="store_true", help="print a Markdown summary")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--trace", action="store_true")
    parser.add_argument("--log-file", type=Path, default=None)
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, trace=args.trace, log_file=args.log_file)

    try:
        report = scan_repository(args.root)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 2

    if args.summary:
        print(render_summary(report))
    else:
        print(json.dumps(report, indent=2))
    return 0
