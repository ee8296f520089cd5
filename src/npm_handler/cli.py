"""Standalone command line entrypoint.

Plays the host's part: loads the extra configuration from the project
descriptor, then runs the same :func:`npm_handler.core.install` a host plugin
hook would call.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError, load_extra
from .core import install
from .host import ConsoleEvent
from .report import aggregate


STRICT_FAILURE_EXIT_CODE = 10


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="npm-handler",
        description="Run npm install for every package.json below a project root.",
    )
    parser.add_argument("--root", type=Path, default=Path("."), help="Project root to scan")
    parser.add_argument(
        "--descriptor",
        type=Path,
        default=None,
        help="Project descriptor (pyproject.toml, JSON or YAML); defaults to pyproject.toml",
    )
    parser.add_argument(
        "--no-dev",
        dest="dev_mode",
        action="store_false",
        help="Production install: pass --production to npm",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Echo npm output")
    parser.add_argument("--no-ansi", action="store_true", help="Disable coloured output")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON report on stdout; status lines go to stderr",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero when any install failed or npm was not found",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    root = args.root.resolve()

    try:
        extra = load_extra(root, args.descriptor)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    # With --json only the report goes to stdout.
    event = ConsoleEvent(
        extra,
        dev_mode=args.dev_mode,
        verbose=args.verbose,
        stream=sys.stderr if args.json else None,
        ansi=False if args.no_ansi else None,
    )
    report = aggregate(install(event, root))

    if args.json:
        print(json.dumps(report, indent=2))

    if args.strict and report["hasFailures"]:
        return STRICT_FAILURE_EXIT_CODE
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
