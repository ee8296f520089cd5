"""CLI entrypoint for validating the npm-handler section of a project descriptor."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from ..config import EXTRA_KEY, ConfigError, load_extra


_DEFAULT_SCHEMA = Path(__file__).resolve().parents[1] / "schemas" / "npm-handler.schema.json"


def _load_json(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_extra(extra: Mapping[str, Any], schema_path: Path = _DEFAULT_SCHEMA) -> None:
    """Validate the ``npm-handler`` section of ``extra`` against the schema.

    A missing section is valid; the defaults apply.

    Raises:
        ConfigError: Listing every schema violation, one per line.
    """
    if EXTRA_KEY not in extra:
        return
    validator = Draft202012Validator(_load_json(schema_path))
    errors = sorted(validator.iter_errors(extra[EXTRA_KEY]), key=lambda e: list(e.path))
    if errors:
        raise ConfigError("\n" + _format_errors(errors))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Project root holding the descriptor",
    )
    parser.add_argument(
        "--descriptor",
        type=Path,
        default=None,
        help="Project descriptor (pyproject.toml, JSON or YAML); defaults to pyproject.toml",
    )
    parser.add_argument(
        "--schema",
        type=Path,
        default=_DEFAULT_SCHEMA,
        help="Path to the JSON schema used for validation",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        extra = load_extra(args.root, args.descriptor)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    try:
        validate_extra(extra, args.schema)
    except FileNotFoundError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"ERROR: Failed to read schema: {exc}", file=sys.stderr)
        return 1
    except ConfigError as exc:
        print(f"ERROR: Configuration failed validation:{exc}", file=sys.stderr)
        return 1

    print(f"Configuration in {args.descriptor or args.root} is valid against {args.schema}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
