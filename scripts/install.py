#!/usr/bin/env python3
"""Local entrypoint to run the npm install hook outside of a host.

Usage:
  python scripts/install.py --root . [--descriptor pyproject.toml] [--no-dev] [-v] [--json]

This calls the same core install used by a host plugin hook.
"""

from __future__ import annotations

from npm_handler.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
