"""Error base shared by the npm-handler modules."""

from __future__ import annotations


class NpmHandlerError(RuntimeError):
    """Base error for npm-handler failures."""
