"""Locate the npm executable from the configured ``npm-path``."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from .errors import NpmHandlerError


class ExecutableNotFound(NpmHandlerError):
    """Raised when the configured executable does not resolve to a file.

    ``root`` is set only for relative paths, which are resolved against the
    project root; it is then part of the message.
    """

    def __init__(self, npm_path: str, root: Path | None = None) -> None:
        self.npm_path = npm_path
        self.root = root
        message = f"{npm_path} Not Found"
        if root is not None:
            message += f" (Root path : {root})"
        super().__init__(message)


def _has_separator(value: str) -> bool:
    return "/" in value or os.sep in value or (os.altsep is not None and os.altsep in value)


def resolve_executable(npm_path: str, root: Path) -> Path:
    """Return the executable ``npm_path`` refers to.

    The form is decided by the shape of ``npm_path`` alone: absolute paths are
    used as given, paths with a separator are joined to ``root``, and bare
    names go through a PATH lookup.

    Raises:
        ExecutableNotFound: If the resolved path is not an existing file.
    """
    if os.path.isabs(npm_path):
        candidate = Path(npm_path)
        if candidate.is_file():
            return candidate
        raise ExecutableNotFound(npm_path)

    if _has_separator(npm_path):
        candidate = Path(root) / npm_path
        if candidate.is_file():
            return candidate
        raise ExecutableNotFound(npm_path, root=Path(root))

    found = shutil.which(npm_path)
    if found is None:
        raise ExecutableNotFound(npm_path)
    return Path(found)
