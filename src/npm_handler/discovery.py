"""Manifest discovery below a project root."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path, PurePosixPath

from .config import normalise_relative_path


MANIFEST_NAME = "package.json"
OUTPUT_DIR_NAME = "node_modules"

ROOT_LOCATION = PurePosixPath(".")

PathPredicate = Callable[[PurePosixPath], bool]


def excluded_by(patterns: Iterable[str]) -> PathPredicate:
    """Return a predicate matching directories equal to or below any pattern.

    Matching works on whole path components: ``web`` excludes ``web`` and
    ``web/admin`` but not ``website``.
    """
    excluded = tuple(
        PurePosixPath(p) for p in (normalise_relative_path(p) for p in patterns) if p
    )

    def is_excluded(rel: PurePosixPath) -> bool:
        if rel == ROOT_LOCATION:
            return False
        return any(rel == ex or ex in rel.parents for ex in excluded)

    return is_excluded


def not_output_dir(rel: PurePosixPath) -> bool:
    return rel.name != OUTPUT_DIR_NAME


def iter_manifest_dirs(
    root: Path,
    is_excluded: PathPredicate | None = None,
    should_descend: PathPredicate = not_output_dir,
) -> Iterator[PurePosixPath]:
    """Yield project-relative directories containing ``package.json``.

    Directories come depth-first with the root first and siblings in sorted
    order. Excluded directories are pruned together with everything below
    them, and directories rejected by ``should_descend`` are not entered.
    Unreadable directories are skipped, and symlinked directories are not
    followed.
    """
    root = Path(root)
    is_excluded = is_excluded or (lambda rel: False)

    # os.walk ignores listing errors unless onerror is given.
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        rel_native = os.path.relpath(dirpath, root)
        rel = PurePosixPath(*Path(rel_native).parts) if rel_native != os.curdir else ROOT_LOCATION

        kept: list[str] = []
        for name in sorted(dirnames):
            child = rel / name
            if not should_descend(child) or is_excluded(child):
                continue
            kept.append(name)
        dirnames[:] = kept

        if MANIFEST_NAME in filenames and os.path.isfile(os.path.join(dirpath, MANIFEST_NAME)):
            yield rel


def discover_manifests(
    root: Path, exclude_packages: Iterable[str] = ()
) -> list[PurePosixPath]:
    """Return every manifest directory under ``root`` honouring exclusions."""
    return list(iter_manifest_dirs(root, is_excluded=excluded_by(exclude_packages)))


def manifest_display_path(rel: PurePosixPath) -> str:
    """Render the manifest path as shown in status lines."""
    if rel == ROOT_LOCATION:
        return MANIFEST_NAME
    return f"{rel.as_posix()}/{MANIFEST_NAME}"
