"""Core install entrypoint.

This module MUST NOT depend on a concrete host so it can be driven by both a
host plugin hook and the standalone CLI; everything it needs comes through
:class:`~npm_handler.host.HostEvent`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from .config import InstallConfig
from .discovery import excluded_by, iter_manifest_dirs, manifest_display_path
from .executable import ExecutableNotFound, resolve_executable
from .host import HostEvent, escape_tags
from .runner import InvocationResult, run_install


HEADER = "<info>NPM Components</info>"

STATUS_DONE = "done"
STATUS_SKIPPED = "skipped"


@dataclass(slots=True, frozen=True)
class TargetOutcome:
    """Terminal state of one manifest directory."""

    location: PurePosixPath
    status: str
    result: InvocationResult | None = None
    error: ExecutableNotFound | None = None

    @property
    def manifest_path(self) -> str:
        return manifest_display_path(self.location)


def install(event: HostEvent, root: Path | None = None) -> list[TargetOutcome]:
    """Install npm dependencies for every manifest below ``root``.

    Params:
        event: host access to the extra configuration, dev/verbose flags and
            console output
        root: project root; defaults to the current working directory

    Returns one outcome per manifest directory in discovery order. A missing
    executable or a failing ``npm install`` is reported on the console and in
    the outcome but never raised.
    """
    root = (root if root is not None else Path.cwd()).resolve()
    config = InstallConfig.from_extra(
        event.get_extra(),
        dev_mode=event.is_dev_mode(),
        verbose=event.is_verbose(),
    )

    event.write(HEADER, True)

    outcomes: list[TargetOutcome] = []
    locations = iter_manifest_dirs(root, is_excluded=excluded_by(config.exclude_packages))
    for location in locations:
        outcomes.append(_install_location(event, config, root, location))

    return outcomes


def _install_location(
    event: HostEvent,
    config: InstallConfig,
    root: Path,
    location: PurePosixPath,
) -> TargetOutcome:
    event.write(f"- Installing <comment>{manifest_display_path(location)}</comment>", True)

    try:
        executable = resolve_executable(config.npm_path, root)
    except ExecutableNotFound as exc:
        event.write(f"<error>{exc}</error>", True)
        return TargetOutcome(location=location, status=STATUS_SKIPPED, error=exc)

    result = run_install(executable, root / location, config.dev_mode)

    if config.verbose:
        output = result.output.rstrip("\r\n")
        if output:
            event.write(escape_tags(output), True)

    return TargetOutcome(location=location, status=STATUS_DONE, result=result)
