"""Run the npm installer in a single directory."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path


INSTALL_COMMAND = "install"
PRODUCTION_FLAG = "--production"

# Shell convention for "command could not be executed".
LAUNCH_FAILURE_EXIT_CODE = 127


@dataclass(slots=True, frozen=True)
class InvocationResult:
    """Exit status and combined stdout/stderr of one installer run."""

    exit_code: int
    output: str

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


def build_install_args(executable: Path, dev_mode: bool) -> list[str]:
    args = [str(executable), INSTALL_COMMAND]
    if not dev_mode:
        args.append(PRODUCTION_FLAG)
    return args


def run_install(executable: Path, cwd: Path, dev_mode: bool) -> InvocationResult:
    """Run ``<executable> install [--production]`` inside ``cwd`` and wait.

    The environment is inherited unchanged and no timeout applies. A process
    that cannot be started is reported as a failed result carrying the OS
    error text.
    """
    try:
        completed = subprocess.run(
            build_install_args(executable, dev_mode),
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as exc:
        return InvocationResult(exit_code=LAUNCH_FAILURE_EXIT_CODE, output=str(exc))

    return InvocationResult(exit_code=completed.returncode, output=completed.stdout or "")
