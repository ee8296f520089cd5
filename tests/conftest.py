"""Shared fixtures: a two-manifest project tree and a fake npm executable."""

import sys
from pathlib import Path

import pytest

from tests.fakes.project import FAKE_NPM_SOURCE, write_executable, write_manifest


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project root with ``package.json`` at the root and in ``subdir``."""
    root = tmp_path / "project"
    write_manifest(root)
    write_manifest(root / "subdir")
    return root.resolve()


@pytest.fixture
def fake_npm(tmp_path: Path) -> Path:
    """Executable that installs manifest dependencies as empty directories."""
    if sys.platform == "win32":
        pytest.skip("fake npm relies on a shebang line")
    return write_executable(tmp_path / "bin" / "npm", FAKE_NPM_SOURCE).resolve()
