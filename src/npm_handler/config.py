"""Configuration for the npm install hook.

Two layers live here:

* :class:`InstallConfig`, the typed view of the ``npm-handler`` section of the
  host's extra configuration. Building it never fails: absent or malformed
  entries fall back to their defaults.
* :func:`load_extra`, which reads the host project descriptor (``pyproject.toml``,
  a JSON document or a YAML document) and returns the extra mapping the host
  would hand to the hook. Unlike the section parser it reports broken files
  with :class:`ConfigError`.
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any

import yaml

from .errors import NpmHandlerError


EXTRA_KEY = "npm-handler"
EXCLUDE_PACKAGES_KEY = "exclude-packages"
NPM_PATH_KEY = "npm-path"
DEFAULT_NPM_PATH = "npm"

DEFAULT_DESCRIPTOR_NAME = "pyproject.toml"
DESCRIPTOR_PATH_ENV_VAR = "NPM_HANDLER_DESCRIPTOR"


class ConfigError(NpmHandlerError):
    """Raised when the project descriptor cannot be loaded or is invalid."""


def normalise_relative_path(value: str) -> str:
    """Return ``value`` as a POSIX project-relative path.

    Backslashes become slashes, and leading ``./`` plus trailing slashes are
    dropped, so ``./web/`` and ``web`` exclude the same directory. Absolute
    paths can never name a project-relative directory and normalise to ``""``.
    """
    path = PurePosixPath(value.replace("\\", "/"))
    if path.is_absolute():
        return ""
    parts = [p for p in path.parts if p not in ("", ".")]
    return "/".join(parts)


def _coerce_excludes(value: Any) -> tuple[str, ...]:
    if isinstance(value, (str, Mapping)) or not isinstance(value, Iterable):
        return ()
    excludes: list[str] = []
    for item in value:
        if not isinstance(item, str):
            continue
        normalised = normalise_relative_path(item)
        if normalised and normalised not in excludes:
            excludes.append(normalised)
    return tuple(excludes)


@dataclass(slots=True, frozen=True)
class InstallConfig:
    """Settings for one orchestration run."""

    exclude_packages: tuple[str, ...] = ()
    npm_path: str = DEFAULT_NPM_PATH
    dev_mode: bool = True
    verbose: bool = False

    @classmethod
    def from_extra(
        cls,
        extra: Mapping[str, Any] | None,
        dev_mode: bool = True,
        verbose: bool = False,
    ) -> InstallConfig:
        """Build the config from the host's extra mapping.

        ``dev_mode`` and ``verbose`` come from the host, not from the mapping.
        """
        section: Any = extra.get(EXTRA_KEY) if isinstance(extra, Mapping) else None
        if not isinstance(section, Mapping):
            section = {}

        npm_path = section.get(NPM_PATH_KEY, DEFAULT_NPM_PATH)
        if not isinstance(npm_path, str) or not npm_path.strip():
            npm_path = DEFAULT_NPM_PATH

        return cls(
            exclude_packages=_coerce_excludes(section.get(EXCLUDE_PACKAGES_KEY, ())),
            npm_path=npm_path.strip(),
            dev_mode=bool(dev_mode),
            verbose=bool(verbose),
        )


def resolve_descriptor_path(root: Path, path: Path | str | None = None) -> tuple[Path, bool]:
    """Resolve the project descriptor path.

    Priority:
    1. Explicit path argument (relative paths are taken from ``root``)
    2. NPM_HANDLER_DESCRIPTOR environment variable
    3. ``pyproject.toml`` in ``root``

    Returns the path and whether it was requested explicitly.
    """
    if path is not None:
        return root / Path(path), True

    env_path = os.environ.get(DESCRIPTOR_PATH_ENV_VAR)
    if env_path:
        return root / Path(env_path), True

    return root / DEFAULT_DESCRIPTOR_NAME, False


def _parse_descriptor(path: Path, content: str) -> Any:
    suffix = path.suffix.lower()
    if suffix == ".toml":
        try:
            return tomllib.loads(content)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    if suffix in (".yaml", ".yml"):
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc


def load_extra(root: Path, path: Path | str | None = None) -> dict[str, Any]:
    """Load the host extra mapping from the project descriptor.

    ``pyproject.toml`` contributes its ``[tool]`` table, JSON and YAML documents
    their top-level ``extra`` object (or the whole document when there is none).

    Raises:
        ConfigError: If an explicitly requested descriptor is missing, or any
            descriptor cannot be read or parsed.
    """
    descriptor, explicit = resolve_descriptor_path(root, path)

    if not descriptor.exists():
        if explicit:
            raise ConfigError(f"Project descriptor not found: {descriptor}")
        return {}

    try:
        content = descriptor.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read project descriptor: {exc}") from exc

    data = _parse_descriptor(descriptor, content)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Project descriptor must contain a mapping: {descriptor}")

    if descriptor.suffix.lower() == ".toml":
        extra = data.get("tool", {})
    else:
        extra = data.get("extra", data)

    return dict(extra) if isinstance(extra, dict) else {}
