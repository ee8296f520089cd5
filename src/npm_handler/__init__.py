"""npm-handler core package.

Runs ``npm install`` for every ``package.json`` found below a project root as
part of the host's dependency install. The orchestration in :mod:`core` only
talks to the host through the :class:`~npm_handler.host.HostEvent` protocol, so
it is callable from a host plugin hook and from the standalone CLI alike.
"""

from .config import ConfigError, InstallConfig, load_extra
from .core import install
from .errors import NpmHandlerError
from .executable import ExecutableNotFound, resolve_executable

__all__ = [
    "ConfigError",
    "ExecutableNotFound",
    "InstallConfig",
    "NpmHandlerError",
    "install",
    "load_extra",
    "resolve_executable",
]
