"""Host event interface and the console implementation used by the CLI."""

from __future__ import annotations

import re
import sys
from collections.abc import Mapping
from typing import Any, Protocol, TextIO


class HostEvent(Protocol):
    """What the install hook reads from the host.

    Messages passed to :meth:`write` carry their severity as inline
    ``<info>``, ``<comment>`` or ``<error>`` tags; rendering them is up to the
    host. A backslash before a tag (``\\<info>``) marks it as literal text.
    """

    def get_extra(self) -> Mapping[str, Any]: ...

    def is_dev_mode(self) -> bool: ...

    def is_verbose(self) -> bool: ...

    def write(self, message: str, newline: bool = True) -> None: ...


ANSI_STYLES = {
    "info": "\033[32m",
    "comment": "\033[33m",
    "error": "\033[37;41m",
}
ANSI_RESET = "\033[0m"

_TAG_RE = re.compile(r"(\\?)<(/?)(info|comment|error)>")
_ESCAPE_RE = re.compile(r"<(/?(?:info|comment|error))>")


def escape_tags(text: str) -> str:
    """Escape severity tags in ``text`` so it is written verbatim."""
    return _ESCAPE_RE.sub(r"\\<\1>", text)


def render_tags(message: str, ansi: bool) -> str:
    """Replace severity tags with ANSI codes, or drop them when ``ansi`` is off.

    Tags escaped by :func:`escape_tags` are emitted as literal text.
    """

    def _replace(match: re.Match[str]) -> str:
        if match.group(1):
            return match.group(0)[1:]
        if not ansi:
            return ""
        if match.group(2):
            return ANSI_RESET
        return ANSI_STYLES[match.group(3)]

    return _TAG_RE.sub(_replace, message)


class ConsoleEvent:
    """HostEvent backed by a text stream.

    ``ansi=None`` enables colours only when the stream is a terminal.
    """

    def __init__(
        self,
        extra: Mapping[str, Any],
        dev_mode: bool = True,
        verbose: bool = False,
        stream: TextIO | None = None,
        ansi: bool | None = None,
    ) -> None:
        self._extra = extra
        self._dev_mode = dev_mode
        self._verbose = verbose
        self._stream = stream if stream is not None else sys.stdout
        if ansi is None:
            isatty = getattr(self._stream, "isatty", None)
            ansi = bool(isatty and isatty())
        self._ansi = ansi

    def get_extra(self) -> Mapping[str, Any]:
        return self._extra

    def is_dev_mode(self) -> bool:
        return self._dev_mode

    def is_verbose(self) -> bool:
        return self._verbose

    def write(self, message: str, newline: bool = True) -> None:
        self._stream.write(render_tags(message, self._ansi))
        if newline:
            self._stream.write("\n")
        self._stream.flush()
