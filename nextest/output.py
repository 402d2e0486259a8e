"""Output options: color handling and log formatting for the command line."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

__all__ = ["Color", "OutputContext", "OutputOpts", "NextestLogFormatter"]

_LOGGER = "nextest"
_NO_HEADING_LOGGER = "nextest.no_heading"
_TRACE = 5

_LEVELS = {
    "off": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": _TRACE,
}

# Process-wide color override: None means decide per stream.
_override: bool | None = None


def _stream_supports_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    force = os.environ.get("FORCE_COLOR")
    if force is not None and force not in ("", "0", "false"):
        return True
    isatty = getattr(stream, "isatty", None)
    try:
        tty = bool(isatty()) if isatty is not None else False
    except (ValueError, OSError):
        tty = False
    if not tty:
        return False
    return os.environ.get("TERM") != "dumb"


def _paint(
    text: str,
    *codes: str,
    stream: TextIO | None = None,
    enabled: bool | None = None,
) -> str:
    """Wrap ``text`` in ANSI codes if color is enabled for ``stream``."""
    if enabled is None:
        if _override is not None:
            enabled = _override
        else:
            enabled = _stream_supports_color(stream if stream is not None else sys.stderr)
    if not enabled:
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


class Color(Enum):
    """When to produce color output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"

    @classmethod
    def parse(cls, text: str) -> Color:
        """Parse ``auto``, ``always`` or ``never``."""
        try:
            return cls(text)
        except ValueError:
            raise ValueError(
                f"{text} is not a valid option, expected `auto`, `always` or `never`"
            ) from None

    def to_arg(self) -> str:
        """Return the matching ``--color`` argument for cargo."""
        return f"--color={self.value}"

    def should_colorize(self, stream: TextIO) -> bool:
        """Return true if output written to ``stream`` should be colored."""
        if self is Color.AUTO:
            return _stream_supports_color(stream)
        return self is Color.ALWAYS

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OutputContext:
    """Output settings in effect for a run."""

    verbose: bool = False
    color: Color = Color.AUTO


def _level_from_env(spec: str | None) -> int:
    level = logging.ERROR
    if not spec:
        return level
    for directive in spec.split(","):
        name = directive.strip().lower()
        if name in _LEVELS:
            level = _LEVELS[name]
    return level


class _NextestHandler(logging.StreamHandler):
    """Stream handler installed by :meth:`OutputOpts.init`."""


def _install_logging() -> None:
    logger = logging.getLogger(_LOGGER)
    for handler in [h for h in logger.handlers if isinstance(h, _NextestHandler)]:
        logger.removeHandler(handler)
    handler = _NextestHandler(sys.stderr)
    handler.setFormatter(NextestLogFormatter())
    handler.addFilter(
        lambda record: record.name == _NO_HEADING_LOGGER or record.levelno >= logging.DEBUG
    )
    logger.addHandler(handler)
    logger.setLevel(_level_from_env(os.environ.get("NEXTEST_LOG")))
    logger.propagate = False


@dataclass(frozen=True)
class OutputOpts:
    """Output options given on the command line."""

    verbose: bool = False
    color: Color = Color.AUTO

    def init(self) -> OutputContext:
        """Apply the color choice, set up logging and return the output context."""
        global _override
        _override = {Color.AUTO: None, Color.ALWAYS: True, Color.NEVER: False}[self.color]
        _install_logging()
        return OutputContext(verbose=self.verbose, color=self.color)


_HEADINGS = (
    (logging.ERROR, "error", ("1", "31")),
    (logging.WARNING, "warning", ("1", "33")),
    (logging.INFO, "info", ("1",)),
    (logging.DEBUG, "debug", ("1",)),
)


class NextestLogFormatter(logging.Formatter):
    """Formats records as ``level: message``; records below debug produce nothing.

    ``colorize`` forces headings on or off; by default the process-wide
    color choice for standard error decides.
    """

    def __init__(self, colorize: bool | None = None) -> None:
        super().__init__()
        self.colorize = colorize

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.name == _NO_HEADING_LOGGER:
            return message
        for threshold, heading, codes in _HEADINGS:
            if record.levelno >= threshold:
                styled = _paint(heading, *codes, stream=sys.stderr, enabled=self.colorize)
                return f"{styled}: {message}"
        return ""