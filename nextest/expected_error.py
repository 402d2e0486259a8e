"""Errors that end a nextest invocation with a documented exit code."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from nextest.errors import ConfigParseError, ProfileNotFound
from nextest.exit_codes import NextestExitCode
from nextest.output import _LOGGER, _NO_HEADING_LOGGER, _paint

__all__ = [
    "ExpectedError",
    "CargoMetadataFailed",
    "ProfileNotFoundError",
    "ConfigReadError",
    "BuildFailed",
    "TestRunFailed",
]

_SHELL_SPECIAL = re.compile(r"([^A-Za-z0-9_\-.,:/@\n])")


def _shell_escape(arg: str) -> str:
    if not arg:
        return "''"
    return _SHELL_SPECIAL.sub(r"\\\1", arg).replace("\n", "'\n'")


class ExpectedError(Exception):
    """An error in a program that nextest ran, not in nextest itself."""

    _exit_code: int = 1

    def process_exit_code(self) -> int:
        """Return the exit code for the process."""
        return int(self._exit_code)

    def _report(self, logger: logging.Logger) -> BaseException | None:
        """Log the headline and return the first cause to show, if any."""
        return None

    def display_to_stderr(self) -> None:
        """Log this error and its causes to standard error."""
        next_error = self._report(logging.getLogger(_LOGGER))
        no_heading = logging.getLogger(_NO_HEADING_LOGGER)
        while next_error is not None:
            no_heading.error("%s", f"\nCaused by:\n  {next_error}")
            next_error = next_error.__cause__


class CargoMetadataFailed(ExpectedError):
    """``cargo metadata`` failed; its own output says enough."""

    _exit_code = NextestExitCode.CARGO_METADATA_FAILED

    def __init__(self) -> None:
        super().__init__("cargo metadata failed")


class ProfileNotFoundError(ExpectedError):
    """The requested profile does not exist."""

    _exit_code = NextestExitCode.SETUP_ERROR

    def __init__(self, err: ProfileNotFound) -> None:
        super().__init__("profile not found")
        self.err = err

    def _report(self, logger: logging.Logger) -> BaseException | None:
        logger.error("%s", self.err)
        return self.err.__cause__


class ConfigReadError(ExpectedError):
    """The nextest config could not be read."""

    _exit_code = NextestExitCode.SETUP_ERROR

    def __init__(self, err: ConfigParseError) -> None:
        super().__init__("config read error")
        self.err = err

    def _report(self, logger: logging.Logger) -> BaseException | None:
        logger.error("%s", self.err)
        return self.err.__cause__


class BuildFailed(ExpectedError):
    """Building the tests failed."""

    _exit_code = NextestExitCode.BUILD_FAILED

    def __init__(self, command: Iterable[str], exit_code: int | None) -> None:
        super().__init__("build failed")
        self.escaped_command = [_shell_escape(str(arg)) for arg in command]
        self.exit_code = exit_code

    def _report(self, logger: logging.Logger) -> BaseException | None:
        with_code = "" if self.exit_code is None else f" with code {_paint(str(self.exit_code), '1')}"
        command = _paint(" ".join(self.escaped_command), "1")
        logger.error("%s", f"command {command} exited{with_code}")
        return None


class TestRunFailed(ExpectedError):
    """One or more tests failed."""

    __test__ = False
    _exit_code = NextestExitCode.TEST_RUN_FAILED

    def __init__(self) -> None:
        super().__init__("test run failed")

    def _report(self, logger: logging.Logger) -> BaseException | None:
        logger.error("test run failed")
        return None