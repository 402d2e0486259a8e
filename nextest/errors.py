"""Errors produced by the nextest runner."""

from __future__ import annotations

import os
from collections.abc import Iterable

__all__ = [
    "NextestError",
    "ConfigParseError",
    "ProfileNotFound",
    "PartitionerBuilderParseError",
    "ParseTestListError",
    "WriteTestListError",
    "WriteEventError",
]

StrPath = str | os.PathLike


class NextestError(Exception):
    """Base class for errors produced by the nextest runner."""


class ConfigParseError(NextestError):
    """An error that occurred while parsing the config."""

    def __init__(self, config_file: StrPath, error: BaseException) -> None:
        self.config_file = config_file
        self.error = error
        super().__init__(f"failed to parse nextest config at `{os.fspath(config_file)}`")
        self.__cause__ = error


class ProfileNotFound(NextestError):
    """A profile was requested but is not known to nextest."""

    def __init__(self, profile: str, all_profiles: Iterable[str]) -> None:
        self.profile = str(profile)
        self.all_profiles = sorted(str(name) for name in all_profiles)
        super().__init__(
            f"profile '{self.profile}' not found "
            f"(known profiles: {', '.join(self.all_profiles)})"
        )


class PartitionerBuilderParseError(NextestError, ValueError):
    """An error that occurs while parsing a partition specification."""

    def __init__(self, expected_format: str | None, message: str) -> None:
        self.expected_format = expected_format
        self.message = message
        if expected_format is None:
            text = message
        else:
            text = f'partition must be in the format "{expected_format}":\n{message}'
        super().__init__(text)


class ParseTestListError(NextestError):
    """An error that occurs while parsing test list output.

    Create instances with :meth:`command` or :meth:`parse_line`.
    """

    def __init__(
        self,
        text: str,
        *,
        command: str | None = None,
        error: BaseException | None = None,
        message: str | None = None,
        full_output: str | None = None,
    ) -> None:
        super().__init__(text)
        self.command_text = command
        self.error = error
        self.message = message
        self.full_output = full_output
        if error is not None:
            self.__cause__ = error

    @classmethod
    def command(cls, command: str, error: BaseException) -> ParseTestListError:
        """Running a command to gather the list of tests failed."""
        return cls(f"running '{command}' failed", command=command, error=error)

    @classmethod
    def parse_line(cls, message: str, full_output: str) -> ParseTestListError:
        """A line in the test output could not be parsed."""
        return cls(
            f"{message}\nfull output:\n{full_output}",
            message=message,
            full_output=full_output,
        )


class WriteTestListError(NextestError):
    """An error that occurs while writing list output.

    An :class:`OSError` cause means writing to the output failed; any other
    cause means serializing to JSON failed.
    """

    def __init__(self, error: BaseException) -> None:
        self.error = error
        self.is_io = isinstance(error, OSError)
        super().__init__(
            "error writing to output" if self.is_io else "error serializing to JSON"
        )
        self.__cause__ = error


class WriteEventError(NextestError):
    """An error that occurs while writing an event.

    Without ``file`` the error happened while writing to the output. With
    ``file`` it happened on the file system, or while producing JUnit XML
    when ``junit`` is true.
    """

    def __init__(
        self,
        error: BaseException,
        file: StrPath | None = None,
        *,
        junit: bool = False,
    ) -> None:
        if junit and file is None:
            raise ValueError("a JUnit write error requires the output file")
        self.error = error
        self.file = file
        self.junit = junit
        if file is None:
            text = "error writing to output"
        elif junit:
            text = f"error writing JUnit output to {os.fspath(file)}"
        else:
            text = f"error operating on path {os.fspath(file)}"
        super().__init__(text)
        self.__cause__ = error