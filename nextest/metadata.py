"""Errors raised while running ``cargo nextest`` commands and reading their output."""

from __future__ import annotations

__all__ = [
    "CommandError",
    "CommandExecError",
    "CommandFailedError",
    "CommandJsonError",
]


class CommandError(Exception):
    """An error that occurs while running a ``cargo nextest`` command."""


class CommandExecError(CommandError):
    """Executing the process resulted in an error."""

    def __init__(self, error: OSError) -> None:
        super().__init__("`cargo nextest` process execution failed")
        self.error = error
        self.__cause__ = error


class CommandFailedError(CommandError):
    """The command exited with a non-zero code.

    ``exit_code`` may be cross-referenced against
    :class:`nextest.exit_codes.NextestExitCode`; it is ``None`` when the
    process was terminated without an exit code.
    """

    def __init__(self, exit_code: int | None, stderr: bytes) -> None:
        self.exit_code = exit_code
        self.stderr = bytes(stderr)
        exit_code_str = "" if exit_code is None else f" with exit code {int(exit_code)}"
        stderr_text = self.stderr.decode("utf-8", errors="replace")
        super().__init__(f"`cargo nextest` failed{exit_code_str}, stderr:\n{stderr_text}\n")


class CommandJsonError(CommandError):
    """Parsing the JSON output of the command failed."""

    def __init__(self, error: ValueError) -> None:
        super().__init__("parsing `cargo nextest` JSON output failed")
        self.error = error
        self.__cause__ = error