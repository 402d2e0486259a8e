"""Documented exit codes for ``cargo nextest`` failures."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["NextestExitCode"]


class NextestExitCode(IntEnum):
    """Exit codes for expected ``cargo nextest`` failures.

    Unknown or unexpected failures always result in exit code 1.
    """

    CARGO_METADATA_FAILED = 102
    """Running ``cargo metadata`` produced an error."""

    BUILD_FAILED = 101
    """Building tests produced an error."""

    TEST_RUN_FAILED = 100
    """One or more tests failed."""

    SETUP_ERROR = 96
    """A user issue happened while setting up a nextest invocation."""