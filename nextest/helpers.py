"""Small output helpers shared by the runner."""

from __future__ import annotations

from collections.abc import Callable
from typing import TextIO

__all__ = ["write_test_name"]


def write_test_name(
    name: str,
    style: Callable[[str], str] | None,
    writer: TextIO,
) -> None:
    """Write a test name, applying ``style`` to the part after the last ``::``."""
    rest, sep, trailing = name.rpartition("::")
    if sep:
        writer.write(f"{rest}::")
    writer.write(style(trailing) if style is not None else trailing)