"""Building blocks for a Cargo test runner front end: cargo command lines, partitioning, output, errors and exit codes."""

__version__ = "0.1.0"
__all__ = [
    "cargo_cli",
    "errors",
    "exit_codes",
    "expected_error",
    "helpers",
    "metadata",
    "output",
    "partition",
]