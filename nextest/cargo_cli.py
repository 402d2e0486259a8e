"""Building cargo command lines."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field

from nextest.output import OutputContext

__all__ = ["CargoOptions", "CargoCli", "cargo_path"]


def cargo_path() -> str:
    """Return the cargo executable: ``$CARGO`` if set, otherwise ``cargo``."""
    return os.environ.get("CARGO", "cargo")


def _repeat(flag: str, values: Iterable[str]) -> list[str]:
    return [arg for value in values for arg in (flag, value)]


@dataclass
class CargoOptions:
    """Options passed down to cargo."""

    lib: bool = False
    bin: list[str] = field(default_factory=list)
    bins: bool = False
    test: list[str] = field(default_factory=list)
    tests: bool = False
    bench: list[str] = field(default_factory=list)
    benches: bool = False
    all_targets: bool = False
    packages: list[str] = field(default_factory=list)
    workspace: bool = False
    exclude: list[str] = field(default_factory=list)
    all: bool = False
    release: bool = False
    cargo_profile: str | None = None
    build_jobs: str | None = None
    features: list[str] = field(default_factory=list)
    all_features: bool = False
    no_default_features: bool = False
    target: str | None = None
    target_dir: str | None = None
    ignore_rust_version: bool = False
    unit_graph: bool = False
    future_incompat_report: bool = False
    frozen: bool = False
    locked: bool = False
    offline: bool = False
    config: list[str] = field(default_factory=list)
    unstable_flags: list[str] = field(default_factory=list)

    def to_args(self) -> list[str]:
        """Return the cargo arguments for these options, in cargo's order."""
        args: list[str] = []
        if self.lib:
            args.append("--lib")
        args += _repeat("--bin", self.bin)
        if self.bins:
            args.append("--bins")
        args += _repeat("--test", self.test)
        if self.tests:
            args.append("--tests")
        args += _repeat("--bench", self.bench)
        if self.benches:
            args.append("--benches")
        if self.all_targets:
            args.append("--all-targets")
        args += _repeat("--package", self.packages)
        if self.workspace:
            args.append("--workspace")
        args += _repeat("--exclude", self.exclude)
        if self.all:
            args.append("--all")
        if self.release:
            args.append("--release")
        if self.cargo_profile is not None:
            args += ["--profile", self.cargo_profile]
        if self.build_jobs is not None:
            args += ["--jobs", self.build_jobs]
        args += _repeat("--features", self.features)
        if self.all_features:
            args.append("--all-features")
        if self.no_default_features:
            args.append("--no-default-features")
        if self.target is not None:
            args += ["--target", self.target]
        if self.target_dir is not None:
            args += ["--target-dir", self.target_dir]
        if self.ignore_rust_version:
            args.append("--ignore-rust-version")
        if self.unit_graph:
            args.append("--unit-graph")
        if self.future_incompat_report:
            args.append("--future-incompat-report")
        if self.frozen:
            args.append("--frozen")
        if self.locked:
            args.append("--locked")
        if self.offline:
            args.append("--offline")
        args += _repeat("--config", self.config)
        args += _repeat("-Z", self.unstable_flags)
        return args


@dataclass
class CargoCli:
    """A cargo invocation under construction.

    The cargo executable is resolved when the object is created.
    """

    command: str
    manifest_path: str | os.PathLike | None = None
    output: OutputContext = field(default_factory=OutputContext)
    cargo_path: str = field(init=False)
    args: list[str] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self.cargo_path = cargo_path()

    def add_arg(self, arg: str) -> CargoCli:
        """Append one argument."""
        self.args.append(arg)
        return self

    def add_args(self, args: Iterable[str]) -> CargoCli:
        """Append several arguments."""
        if isinstance(args, str):
            raise TypeError("add_args expects an iterable of arguments, not a string")
        self.args.extend(args)
        return self

    def add_options(self, options: CargoOptions) -> CargoCli:
        """Append the arguments for the given cargo options."""
        self.args.extend(options.to_args())
        return self

    def all_args(self) -> list[str]:
        """Return cargo, the command and the added arguments."""
        return [self.cargo_path, self.command, *self.args]

    def to_command(self) -> list[str]:
        """Return the full argument vector to start cargo with."""
        argv = [self.cargo_path, self.output.color.to_arg(), self.command]
        if self.manifest_path is not None:
            argv += ["--manifest-path", os.fspath(self.manifest_path)]
        argv += self.args
        return argv