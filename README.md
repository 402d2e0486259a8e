# nextest

`nextest` is a pure-Python library of building blocks for a front end that builds Rust
tests with Cargo and runs them. It has no third-party dependencies.

## Modules

- `nextest.cargo_cli`
  - `CargoOptions`: a dataclass of the options passed down to cargo (`lib`, `bin`,
    `bins`, `test`, `tests`, `bench`, `benches`, `all_targets`, `packages`,
    `workspace`, `exclude`, `all`, `release`, `cargo_profile`, `build_jobs`,
    `features`, `all_features`, `no_default_features`, `target`, `target_dir`,
    `ignore_rust_version`, `unit_graph`, `future_incompat_report`, `frozen`, `locked`,
    `offline`, `config`, `unstable_flags`). `to_args()` returns the matching cargo
    arguments in a fixed order, e.g. `--package NAME`, `--profile NAME`,
    `--jobs N`, `-Z FLAG`.
  - `CargoCli(command, manifest_path=None, output=OutputContext())`: a cargo invocation
    under construction. `add_arg`, `add_args` and `add_options` append arguments and
    return the object for chaining. `all_args()` returns cargo, the command and the added
    arguments; `to_command()` returns the full argument vector, including the
    `--color=...` argument from the output context and `--manifest-path` when set.
  - `cargo_path()`: the `CARGO` environment variable if set, otherwise `cargo`.
- `nextest.partition`: split a test run across machines.
  `PartitionerBuilder.parse("hash:1/2")` or `PartitionerBuilder.parse("count:2/3")`
  gives a builder (`kind`, `shard`, `total_shards`); `build()` returns a
  `CountPartitioner` (round-robin by order of appearance) or a `HashPartitioner`
  (by the XXH64 hash of the test name, so the result is the same on every machine).
  Ask a partitioner `test_matches(name)` for each test. Invalid specifications raise
  `PartitionerBuilderParseError`. `xxh64(data, seed=0)` is exposed as well.
- `nextest.output`: `Color` (`auto`, `always`, `never`) with `parse`, `to_arg` and
  `should_colorize(stream)`; `OutputOpts` and `OutputContext`; and
  `NextestLogFormatter`, which prefixes messages with `error:`, `warning:`, `info:` or
  `debug:`. `OutputOpts.init()` applies the color choice and installs a handler on the
  `nextest` logger that writes to standard error; its level comes from the
  `NEXTEST_LOG` environment variable (`off`, `error`, `warn`, `info`, `debug`,
  `trace`; default `error`).
- `nextest.errors`: `NextestError` and its subclasses `ConfigParseError`,
  `ProfileNotFound`, `PartitionerBuilderParseError`, `ParseTestListError`
  (built with `ParseTestListError.command` or `ParseTestListError.parse_line`),
  `WriteTestListError` and `WriteEventError`.
- `nextest.expected_error`: `ExpectedError` and its subclasses `CargoMetadataFailed`,
  `ProfileNotFoundError`, `ConfigReadError`, `BuildFailed` and `TestRunFailed`.
  `process_exit_code()` returns the documented exit code; `display_to_stderr()` logs the
  error and its chain of causes.
- `nextest.exit_codes`: `NextestExitCode`, an `IntEnum` of the documented exit codes:
  `SETUP_ERROR` 96, `TEST_RUN_FAILED` 100, `BUILD_FAILED` 101,
  `CARGO_METADATA_FAILED` 102.
- `nextest.metadata`: `CommandError` and its subclasses `CommandExecError`,
  `CommandFailedError` and `CommandJsonError`, for failures while running a test
  listing command and reading its JSON output.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Examples

```python
from nextest.partition import PartitionerBuilder

builder = PartitionerBuilder.parse("hash:1/3")
partitioner = builder.build()
selected = [name for name in ["a::one", "a::two", "b::three"]
            if partitioner.test_matches(name)]
```

```python
from nextest.cargo_cli import CargoCli, CargoOptions
from nextest.output import Color, OutputContext

options = CargoOptions(packages=["my-crate"], release=True)
cli = CargoCli("test", None, OutputContext(verbose=False, color=Color.NEVER))
cli.add_args(["--no-run", "--message-format", "json-render-diagnostics"])
cli.add_options(options)
print(cli.to_command())
```

## What this package does not do

The package provides no command-line program of its own and starts no processes:
`CargoCli.to_command()` only returns an argument vector for the caller to run. It does
not read nextest configuration files or profiles, does not parse Cargo's build messages
or test binary listings, and does not run or report on tests. The error classes for
those steps are provided so a caller that does them can raise and report them.