from pathlib import Path

import pytest

from nextest.errors import (
    ConfigParseError,
    NextestError,
    ParseTestListError,
    PartitionerBuilderParseError,
    ProfileNotFound,
    WriteEventError,
    WriteTestListError,
)


def test_config_parse_error_message_and_cause():
    cause = ValueError("bad toml")
    err = ConfigParseError(Path("ws/.config/nextest.toml"), cause)
    assert str(err) == "failed to parse nextest config at `ws/.config/nextest.toml`"
    assert err.__cause__ is cause
    assert isinstance(err, NextestError)


def test_profile_not_found_sorts_profiles():
    err = ProfileNotFound("missing", ["zeta", "default", "ci"])
    assert err.all_profiles == ["ci", "default", "zeta"]
    assert str(err) == "profile 'missing' not found (known profiles: ci, default, zeta)"


def test_partitioner_parse_error_with_format():
    err = PartitionerBuilderParseError("hash:M/N", "some message")
    assert str(err) == 'partition must be in the format "hash:M/N":\nsome message'
    assert isinstance(err, ValueError)


def test_partitioner_parse_error_without_format():
    err = PartitionerBuilderParseError(None, "plain message")
    assert str(err) == "plain message"
    assert err.expected_format is None


def test_parse_test_list_error_command():
    cause = OSError("no such file")
    err = ParseTestListError.command("bin --list", cause)
    assert str(err) == "running 'bin --list' failed"
    assert err.__cause__ is cause
    assert err.error is cause


def test_parse_test_list_error_parse_line():
    err = ParseTestListError.parse_line("bad line", "out text")
    assert str(err) == "bad line\nfull output:\nout text"
    assert err.__cause__ is None
    assert err.full_output == "out text"


def test_write_test_list_error_io_and_json():
    io_err = WriteTestListError(OSError("broken pipe"))
    assert str(io_err) == "error writing to output"
    json_err = WriteTestListError(TypeError("not serializable"))
    assert str(json_err) == "error serializing to JSON"
    assert json_err.is_io is False


def test_write_event_error_variants():
    assert str(WriteEventError(OSError("x"))) == "error writing to output"
    fs = WriteEventError(OSError("x"), Path("store/out"))
    assert str(fs) == "error operating on path store/out"
    junit = WriteEventError(RuntimeError("x"), "store/junit.xml", junit=True)
    assert str(junit) == "error writing JUnit output to store/junit.xml"
    assert isinstance(junit.__cause__, RuntimeError)


def test_write_event_error_junit_requires_file():
    with pytest.raises(ValueError):
        WriteEventError(RuntimeError("x"), junit=True)