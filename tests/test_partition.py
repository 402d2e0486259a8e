import pytest

from nextest.errors import PartitionerBuilderParseError
from nextest.partition import (
    CountPartitioner,
    HashPartitioner,
    PartitionerBuilder,
    PartitionKind,
    xxh64,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("hash:1/2", PartitionerBuilder(PartitionKind.HASH, 1, 2)),
        ("hash:1/1", PartitionerBuilder(PartitionKind.HASH, 1, 1)),
        ("hash:99/200", PartitionerBuilder(PartitionKind.HASH, 99, 200)),
    ],
)
def test_parse_successes(text, expected):
    assert PartitionerBuilder.parse(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "foo",
        "hash",
        "hash:",
        "hash:1",
        "hash:1/",
        "hash:0/2",
        "hash:3/2",
        "hash:m/2",
        "hash:1/n",
        "hash:1/2/3",
    ],
)
def test_parse_failures(text):
    with pytest.raises(PartitionerBuilderParseError):
        PartitionerBuilder.parse(text)


def test_parse_count():
    builder = PartitionerBuilder.parse("count:2/3")
    assert builder == PartitionerBuilder(PartitionKind.COUNT, 2, 3)
    assert str(builder) == "count:2/3"


def test_parse_error_messages():
    with pytest.raises(PartitionerBuilderParseError) as info:
        PartitionerBuilder.parse("foo")
    assert str(info.value) == "partition input 'foo' must begin with \"hash:\" or \"count:\""
    with pytest.raises(PartitionerBuilderParseError) as info:
        PartitionerBuilder.parse("hash:3/2")
    assert info.value.expected_format == "hash:M/N"
    assert "shard 3 must be a number between 1 and total shards 2, inclusive" in str(info.value)


def test_xxh64_known_values():
    assert xxh64(b"", 0) == 0xEF46DB3751D8E999
    assert xxh64(b"abc", 0) == 0x44BC2CF5AD770999


def test_xxh64_long_input_deterministic_and_seeded():
    data = bytes(range(100))
    assert xxh64(data, 0) == xxh64(bytearray(data), 0)
    assert xxh64(data, 0) != xxh64(data, 1)
    assert 0 <= xxh64(data, 0) < 2**64


def test_count_partitioner_round_robin():
    partitioner = PartitionerBuilder.parse("count:2/3").build()
    assert isinstance(partitioner, CountPartitioner)
    results = [partitioner.test_matches(f"t{i}") for i in range(7)]
    assert results == [False, True, False, False, True, False, False]


def test_count_partitioners_cover_each_test_once():
    names = [f"test_{i}" for i in range(20)]
    partitioners = [CountPartitioner(shard, 4) for shard in range(1, 5)]
    for name in names:
        assert sum(p.test_matches(name) for p in partitioners) == 1


def test_hash_partitioners_cover_each_test_once():
    builders = [PartitionerBuilder(PartitionKind.HASH, s, 3) for s in range(1, 4)]
    partitioners = [b.build() for b in builders]
    assert all(isinstance(p, HashPartitioner) for p in partitioners)
    for i in range(50):
        name = f"module::test_{i}"
        assert sum(p.test_matches(name) for p in partitioners) == 1


def test_hash_partitioner_is_stateless():
    partitioner = HashPartitioner(1, 2)
    first = [partitioner.test_matches(f"t{i}") for i in range(10)]
    second = [partitioner.test_matches(f"t{i}") for i in range(10)]
    assert first == second


def test_single_shard_matches_everything():
    partitioner = PartitionerBuilder.parse("hash:1/1").build()
    assert all(partitioner.test_matches(f"x{i}") for i in range(10))