"""Support for partitioning test runs across several machines."""

from __future__ import annotations

import re
import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from nextest.errors import PartitionerBuilderParseError

__all__ = [
    "PartitionKind",
    "PartitionerBuilder",
    "Partitioner",
    "CountPartitioner",
    "HashPartitioner",
    "xxh64",
]

_MASK = (1 << 64) - 1
_P1 = 11400714785074694791
_P2 = 14029467366897019727
_P3 = 1609587929392839161
_P4 = 9650029242287828579
_P5 = 2870177450012600261


def _rotl(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (64 - bits))) & _MASK


def _round(acc: int, lane: int) -> int:
    acc = (acc + lane * _P2) & _MASK
    return (_rotl(acc, 31) * _P1) & _MASK


def _merge_round(acc: int, value: int) -> int:
    acc ^= _round(0, value)
    return (acc * _P1 + _P4) & _MASK


def xxh64(data: bytes, seed: int = 0) -> int:
    """Return the 64-bit xxHash of ``data``."""
    data = bytes(data)
    length = len(data)
    stripe_end = length - length % 32

    if length >= 32:
        v1 = (seed + _P1 + _P2) & _MASK
        v2 = (seed + _P2) & _MASK
        v3 = seed & _MASK
        v4 = (seed - _P1) & _MASK
        for a, b, c, d in struct.iter_unpack("<4Q", data[:stripe_end]):
            v1 = _round(v1, a)
            v2 = _round(v2, b)
            v3 = _round(v3, c)
            v4 = _round(v4, d)
        h = (_rotl(v1, 1) + _rotl(v2, 7) + _rotl(v3, 12) + _rotl(v4, 18)) & _MASK
        for value in (v1, v2, v3, v4):
            h = _merge_round(h, value)
    else:
        h = (seed + _P5) & _MASK

    h = (h + length) & _MASK

    rest = data[stripe_end:]
    words_end = len(rest) - len(rest) % 8
    for (word,) in struct.iter_unpack("<Q", rest[:words_end]):
        h ^= _round(0, word)
        h = (_rotl(h, 27) * _P1 + _P4) & _MASK

    rest = rest[words_end:]
    if len(rest) >= 4:
        (half,) = struct.unpack("<I", rest[:4])
        h ^= (half * _P1) & _MASK
        h = (_rotl(h, 23) * _P2 + _P3) & _MASK
        rest = rest[4:]

    for byte in rest:
        h ^= (byte * _P5) & _MASK
        h = (_rotl(h, 11) * _P1) & _MASK

    h ^= h >> 33
    h = (h * _P2) & _MASK
    h ^= h >> 29
    h = (h * _P3) & _MASK
    h ^= h >> 32
    return h


class PartitionKind(Enum):
    """How tests are divided between shards."""

    COUNT = "count"
    HASH = "hash"


_U64 = re.compile(r"\+?[0-9]+")


def _parse_u64(text: str, what: str, expected_format: str) -> int:
    if not text:
        reason = "cannot parse integer from empty string"
    elif not _U64.fullmatch(text):
        reason = "invalid digit found in string"
    else:
        value = int(text)
        if value <= _MASK:
            return value
        reason = "number too large to fit in target type"
    raise PartitionerBuilderParseError(
        expected_format, f"failed to parse {what} '{text}' as u64: {reason}"
    )


def _parse_shards(text: str, expected_format: str) -> tuple[int, int]:
    shard_str, sep, total_str = text.partition("/")
    if not sep:
        raise PartitionerBuilderParseError(
            expected_format, f"expected input '{text}' to be in the format M/N"
        )
    shard = _parse_u64(shard_str, "shard", expected_format)
    total_shards = _parse_u64(total_str, "total_shards", expected_format)
    if not 1 <= shard <= total_shards:
        raise PartitionerBuilderParseError(
            expected_format,
            f"shard {shard} must be a number between 1 and total shards "
            f"{total_shards}, inclusive",
        )
    return shard, total_shards


@dataclass(frozen=True)
class PartitionerBuilder:
    """Describes a partition; builds a fresh :class:`Partitioner` per test binary."""

    kind: PartitionKind
    shard: int
    total_shards: int

    @classmethod
    def parse(cls, text: str) -> PartitionerBuilder:
        """Parse a specification such as ``hash:1/2`` or ``count:2/3``."""
        for kind in PartitionKind:
            prefix = f"{kind.value}:"
            if text.startswith(prefix):
                shard, total = _parse_shards(text[len(prefix):], f"{prefix}M/N")
                return cls(kind, shard, total)
        raise PartitionerBuilderParseError(
            None,
            f"partition input '{text}' must begin with \"hash:\" or \"count:\"",
        )

    def build(self) -> Partitioner:
        """Create a new partitioner for this specification."""
        if self.kind is PartitionKind.COUNT:
            return CountPartitioner(self.shard, self.total_shards)
        return HashPartitioner(self.shard, self.total_shards)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.shard}/{self.total_shards}"


class Partitioner(ABC):
    """Decides which tests belong to a partition, typically within one test binary."""

    @abstractmethod
    def test_matches(self, test_name: str) -> bool:
        """Return true if the given test belongs to this partition."""


@dataclass
class CountPartitioner(Partitioner):
    """Assigns tests to shards in round-robin order of appearance."""

    shard: int
    total_shards: int
    _curr: int = field(default=0, init=False, repr=False)

    def test_matches(self, test_name: str) -> bool:
        matches = self._curr == self.shard - 1
        self._curr = (self._curr + 1) % self.total_shards
        return matches


@dataclass
class HashPartitioner(Partitioner):
    """Assigns tests to shards by hashing their names; stateless."""

    shard: int
    total_shards: int

    def test_matches(self, test_name: str) -> bool:
        digest = xxh64(test_name.encode("utf-8") + b"\xff", 0)
        return digest % self.total_shards == self.shard - 1