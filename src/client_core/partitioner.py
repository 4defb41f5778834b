"""
Partitioning strategies for produced records.

A partitioner constructor takes a topic name and returns a Partitioner. The
configuration model stores the constructor, not an instance, so that each
topic gets its own partitioner state.
"""

import random
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol, runtime_checkable

# FNV-1a 32-bit parameters
_FNV32_OFFSET_BASIS = 0x811C9DC5
_FNV32_PRIME = 0x01000193


@dataclass(frozen=True)
class ProducerRecord:
    """The parts of an outgoing record a partitioner may look at."""

    topic: str
    key: Optional[bytes] = None
    value: Optional[bytes] = None
    partition: int = 0


@runtime_checkable
class Partitioner(Protocol):
    """
    Protocol for choosing the partition a record is sent to.
    """

    def partition(self, record: ProducerRecord, num_partitions: int) -> int:
        """
        Pick a partition for the record.

        Args:
            record: Record being produced
            num_partitions: Number of partitions in the record's topic

        Returns:
            Partition index in [0, num_partitions)
        """
        ...

    def requires_consistency(self) -> bool:
        """
        Whether the same record must always map to the same partition.

        Producers use this to decide if a record may be redirected when
        its chosen partition is unavailable.
        """
        ...


PartitionerConstructor = Callable[[str], Partitioner]


def _check_partitions(num_partitions: int) -> None:
    if num_partitions <= 0:
        raise ValueError(f"num_partitions must be > 0, got {num_partitions}")


def fnv1a_32(data: bytes) -> int:
    """32-bit FNV-1a hash of data."""
    h = _FNV32_OFFSET_BASIS
    for byte in data:
        h ^= byte
        h = (h * _FNV32_PRIME) & 0xFFFFFFFF
    return h


class RandomPartitioner:
    """Sends each record to a uniformly random partition."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def partition(self, record: ProducerRecord, num_partitions: int) -> int:
        _check_partitions(num_partitions)
        return self._rng.randrange(num_partitions)

    def requires_consistency(self) -> bool:
        return False


class RoundRobinPartitioner:
    """Walks through the partitions in order, wrapping around."""

    def __init__(self):
        self._next = 0

    def partition(self, record: ProducerRecord, num_partitions: int) -> int:
        _check_partitions(num_partitions)
        if self._next >= num_partitions:
            self._next = 0
        chosen = self._next
        self._next += 1
        return chosen

    def requires_consistency(self) -> bool:
        return False


class HashPartitioner:
    """
    Hashes the record key to pick a partition.

    Records with the same key always land on the same partition as long as
    the partition count is unchanged. Records without a key are spread
    randomly.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._random = RandomPartitioner(rng)

    def partition(self, record: ProducerRecord, num_partitions: int) -> int:
        _check_partitions(num_partitions)
        if record.key is None:
            return self._random.partition(record, num_partitions)

        # Signed 32-bit interpretation keeps placement stable with other clients
        hashed = fnv1a_32(record.key)
        if hashed >= 0x80000000:
            hashed -= 0x100000000
        return abs(hashed) % num_partitions

    def requires_consistency(self) -> bool:
        return True


class ManualPartitioner:
    """Uses the partition already set on the record."""

    def partition(self, record: ProducerRecord, num_partitions: int) -> int:
        _check_partitions(num_partitions)
        return record.partition

    def requires_consistency(self) -> bool:
        return True


def new_hash_partitioner(topic: str) -> Partitioner:
    return HashPartitioner()


def new_random_partitioner(topic: str) -> Partitioner:
    return RandomPartitioner()


def new_round_robin_partitioner(topic: str) -> Partitioner:
    return RoundRobinPartitioner()


def new_manual_partitioner(topic: str) -> Partitioner:
    return ManualPartitioner()


# Name -> constructor, used when partitioners are selected from config files
PARTITIONERS: Dict[str, PartitionerConstructor] = {
    "hash": new_hash_partitioner,
    "random": new_random_partitioner,
    "round_robin": new_round_robin_partitioner,
    "manual": new_manual_partitioner,
}


def get_partitioner(name: str) -> PartitionerConstructor:
    """Look up a partitioner constructor by name."""
    try:
        return PARTITIONERS[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"partitioner must be one of {list(PARTITIONERS)}, got '{name}'"
        ) from None


def partitioner_name(constructor: Optional[PartitionerConstructor]) -> Optional[str]:
    """Reverse lookup of a constructor's registered name, if it has one."""
    for name, registered in PARTITIONERS.items():
        if registered is constructor:
            return name
    return None
