"""
Core types and enums used across modules.

This module provides the enumerations shared by the configuration model
and the client collaborators that consume it.
"""

from enum import Enum, IntEnum


class ErrorCategory(Enum):
    """
    Classification of error types for handling decisions.

    Categories:
        TRANSIENT: Temporary failures that may succeed on retry
                   (e.g., broker unavailable, leader election in progress)
        PERMANENT: Non-retriable failures that won't succeed on retry
                   (e.g., configuration issues, oversized messages)
        UNKNOWN: Unclassified errors
    """

    TRANSIENT = "transient"
    PERMANENT = "permanent"
    UNKNOWN = "unknown"


class RequiredAcks(IntEnum):
    """
    Acknowledgement level requested from the broker for produce requests.

    Equivalent to the `request.required.acks` setting of the JVM producer.
    Any integer is accepted on the wire; values above 1 are deprecated.
    """

    # Broker doesn't send any response; TCP ack is all you get.
    NO_RESPONSE = 0
    # Wait for only the local commit to succeed before responding.
    WAIT_FOR_LOCAL = 1
    # Wait for all in-sync replicas to commit before responding.
    WAIT_FOR_ALL = -1


class CompressionCodec(IntEnum):
    """Compression codec applied to produced message sets."""

    NONE = 0
    GZIP = 1
    SNAPPY = 2
    LZ4 = 3
    ZSTD = 4

    @classmethod
    def from_name(cls, name: str) -> "CompressionCodec":
        """Look up a codec by its case-insensitive name (e.g. "gzip")."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = [member.name.lower() for member in cls]
            raise ValueError(f"compression must be one of {valid}, got '{name}'") from None
