"""Protocol-level size limits shared by the producer and consumer."""

# Maximum size of a single request the client will build, in bytes.
MAX_REQUEST_SIZE: int = 100 * 1024 * 1024

# Maximum size of a single response the client will read, in bytes.
MAX_RESPONSE_SIZE: int = 100 * 1024 * 1024

# Room left in every request for headers and message-set framing.
REQUEST_OVERHEAD_BYTES: int = 10 * 1024


def force_flush_threshold() -> int:
    """
    Byte count at which the producer must flush regardless of other settings.

    Batches are cut at this size so that a produce request never exceeds
    MAX_REQUEST_SIZE once overhead is added. Looked up at call time so the
    ceiling follows MAX_REQUEST_SIZE if it is changed.
    """
    return MAX_REQUEST_SIZE - REQUEST_OVERHEAD_BYTES
