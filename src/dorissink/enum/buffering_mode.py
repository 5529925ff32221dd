from enum import StrEnum


class BufferingMode(StrEnum):
    """
    Defines which buffering strategy the sink applies to incoming rows.
    """

    Checkpoint = "checkpoint"
    """
    Legacy mode: rows are streamed into a rotation of `buffer_count` buffers of
    `buffer_size` bytes and the load is committed on checkpoint. The load job
    status is polled every `check_interval` milliseconds.
    """

    Batch = "batch"
    """
    Rows are collected and handed to an internal flush queue of
    `flush_queue_size` entries. A flush fires on whichever threshold is hit
    first: `buffer_flush_max_rows`, `buffer_flush_max_bytes` or
    `buffer_flush_interval_ms`.
    """
