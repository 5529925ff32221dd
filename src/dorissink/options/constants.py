"""
Default values applied by `ExecutionOptionsBuilder` when a setter is not called.
"""

DEFAULT_CHECK_INTERVAL = 10_000  # ms
DEFAULT_MAX_RETRY_TIMES = 1
DEFAULT_BUFFER_SIZE = 1024 * 1024  # 1 MiB
DEFAULT_BUFFER_COUNT = 3
DEFAULT_LABEL_PREFIX = ""
DEFAULT_ENABLE_DELETE = True
DEFAULT_ENABLE_2PC = True

# batch flush
DEFAULT_ENABLE_BATCH_MODE = False
DEFAULT_FLUSH_QUEUE_SIZE = 2
DEFAULT_BUFFER_FLUSH_MAX_ROWS = 50_000
DEFAULT_BUFFER_FLUSH_MAX_BYTES = 10 * 1024 * 1024  # 10 MiB
DEFAULT_BUFFER_FLUSH_INTERVAL_MS = 10 * 1000

# Sub-second flush intervals are rejected by the builder
MIN_BUFFER_FLUSH_INTERVAL_MS = 1000

# Stream load properties seeded by `ExecutionOptions.builder_defaults()`
DEFAULT_JSON_STREAM_LOAD_PROP = {
    "format": "json",
    "read_json_by_line": "true",
}
