from enum import StrEnum


# --- Centralized Option Keys ---
# Single source of truth for the flat property names accepted by the sink.
class SinkOptionKey(StrEnum):
    # Legacy (checkpoint driven) buffering
    CHECK_INTERVAL = "sink.check-interval"
    MAX_RETRIES = "sink.max-retries"
    BUFFER_SIZE = "sink.buffer-size"
    BUFFER_COUNT = "sink.buffer-count"
    # Labels and commit semantics
    LABEL_PREFIX = "sink.label-prefix"
    ENABLE_DELETE = "sink.enable-delete"
    ENABLE_2PC = "sink.enable-2pc"
    # Batch mode
    ENABLE_BATCH_MODE = "sink.enable.batch-mode"
    FLUSH_QUEUE_SIZE = "sink.flush.queue-size"
    BUFFER_FLUSH_MAX_ROWS = "sink.buffer-flush.max-rows"
    BUFFER_FLUSH_MAX_BYTES = "sink.buffer-flush.max-bytes"
    BUFFER_FLUSH_INTERVAL = "sink.buffer-flush.interval"


# Namespace shared by every sink option
SINK_OPTION_NAMESPACE = "sink."

# Keys under this prefix are passed verbatim to the stream load request
STREAM_LOAD_PROP_PREFIX = "sink.properties."
