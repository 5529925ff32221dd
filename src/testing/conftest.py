from typing import Dict
import pytest

from dorissink import ExecutionOptions


@pytest.fixture
def sink_properties() -> Dict[str, str]:
    """A full set of sink properties as found in a table definition."""
    return {
        "fenodes": "127.0.0.1:8030",  # connection option, not a sink option
        "sink.check-interval": "5000",
        "sink.max-retries": "3",
        "sink.buffer-size": "2097152",
        "sink.buffer-count": "4",
        "sink.label-prefix": "orders",
        "sink.enable-delete": "false",
        "sink.enable-2pc": "false",
        "sink.enable.batch-mode": "true",
        "sink.flush.queue-size": "4",
        "sink.buffer-flush.max-rows": "100000",
        "sink.buffer-flush.max-bytes": "20971520",
        "sink.buffer-flush.interval": "30s",
        "sink.properties.format": "csv",
        "sink.properties.column_separator": ",",
    }


@pytest.fixture
def batch_options() -> ExecutionOptions:
    """Options exercising every builder setter with non-default values."""
    return (
        ExecutionOptions.builder()
        .set_check_interval(3000)
        .set_max_retries(5)
        .set_buffer_size(512)
        .set_buffer_count(2)
        .set_label_prefix("events")
        .set_stream_load_prop({"format": "json", "strip_outer_array": "true"})
        .set_deletable(False)
        .disable_2pc()
        .enable_batch_mode()
        .set_flush_queue_size(8)
        .set_buffer_flush_max_rows(1000)
        .set_buffer_flush_max_bytes(4096)
        .set_buffer_flush_interval_ms(2000)
        .build()
    )
