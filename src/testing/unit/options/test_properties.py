import logging

import pytest

from dorissink import (
    ExecutionOptions,
    IllegalStateError,
    InvalidArgumentError,
    SinkOptionKey,
    builder_from_properties,
)


def test_full_property_map(sink_properties):
    options = ExecutionOptions.from_properties(sink_properties)

    assert options.check_interval == 5000
    assert options.max_retries == 3
    assert options.buffer_size == 2097152
    assert options.buffer_count == 4
    assert options.label_prefix == "orders"
    assert options.enable_delete is False
    assert options.enable_2pc is False
    assert options.enable_batch_mode is True
    assert options.flush_queue_size == 4
    assert options.buffer_flush_max_rows == 100000
    assert options.buffer_flush_max_bytes == 20971520
    assert options.buffer_flush_interval_ms == 30000
    assert options.stream_load_prop == {"format": "csv", "column_separator": ","}


def test_empty_property_map_yields_defaults():
    assert ExecutionOptions.from_properties({}) == ExecutionOptions.builder().build()


def test_typed_values_are_accepted():
    options = ExecutionOptions.from_properties(
        {
            "sink.max-retries": 4,
            "sink.enable-delete": False,
            "sink.buffer-flush.interval": 2000,
        }
    )
    assert options.max_retries == 4
    assert options.enable_delete is False
    assert options.buffer_flush_interval_ms == 2000


@pytest.mark.parametrize(
    "key, value",
    [
        ("sink.max-retries", "three"),
        ("sink.buffer-size", "1.5"),
        ("sink.enable-delete", "yes"),
        ("sink.enable-2pc", "1"),
        ("sink.buffer-flush.interval", "10 parsecs"),
    ],
)
def test_unparseable_value_names_the_key(key, value):
    with pytest.raises(InvalidArgumentError, match=key):
        builder_from_properties({key: value})


def test_negative_max_retries_fails_on_build():
    builder = builder_from_properties({"sink.max-retries": "-1"})
    with pytest.raises(InvalidArgumentError):
        builder.build()


def test_sub_second_interval_fails_fast():
    with pytest.raises(IllegalStateError):
        builder_from_properties({"sink.buffer-flush.interval": "500ms"})


def test_unknown_sink_option_is_ignored_with_warning(caplog):
    with caplog.at_level(logging.WARNING):
        options = ExecutionOptions.from_properties({"sink.unknown-knob": "1"})

    assert options == ExecutionOptions.builder().build()
    assert "sink.unknown-knob" in caplog.text


def test_options_outside_sink_namespace_are_ignored(caplog):
    with caplog.at_level(logging.WARNING):
        options = ExecutionOptions.from_properties(
            {"fenodes": "127.0.0.1:8030", "table.identifier": "db.tbl"}
        )

    assert options == ExecutionOptions.builder().build()
    assert caplog.text == ""


def test_enable_flags_follow_their_defaults_when_true_or_false():
    options = ExecutionOptions.from_properties(
        {"sink.enable-2pc": "true", "sink.enable.batch-mode": "false"}
    )
    assert options.enable_2pc is True
    assert options.enable_batch_mode is False


def test_base_builder_is_updated():
    base = ExecutionOptions.builder_defaults().set_label_prefix("base")
    builder = builder_from_properties({"sink.max-retries": "2"}, base=base)

    assert builder is base
    options = builder.build()
    assert options.label_prefix == "base"
    assert options.max_retries == 2
    assert options.stream_load_prop == {"format": "json", "read_json_by_line": "true"}


def test_stream_load_properties_replace_base_ones():
    base = ExecutionOptions.builder_defaults()
    options = builder_from_properties(
        {"sink.properties.format": "csv", "sink.properties.": "dropped"}, base=base
    ).build()
    assert options.stream_load_prop == {"format": "csv"}


def test_one_way_toggles_cannot_be_reverted():
    with pytest.raises(IllegalStateError, match="2PC"):
        builder_from_properties(
            {"sink.enable-2pc": "true"}, base=ExecutionOptions.builder().disable_2pc()
        )

    with pytest.raises(IllegalStateError, match="batch mode"):
        builder_from_properties(
            {"sink.enable.batch-mode": "false"},
            base=ExecutionOptions.builder().enable_batch_mode(),
        )


def test_to_properties(batch_options):
    props = batch_options.to_properties()

    assert props[SinkOptionKey.LABEL_PREFIX.value] == "events"
    assert props[SinkOptionKey.ENABLE_2PC.value] == "false"
    assert props[SinkOptionKey.ENABLE_BATCH_MODE.value] == "true"
    assert props[SinkOptionKey.BUFFER_FLUSH_INTERVAL.value] == "2000ms"
    assert props["sink.properties.strip_outer_array"] == "true"
    assert all(isinstance(v, str) for v in props.values())


def test_to_properties_rebuilds_equal_options(batch_options):
    assert ExecutionOptions.from_properties(batch_options.to_properties()) == batch_options
    defaults = ExecutionOptions.defaults()
    assert ExecutionOptions.from_properties(defaults.to_properties()) == defaults


def test_unnamed_stream_load_property_is_reported(caplog):
    with caplog.at_level(logging.WARNING):
        options = ExecutionOptions.from_properties(
            {"sink.properties.": "dropped", "sink.properties.format": "csv"}
        )

    assert options.stream_load_prop == {"format": "csv"}
    assert "has no name" in caplog.text
