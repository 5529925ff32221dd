import json
import pickle

import pydantic
import pytest

from dorissink import BufferingMode, ExecutionOptions, InvalidArgumentError

# -----------------------------------------------------------------------------
# Construction
# -----------------------------------------------------------------------------


def test_direct_construction_applies_defaults():
    assert ExecutionOptions() == ExecutionOptions.builder().build()


def test_direct_construction_rejects_negative_max_retries():
    with pytest.raises(InvalidArgumentError, match="max_retries"):
        ExecutionOptions(max_retries=-1)


def test_direct_construction_rejects_unknown_fields():
    with pytest.raises(InvalidArgumentError):
        ExecutionOptions(max_retry=3)


def test_direct_construction_rejects_wrong_types():
    with pytest.raises(InvalidArgumentError):
        ExecutionOptions(enable_2pc="yes")


def test_options_are_frozen():
    options = ExecutionOptions.defaults()
    with pytest.raises(pydantic.ValidationError):
        options.max_retries = 5


def test_value_equality(batch_options):
    rebuilt = ExecutionOptions(**batch_options.model_dump())
    assert rebuilt == batch_options
    assert rebuilt != ExecutionOptions.defaults()


# -----------------------------------------------------------------------------
# Derived views
# -----------------------------------------------------------------------------


def test_buffering_mode():
    assert ExecutionOptions.defaults().buffering_mode == BufferingMode.Checkpoint
    assert (
        ExecutionOptions.builder().enable_batch_mode().build().buffering_mode
        == BufferingMode.Batch
    )


# -----------------------------------------------------------------------------
# Snapshot (checkpoint state)
# -----------------------------------------------------------------------------


def test_json_snapshot_restores_equal_options(batch_options):
    restored = ExecutionOptions.from_json(batch_options.to_json())
    assert restored == batch_options


def test_json_snapshot_layout(batch_options):
    data = json.loads(batch_options.to_json())
    assert list(data) == [
        "check_interval",
        "max_retries",
        "buffer_size",
        "buffer_count",
        "label_prefix",
        "stream_load_prop",
        "enable_delete",
        "enable_2pc",
        "enable_batch_mode",
        "flush_queue_size",
        "buffer_flush_max_rows",
        "buffer_flush_max_bytes",
        "buffer_flush_interval_ms",
    ]
    assert data["label_prefix"] == "events"
    assert data["stream_load_prop"] == {"format": "json", "strip_outer_array": "true"}
    assert data["enable_2pc"] is False


def test_json_snapshot_accepts_bytes():
    options = ExecutionOptions.defaults()
    assert ExecutionOptions.from_json(options.to_json().encode("utf-8")) == options


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        '{"max_retries": -1}',
        '{"max_retries": "3"}',
        '{"unexpected": 1}',
    ],
)
def test_invalid_json_snapshot_fails(payload):
    with pytest.raises(InvalidArgumentError, match="snapshot"):
        ExecutionOptions.from_json(payload)


def test_pickle_restores_equal_options(batch_options):
    restored = pickle.loads(pickle.dumps(batch_options))
    assert restored == batch_options
    assert restored.buffering_mode == BufferingMode.Batch


# -----------------------------------------------------------------------------
# Read-only stream load properties
# -----------------------------------------------------------------------------


def test_stream_load_prop_cannot_be_mutated_after_build():
    options = ExecutionOptions.defaults()
    snapshot = options.to_json()

    with pytest.raises(TypeError):
        options.stream_load_prop["format"] = "csv"
    with pytest.raises(TypeError):
        del options.stream_load_prop["format"]

    assert options.stream_load_prop == {"format": "json", "read_json_by_line": "true"}
    assert options.to_json() == snapshot


def test_default_stream_load_prop_is_read_only():
    with pytest.raises(TypeError):
        ExecutionOptions().stream_load_prop["format"] = "csv"


def test_stream_load_prop_stays_read_only_after_restore(batch_options):
    restored_from_json = ExecutionOptions.from_json(batch_options.to_json())
    restored_from_pickle = pickle.loads(pickle.dumps(batch_options))

    for restored in (restored_from_json, restored_from_pickle):
        with pytest.raises(TypeError):
            restored.stream_load_prop["format"] = "csv"
        assert restored.stream_load_prop == batch_options.stream_load_prop


def test_options_built_from_another_instance_stream_load_prop(batch_options):
    copied = ExecutionOptions(stream_load_prop=batch_options.stream_load_prop)
    assert copied.stream_load_prop == batch_options.stream_load_prop
    assert copied.model_dump()["stream_load_prop"] == {
        "format": "json",
        "strip_outer_array": "true",
    }


# -----------------------------------------------------------------------------
# Flush interval floor on every construction path
# -----------------------------------------------------------------------------


@pytest.mark.parametrize("interval_ms", [0, 500, 999])
def test_direct_construction_rejects_sub_second_flush_interval(interval_ms):
    with pytest.raises(InvalidArgumentError, match="buffer_flush_interval_ms"):
        ExecutionOptions(buffer_flush_interval_ms=interval_ms)


def test_snapshot_rejects_sub_second_flush_interval():
    with pytest.raises(InvalidArgumentError, match="snapshot"):
        ExecutionOptions.from_json('{"buffer_flush_interval_ms": 500}')


def test_direct_construction_accepts_one_second_flush_interval():
    options = ExecutionOptions(buffer_flush_interval_ms=1000)
    assert ExecutionOptions.from_properties(options.to_properties()) == options
