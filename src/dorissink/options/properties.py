"""
Properties Module.

Maps the flat `sink.*` property map used to declare a sink (e.g. in a table
definition `WITH (...)` clause) onto `ExecutionOptionsBuilder` calls, and back.
Keys under `sink.properties.` are forwarded verbatim as stream load properties.
"""

from typing import Any, Callable, Dict, Mapping, Optional
import logging as log

from ..enum import SinkOptionKey, SINK_OPTION_NAMESPACE, STREAM_LOAD_PROP_PREFIX
from ..errors import IllegalStateError, _make_invalid_argument
from ..helpers import (
    extract_prefixed,
    format_duration_ms,
    parse_bool,
    parse_duration_ms,
    parse_int,
    with_prefix,
)
from .builder import ExecutionOptionsBuilder
from .execution_options import ExecutionOptions


def _apply_enable_2pc(builder: ExecutionOptionsBuilder, enabled: bool):
    if enabled:
        if not builder.is_2pc_enabled():
            raise IllegalStateError(
                f"'{SinkOptionKey.ENABLE_2PC}=true' requested but 2PC was already "
                "disabled on this builder."
            )
        return
    builder.disable_2pc()


def _apply_enable_batch_mode(builder: ExecutionOptionsBuilder, enabled: bool):
    if not enabled:
        if builder.is_batch_mode_enabled():
            raise IllegalStateError(
                f"'{SinkOptionKey.ENABLE_BATCH_MODE}=false' requested but batch mode "
                "was already enabled on this builder."
            )
        return
    builder.enable_batch_mode()


# Option key -> (value parser, builder update)
_KEY_HANDLERS: Dict[
    SinkOptionKey,
    tuple[Callable[[Any], Any], Callable[[ExecutionOptionsBuilder, Any], Any]],
] = {
    SinkOptionKey.CHECK_INTERVAL: (parse_int, ExecutionOptionsBuilder.set_check_interval),
    SinkOptionKey.MAX_RETRIES: (parse_int, ExecutionOptionsBuilder.set_max_retries),
    SinkOptionKey.BUFFER_SIZE: (parse_int, ExecutionOptionsBuilder.set_buffer_size),
    SinkOptionKey.BUFFER_COUNT: (parse_int, ExecutionOptionsBuilder.set_buffer_count),
    SinkOptionKey.LABEL_PREFIX: (str, ExecutionOptionsBuilder.set_label_prefix),
    SinkOptionKey.ENABLE_DELETE: (parse_bool, ExecutionOptionsBuilder.set_deletable),
    SinkOptionKey.ENABLE_2PC: (parse_bool, _apply_enable_2pc),
    SinkOptionKey.ENABLE_BATCH_MODE: (parse_bool, _apply_enable_batch_mode),
    SinkOptionKey.FLUSH_QUEUE_SIZE: (
        parse_int,
        ExecutionOptionsBuilder.set_flush_queue_size,
    ),
    SinkOptionKey.BUFFER_FLUSH_MAX_ROWS: (
        parse_int,
        ExecutionOptionsBuilder.set_buffer_flush_max_rows,
    ),
    SinkOptionKey.BUFFER_FLUSH_MAX_BYTES: (
        parse_int,
        ExecutionOptionsBuilder.set_buffer_flush_max_bytes,
    ),
    SinkOptionKey.BUFFER_FLUSH_INTERVAL: (
        parse_duration_ms,
        ExecutionOptionsBuilder.set_buffer_flush_interval_ms,
    ),
}


def builder_from_properties(
    props: Mapping[str, Any],
    base: Optional[ExecutionOptionsBuilder] = None,
) -> ExecutionOptionsBuilder:
    """
    Applies a flat property map to a builder.

    Keys outside the `sink.` namespace are ignored, unknown `sink.` keys are
    reported and ignored. When any `sink.properties.*` key is present, the
    collected entries replace the builder's stream load properties.

    Args:
        props (Mapping[str, Any]): The property map (values may be strings or
                                   already typed ints/bools).
        base (Optional[ExecutionOptionsBuilder]): Builder to update. A new
                                   plain builder is used if None.

    Returns:
        ExecutionOptionsBuilder: The updated builder.

    Raises:
        InvalidArgumentError: If a value cannot be parsed for its key.
        IllegalStateError: If a one-way toggle of `base` would have to be reverted,
                           or the flush interval is below one second.
    """
    builder = base if base is not None else ExecutionOptionsBuilder()

    for raw_key, raw_value in props.items():
        if not raw_key.startswith(SINK_OPTION_NAMESPACE):
            continue
        if raw_key.startswith(STREAM_LOAD_PROP_PREFIX):
            if raw_key == STREAM_LOAD_PROP_PREFIX:
                log.warning(
                    f"Stream load property '{raw_key}' has no name and is ignored."
                )
            continue

        try:
            key = SinkOptionKey(raw_key)
        except ValueError:
            log.warning(f"Unknown sink option '{raw_key}' ignored.")
            continue

        parser, apply = _KEY_HANDLERS[key]
        try:
            value = parser(raw_value)
        except ValueError as e:
            raise _make_invalid_argument(
                f"Invalid value {raw_value!r} for option '{key}'", e
            ) from e

        apply(builder, value)
        log.debug(f"Sink option '{key}' set to {value!r}")

    stream_load_prop = extract_prefixed(props, STREAM_LOAD_PROP_PREFIX)
    if stream_load_prop:
        builder.set_stream_load_prop(stream_load_prop)

    return builder


def to_properties(options: ExecutionOptions) -> Dict[str, str]:
    """
    Describes `options` as a flat `sink.*` property map.

    Feeding the result to `builder_from_properties()` rebuilds equal options.
    """
    props = {
        SinkOptionKey.CHECK_INTERVAL.value: str(options.check_interval),
        SinkOptionKey.MAX_RETRIES.value: str(options.max_retries),
        SinkOptionKey.BUFFER_SIZE.value: str(options.buffer_size),
        SinkOptionKey.BUFFER_COUNT.value: str(options.buffer_count),
        SinkOptionKey.LABEL_PREFIX.value: options.label_prefix,
        SinkOptionKey.ENABLE_DELETE.value: str(options.enable_delete).lower(),
        SinkOptionKey.ENABLE_2PC.value: str(options.enable_2pc).lower(),
        SinkOptionKey.ENABLE_BATCH_MODE.value: str(options.enable_batch_mode).lower(),
        SinkOptionKey.FLUSH_QUEUE_SIZE.value: str(options.flush_queue_size),
        SinkOptionKey.BUFFER_FLUSH_MAX_ROWS.value: str(options.buffer_flush_max_rows),
        SinkOptionKey.BUFFER_FLUSH_MAX_BYTES.value: str(options.buffer_flush_max_bytes),
        SinkOptionKey.BUFFER_FLUSH_INTERVAL.value: format_duration_ms(
            options.buffer_flush_interval_ms
        ),
    }
    props.update(with_prefix(options.stream_load_prop, STREAM_LOAD_PROP_PREFIX))
    return props
